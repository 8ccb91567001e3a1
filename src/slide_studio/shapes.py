"""
Shape and picture mutators.

Geometry arguments are EMU. Colours are either a theme colour name (dk1, lt1,
accent1, ...) or an RGB hex string such as 'FF0000' or '#FF0000'.
"""

from pptx.oxml.ns import qn
from dataclasses import dataclass
import logging
import os
import re

from .constants import EMU_PER_INCH, EMU_PER_PT, EMU_PER_PX, MEDIA_DIR, THEME_COLORS
from .content_types import ensure_image_type, normalize_extension
from .errors import NotFoundError
from .ids import ShapeIdAllocator
from .images import image_size
from .inventory import get_slide
from .oxml import find_sp_tree, parse_fragment, splice_shape
from .package import as_package, rels_part_for
from .relationships import add_image_relationship

logger = logging.getLogger(__name__)

HEX_COLOR_RE = re.compile(r'^#?([0-9A-Fa-f]{6})$')

ALIGNMENTS = {'left': 'l', 'center': 'ctr', 'right': 'r'}

SHAPE_KINDS = {
    'textbox': 'textbox',
    'text': 'textbox',
    'rect': 'rect',
    'rectangle': 'rect',
}

TEXTBOX_XML = (
    '<p:sp {nsdecls}>'
    '<p:nvSpPr><p:cNvPr id="{id}" name="TextBox {id}"/><p:cNvSpPr txBox="1"/><p:nvPr/></p:nvSpPr>'
    '<p:spPr>'
    '<a:xfrm><a:off x="{x}" y="{y}"/><a:ext cx="{cx}" cy="{cy}"/></a:xfrm>'
    '<a:prstGeom prst="rect"><a:avLst/></a:prstGeom>'
    '</p:spPr>'
    '<p:txBody><a:bodyPr wrap="square" rtlCol="0"/><a:lstStyle/>'
    '<a:p><a:pPr algn="{algn}"/><a:r><a:rPr lang="en-US" sz="{sz}" dirty="0"/><a:t/></a:r></a:p>'
    '</p:txBody>'
    '</p:sp>'
)

RECT_XML = (
    '<p:sp {nsdecls}>'
    '<p:nvSpPr><p:cNvPr id="{id}" name="Rectangle {id}"/><p:cNvSpPr/><p:nvPr/></p:nvSpPr>'
    '<p:spPr>'
    '<a:xfrm><a:off x="{x}" y="{y}"/><a:ext cx="{cx}" cy="{cy}"/></a:xfrm>'
    '<a:prstGeom prst="rect"><a:avLst/></a:prstGeom>'
    '</p:spPr>'
    '</p:sp>'
)

PICTURE_XML = (
    '<p:pic {nsdecls}>'
    '<p:nvPicPr><p:cNvPr id="{id}" name="Picture {id}"/>'
    '<p:cNvPicPr><a:picLocks noChangeAspect="1"/></p:cNvPicPr><p:nvPr/></p:nvPicPr>'
    '<p:blipFill><a:blip r:embed="{r_id}"/><a:stretch><a:fillRect/></a:stretch></p:blipFill>'
    '<p:spPr>'
    '<a:xfrm><a:off x="{x}" y="{y}"/><a:ext cx="{cx}" cy="{cy}"/></a:xfrm>'
    '<a:prstGeom prst="rect"><a:avLst/></a:prstGeom>'
    '</p:spPr>'
    '</p:pic>'
)


@dataclass
class PictureRef:
    """What add_image created: media file name, slide relationship id and shape id."""

    media_name: str
    r_id: str
    shape_id: int


# ----------------------------------------------------------------------------
# Fills and colours
# ----------------------------------------------------------------------------

def color_element(parent, color):
    """Append an a:schemeClr or a:srgbClr for `color` to `parent`."""
    if color in THEME_COLORS:
        elem = parent.makeelement(qn('a:schemeClr'), {'val': color})
    else:
        match = HEX_COLOR_RE.match(color or '')
        if match is None:
            raise ValueError(
                f'Invalid color: {color!r}. Use a theme color ({", ".join(THEME_COLORS)}) or RGB hex'
            )
        elem = parent.makeelement(qn('a:srgbClr'), {'val': match.group(1).upper()})
    parent.append(elem)
    return elem


def fill_element(parent, color):
    """Append a:solidFill for `color`, or a:noFill when color is None."""
    if color is None:
        fill = parent.makeelement(qn('a:noFill'), {})
        parent.append(fill)
        return fill
    fill = parent.makeelement(qn('a:solidFill'), {})
    parent.append(fill)
    color_element(fill, color)
    return fill


def line_element(parent, color=None, width=EMU_PER_PT):
    """Append a:ln; without a colour the outline is hidden."""
    ln = parent.makeelement(qn('a:ln'), {'w': str(int(width))} if color else {})
    parent.append(ln)
    fill_element(ln, color)
    return ln


# ----------------------------------------------------------------------------
# Shape markup
# ----------------------------------------------------------------------------

def build_textbox(shape_id, x, y, width, height, text='', color='dk1', fill=None,
                  font_size=18, bold=False, italic=False, align='left'):
    """Text box shape with a single run of text."""
    sp = parse_fragment(
        TEXTBOX_XML, id=shape_id, x=int(x), y=int(y), cx=int(width), cy=int(height),
        algn=ALIGNMENTS.get(align, 'l'), sz=int(round(font_size * 100)),
    )
    fill_element(sp.find(qn('p:spPr')), fill)
    line_element(sp.find(qn('p:spPr')))

    r_pr = sp.find(f".//{qn('a:rPr')}")
    if bold:
        r_pr.set('b', '1')
    if italic:
        r_pr.set('i', '1')
    fill_element(r_pr, color)

    sp.find(f".//{qn('a:t')}").text = text
    return sp


def build_rect(shape_id, x, y, width, height, fill='accent1', stroke=None, stroke_width=EMU_PER_PT):
    sp = parse_fragment(RECT_XML, id=shape_id, x=int(x), y=int(y), cx=int(width), cy=int(height))
    sp_pr = sp.find(qn('p:spPr'))
    fill_element(sp_pr, fill)
    line_element(sp_pr, stroke, stroke_width)
    return sp


def build_picture(shape_id, r_id, x, y, width, height):
    return parse_fragment(
        PICTURE_XML, id=shape_id, r_id=r_id, x=int(x), y=int(y), cx=int(width), cy=int(height)
    )


# ----------------------------------------------------------------------------
# Mutators
# ----------------------------------------------------------------------------

def _read_slide(package, position):
    entry = get_slide(package, position)
    if not package.exists(entry.part):
        raise NotFoundError(f'Slide not found: {package.path(entry.part)}')
    return entry, package.read_xml(entry.part)


def add_shape(package, position, kind, x=EMU_PER_INCH, y=EMU_PER_INCH,
              width=4 * EMU_PER_INCH, height=EMU_PER_INCH, text='', color='dk1',
              fill=None, font_size=18, bold=False, italic=False, align='left',
              stroke=None, stroke_width=EMU_PER_PT):
    """
    Add a text box or rectangle to a slide.

    Args:
        package: Package or path to an unpacked package
        position: 1-based slide position
        kind: 'textbox'/'text' or 'rect'/'rectangle'
        x, y, width, height: Geometry in EMU
        text, color, font_size, bold, italic, align: Text box only. font_size
            is in points
        fill: Fill colour. Text boxes default to no fill, rectangles to accent1
        stroke, stroke_width: Rectangle outline colour and width (EMU)

    Returns:
        The new shape id

    Raises:
        ValueError: unknown kind or colour
        NotFoundError: no slide at that position
    """
    shape_kind = SHAPE_KINDS.get(kind)
    if shape_kind is None:
        raise ValueError(f'Unknown shape type: {kind}. Use: textbox, rect')

    package = as_package(package)
    entry, slide = _read_slide(package, position)
    shape_id = ShapeIdAllocator.for_slide(slide).allocate()

    if shape_kind == 'textbox':
        shape = build_textbox(
            shape_id, x, y, width, height, text=text, color=color, fill=fill,
            font_size=font_size, bold=bold, italic=italic, align=align,
        )
    else:
        shape = build_rect(
            shape_id, x, y, width, height, fill=fill or 'accent1',
            stroke=stroke, stroke_width=stroke_width,
        )

    splice_shape(find_sp_tree(slide), shape)
    package.write_xml(entry.part, slide)

    logger.info(f'Added {kind} (id={shape_id}) to slide {position}')
    return shape_id


def next_media_name(package, extension):
    """
    Next image{n}.{ext} name in ppt/media.

    n starts at the number of files named image* plus one and is bumped until
    the name is free.
    """
    existing = package.list_dir(MEDIA_DIR)
    n = len([name for name in existing if name.startswith('image')]) + 1
    suffix = f'.{extension}' if extension else ''
    while f'image{n}{suffix}' in existing:
        n += 1
    return f'image{n}{suffix}'


def add_image(package, position, image_path, x=EMU_PER_INCH, y=EMU_PER_INCH, width=None, height=None):
    """
    Add a picture to a slide.

    The image is copied into ppt/media, related from the slide's .rels and its
    extension declared in [Content_Types].xml.

    Args:
        package: Package or path to an unpacked package
        position: 1-based slide position
        image_path: Path to the image file
        x, y: Offset in EMU
        width, height: Size in EMU; each defaults to the pixel size at 96 DPI

    Returns:
        PictureRef

    Raises:
        NotFoundError: the image file or the slide does not exist
    """
    image_path = os.path.abspath(image_path)
    if not os.path.isfile(image_path):
        raise NotFoundError(f'Image file not found: {image_path}')

    package = as_package(package)
    entry, slide = _read_slide(package, position)

    extension = normalize_extension(os.path.splitext(image_path)[1])
    media_name = next_media_name(package, extension)
    with open(image_path, 'rb') as f:
        package.write_bytes(f'{MEDIA_DIR}/{media_name}', f.read())

    px_width, px_height = image_size(image_path)
    width = width or px_width * EMU_PER_PX
    height = height or px_height * EMU_PER_PX

    rels_part = rels_part_for(entry.part)
    slide_rels = package.read_rels(rels_part)
    r_id = add_image_relationship(slide_rels, media_name)
    package.write_rels(rels_part, slide_rels)

    shape_id = ShapeIdAllocator.for_slide(slide).allocate()
    splice_shape(find_sp_tree(slide), build_picture(shape_id, r_id, x, y, width, height))
    package.write_xml(entry.part, slide)

    registry = package.read_content_types()
    ensure_image_type(registry, extension)
    package.write_content_types(registry)

    logger.info(f'Added image to slide {position}: {media_name}')
    return PictureRef(media_name, r_id, shape_id)
