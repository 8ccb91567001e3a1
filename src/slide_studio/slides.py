"""
Slide mutators: add, clone and delete.

Every mutator follows the same sequence: resolve what it needs through the
inventory, check the precondition, allocate ids, write the slide parts, then
register the slide in presentation.xml.rels, presentation.xml and
[Content_Types].xml.
"""

from pptx.oxml.ns import qn
from copy import deepcopy
from dataclasses import dataclass
import logging

from .constants import CHROME_PLACEHOLDERS, REL_NOTES_SLIDE, TITLE_PLACEHOLDERS
from .content_types import add_slide_content_type, remove_slide_content_type
from .errors import NotFoundError
from .ids import ShapeIdAllocator, SlideIdAllocator, SlideNumberAllocator
from .inventory import get_slide, layout_name, read_layout_placeholders
from .oxml import find_sp_tree, offset_ids_in_tree, parse_fragment, splice_shape
from .package import as_package, layout_part, rels_part_for, slide_part, slide_rels_part
from .presentation import insert_slide_id, remove_slide_id
from .relationships import add_layout_relationship, add_slide_relationship, remove_relationship

logger = logging.getLogger(__name__)

EMPTY_SLIDE_XML = (
    '<p:sld {nsdecls}>'
    '<p:cSld><p:spTree>'
    '<p:nvGrpSpPr><p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr>'
    '<p:grpSpPr><a:xfrm><a:off x="0" y="0"/><a:ext cx="0" cy="0"/>'
    '<a:chOff x="0" y="0"/><a:chExt cx="0" cy="0"/></a:xfrm></p:grpSpPr>'
    '</p:spTree></p:cSld>'
    '<p:clrMapOvr><a:masterClrMapping/></p:clrMapOvr>'
    '</p:sld>'
)

PLACEHOLDER_SHAPE_XML = (
    '<p:sp {nsdecls}>'
    '<p:nvSpPr><p:cNvPr id="0" name=""/>'
    '<p:cNvSpPr><a:spLocks noGrp="1"/></p:cNvSpPr>'
    '<p:nvPr><p:ph/></p:nvPr></p:nvSpPr>'
    '<p:spPr/>'
    '<p:txBody><a:bodyPr/><a:lstStyle/>'
    '<a:p><a:r><a:rPr lang="en-US" dirty="0"/><a:t/></a:r></a:p>'
    '</p:txBody>'
    '</p:sp>'
)

# Every cloned id is shifted by CLONE_ID_BASE + new slide number * CLONE_ID_STEP
CLONE_ID_BASE = 1000
CLONE_ID_STEP = 100


@dataclass
class SlideRef:
    """Identifiers of a slide a mutator just created."""

    slide_num: int
    slide_id: int
    r_id: str


# ----------------------------------------------------------------------------
# Slide markup
# ----------------------------------------------------------------------------

def sample_text(ph_type, name):
    """Placeholder text for a new slide; '' means the placeholder is not generated."""
    if ph_type in TITLE_PLACEHOLDERS:
        return name or 'Title'
    if ph_type == 'subTitle':
        return 'Subtitle'
    if ph_type == 'body':
        return 'Body text'
    if ph_type in CHROME_PLACEHOLDERS or ph_type == 'pic':
        return ''
    return 'Content'


def build_placeholder_shape(shape_id, name, placeholder, text):
    """A p:sp bound to a layout placeholder, holding one run of text."""
    sp = parse_fragment(PLACEHOLDER_SHAPE_XML)
    c_nv_pr = sp.find(f"{qn('p:nvSpPr')}/{qn('p:cNvPr')}")
    c_nv_pr.set('id', str(shape_id))
    c_nv_pr.set('name', name)

    ph = sp.find(f"{qn('p:nvSpPr')}/{qn('p:nvPr')}/{qn('p:ph')}")
    for attr, value in (('type', placeholder.type), ('sz', placeholder.sz), ('idx', placeholder.idx)):
        if value:
            ph.set(attr, value)

    sp.find(f".//{qn('a:t')}").text = text
    return sp


def build_slide(placeholders, name):
    """
    Build slide markup with one shape per content placeholder of a layout.

    Date, footer and slide-number placeholders are left to the layout and
    master, and placeholders without sample text (pictures) are skipped.
    """
    slide = parse_fragment(EMPTY_SLIDE_XML)
    sp_tree = find_sp_tree(slide)
    shape_ids = ShapeIdAllocator()

    for placeholder in placeholders:
        if placeholder.type in CHROME_PLACEHOLDERS:
            continue
        text = sample_text(placeholder.type, name)
        if not text:
            continue
        shape_id = shape_ids.allocate()
        shape_name = f'{placeholder.type} {shape_id - 1}' if placeholder.type else f'Shape {shape_id - 1}'
        splice_shape(sp_tree, build_placeholder_shape(shape_id, shape_name, placeholder, text))

    return slide


# ----------------------------------------------------------------------------
# Registration
# ----------------------------------------------------------------------------

def _register_slide(package, slide_num, position):
    """Add a written slide part to presentation.xml.rels, p:sldIdLst and the content types."""
    presentation_rels = package.read_presentation_rels()
    r_id = add_slide_relationship(presentation_rels, slide_num)
    package.write_presentation_rels(presentation_rels)

    presentation = package.read_presentation()
    slide_id = SlideIdAllocator.for_presentation(presentation).allocate()
    insert_slide_id(presentation, slide_id, r_id, position)
    package.write_presentation(presentation)

    registry = package.read_content_types()
    add_slide_content_type(registry, slide_num)
    package.write_content_types(registry)

    return SlideRef(slide_num, slide_id, r_id)


# ----------------------------------------------------------------------------
# Mutators
# ----------------------------------------------------------------------------

def add_slide(package, layout, position=None):
    """
    Add a slide based on a slide layout.

    Args:
        package: Package or path to an unpacked package
        layout: Layout number (slideLayoutN.xml)
        position: 1-based position in presentation order, None to append

    Returns:
        SlideRef of the new slide

    Raises:
        NotFoundError: the layout does not exist
    """
    package = as_package(package)
    part = layout_part(layout)
    if not package.exists(part):
        raise NotFoundError(f'Layout {layout} not found: {package.path(part)}')

    layout_root = package.read_xml(part)
    slide = build_slide(read_layout_placeholders(layout_root), layout_name(layout_root, layout))

    slide_num = SlideNumberAllocator.for_package(package).allocate()
    package.write_xml(slide_part(slide_num), slide)

    slide_rels = []
    add_layout_relationship(slide_rels, layout)
    package.write_rels(slide_rels_part(slide_num), slide_rels)

    ref = _register_slide(package, slide_num, position)
    logger.info(f'Added slide {slide_num} using layout {layout}')
    return ref


def clone_slide(package, source, position=None):
    """
    Duplicate the slide at a position.

    The copy keeps the source's layout and other relationships. Every numeric
    id in the copy is shifted by 1000 + new slide number * 100, which keeps
    ids unique within the copy and keeps connector references consistent.
    Notes slides are not carried over.

    Args:
        package: Package or path to an unpacked package
        source: 1-based position of the slide to copy
        position: 1-based position of the copy, None to append

    Returns:
        SlideRef of the copy

    Raises:
        NotFoundError: no slide at the source position, or its part is missing
    """
    package = as_package(package)
    entry = get_slide(package, source)
    if not package.exists(entry.part):
        raise NotFoundError(f'Slide part not found: {package.path(entry.part)}')

    slide_num = SlideNumberAllocator.for_package(package).allocate()

    slide = deepcopy(package.read_xml(entry.part))
    offset_ids_in_tree(slide, CLONE_ID_BASE + slide_num * CLONE_ID_STEP)
    package.write_xml(slide_part(slide_num), slide)

    source_rels_part = rels_part_for(entry.part)
    if package.exists(source_rels_part):
        slide_rels = [rel for rel in package.read_rels(source_rels_part) if rel.type != REL_NOTES_SLIDE]
        package.write_rels(slide_rels_part(slide_num), slide_rels)

    ref = _register_slide(package, slide_num, position)
    logger.info(f'Cloned slide {source} to new slide {slide_num}')
    return ref


def delete_slide(package, position):
    """
    Delete the slide at a position.

    Removes the slide part, its .rels, its presentation relationship, its
    p:sldId entry and its content-type override. Parts that are already gone
    are not an error.

    Returns:
        SlideEntry of the deleted slide

    Raises:
        NotFoundError: no slide at that position
    """
    package = as_package(package)
    entry = get_slide(package, position)

    package.remove(entry.part)
    package.remove(rels_part_for(entry.part))

    presentation_rels = package.read_presentation_rels()
    remove_relationship(presentation_rels, entry.r_id)
    package.write_presentation_rels(presentation_rels)

    presentation = package.read_presentation()
    remove_slide_id(presentation, entry.r_id)
    package.write_presentation(presentation)

    registry = package.read_content_types()
    remove_slide_content_type(registry, entry.slide_num)
    package.write_content_types(registry)

    logger.info(f'Deleted slide {position} ({entry.part.rsplit("/", 1)[-1]})')
    return entry
