"""
ASCII rendering of a slide's shape boxes, for checking layout from a terminal.
"""

from pptx.oxml.ns import qn
from pptx.util import Emu
from dataclasses import dataclass
from typing import Optional
import logging

from .constants import REL_SLIDE_LAYOUT
from .errors import NotFoundError
from .inventory import get_slide, resolve_target
from .oxml import get_placeholder_info, get_shape_name, iter_texts
from .package import as_package, rels_part_for
from .presentation import get_slide_size
from .relationships import find_by_type

logger = logging.getLogger(__name__)

GRID_WIDTH = 72
GRID_HEIGHT = 24
TEXT_PREVIEW_LENGTH = 30
RULE = '-' * 70

VISIBLE_TAGS = (qn('p:sp'), qn('p:pic'))


@dataclass
class ShapeBox:
    number: int
    name: str
    x: int
    y: int
    width: int
    height: int
    ph_type: Optional[str] = None
    text: str = ''


# ----------------------------------------------------------------------------
# Shape extraction
# ----------------------------------------------------------------------------

def _xfrm_geometry(shape):
    """(x, y, cx, cy) from the shape's own a:xfrm, or None."""
    xfrm = shape.find(f"{qn('p:spPr')}/{qn('a:xfrm')}")
    if xfrm is None:
        return None
    off, ext = xfrm.find(qn('a:off')), xfrm.find(qn('a:ext'))
    if off is None or ext is None:
        return None
    return (
        int(off.get('x', 0)), int(off.get('y', 0)),
        int(ext.get('cx', 0)), int(ext.get('cy', 0)),
    )


def _layout_geometry(layout_root):
    """Placeholder geometry of a layout keyed by type and by idx."""
    geometry = {}
    if layout_root is None:
        return geometry
    for sp in layout_root.iter(qn('p:sp')):
        info = get_placeholder_info(sp)
        box = _xfrm_geometry(sp)
        if info is None or box is None:
            continue
        if info.type:
            geometry.setdefault(('type', info.type), box)
        if info.idx:
            geometry.setdefault(('idx', info.idx), box)
    return geometry


def extract_shapes(slide_root, layout_root=None):
    """
    ShapeBox for each p:sp and p:pic on a slide, numbered from 1 in document order.

    Placeholders without their own a:xfrm take the geometry of the matching
    layout placeholder when a layout is given.
    """
    inherited = _layout_geometry(layout_root)
    shapes = []
    for elem in slide_root.iter(*VISIBLE_TAGS):
        number = len(shapes) + 1
        info = get_placeholder_info(elem)
        box = _xfrm_geometry(elem)
        if box is None and info is not None:
            box = inherited.get(('type', info.type)) or inherited.get(('idx', info.idx))
        x, y, cx, cy = box or (0, 0, 0, 0)
        text = ' '.join(iter_texts(elem))[:TEXT_PREVIEW_LENGTH].strip()
        shapes.append(ShapeBox(
            number=number,
            name=get_shape_name(elem) or f'Shape {number}',
            x=x, y=y, width=cx, height=cy,
            ph_type=info.type if info is not None else None,
            text=text,
        ))
    return shapes


# ----------------------------------------------------------------------------
# Rendering
# ----------------------------------------------------------------------------

def _to_grid(x, y, slide_size):
    gx = round(x / slide_size[0] * GRID_WIDTH)
    gy = round(y / slide_size[1] * GRID_HEIGHT)
    return min(gx, GRID_WIDTH - 1), min(gy, GRID_HEIGHT - 1)


def _inches(emu):
    return f'{Emu(emu).inches:.2f}'


def render_grid(shapes, slide_size):
    grid = [[' '] * GRID_WIDTH for _ in range(GRID_HEIGHT)]

    for x in range(GRID_WIDTH):
        grid[0][x] = grid[GRID_HEIGHT - 1][x] = '-'
    for y in range(GRID_HEIGHT):
        grid[y][0] = grid[y][GRID_WIDTH - 1] = '|'
    for y, x in ((0, 0), (0, GRID_WIDTH - 1), (GRID_HEIGHT - 1, 0), (GRID_HEIGHT - 1, GRID_WIDTH - 1)):
        grid[y][x] = '+'

    for shape in shapes:
        sx, sy = _to_grid(shape.x, shape.y, slide_size)
        ex, ey = _to_grid(shape.x + shape.width, shape.y + shape.height, slide_size)
        x1, x2 = (max(1, min(v, GRID_WIDTH - 2)) for v in (sx, ex))
        y1, y2 = (max(1, min(v, GRID_HEIGHT - 2)) for v in (sy, ey))

        for x in range(x1, x2 + 1):
            grid[y1][x] = grid[y2][x] = '-'
        for y in range(y1, y2 + 1):
            grid[y][x1] = grid[y][x2] = '|'
        for y, x in ((y1, x1), (y1, x2), (y2, x1), (y2, x2)):
            grid[y][x] = '+'

        label = f'[{shape.number}]'
        cx, cy = (x1 + x2) // 2, (y1 + y2) // 2
        for i, char in enumerate(label):
            if cx + i >= GRID_WIDTH - 1:
                break
            grid[cy][cx + i] = char

    return '\n'.join(''.join(row) for row in grid)


def _aspect_label(slide_size):
    width, height = slide_size
    if width * 9 == height * 16:
        return ' (16:9)'
    if width * 3 == height * 4:
        return ' (4:3)'
    return ''


def render_legend(shapes, slide_size):
    lines = ['', 'Shapes:', RULE]
    for shape in shapes:
        ph = f' [{shape.ph_type}]' if shape.ph_type else ''
        lines.append(f'[{shape.number}] {shape.name}{ph}')
        lines.append(
            f'    Position: ({_inches(shape.x)}", {_inches(shape.y)}")  '
            f'Size: {_inches(shape.width)}" x {_inches(shape.height)}"'
        )
        if shape.text:
            lines.append(f'    Text: "{shape.text}..."')
    lines.append(RULE)
    lines.append(f'Slide: {_inches(slide_size[0])}" x {_inches(slide_size[1])}"{_aspect_label(slide_size)}')
    return '\n'.join(lines)


def _read_layout(package, slide_part_name):
    for rel in find_by_type(package.read_rels(rels_part_for(slide_part_name)), REL_SLIDE_LAYOUT):
        part = resolve_target(slide_part_name.rsplit('/', 1)[0], rel.target)
        if package.exists(part):
            return package.read_xml(part)
    return None


def visualize_slide(package, position=1):
    """
    Render the slide at a position as an ASCII box diagram plus a legend.

    Returns:
        The rendered text

    Raises:
        NotFoundError: no slide at that position
    """
    package = as_package(package)
    entry = get_slide(package, position)
    if not package.exists(entry.part):
        raise NotFoundError(f'Slide not found: {package.path(entry.part)}')

    slide_size = get_slide_size(package.read_presentation())
    shapes = extract_shapes(package.read_xml(entry.part), _read_layout(package, entry.part))
    logger.debug(f'Slide {position}: {len(shapes)} shapes')

    return '\n'.join([
        f'Slide {position} Layout:',
        render_grid(shapes, slide_size),
        render_legend(shapes, slide_size),
    ])
