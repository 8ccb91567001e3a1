"""
Slide and layout inventory.

Positions are 1-based presentation order, taken from p:sldIdLst. A position
is turned into a slide file through the chain

    p:sldId (id, r:id) -> presentation.xml.rels -> ppt/slides/slideN.xml

and never by assuming that position N lives in slideN.xml.
"""

from pptx.oxml.ns import qn
from dataclasses import dataclass, field
from typing import List, Optional
import logging
import posixpath
import re

from .constants import (
    LAYOUTS_DIR,
    PRESENTATION_PART,
    REL_SLIDE_LAYOUT,
    TITLE_PLACEHOLDERS,
)
from .errors import NotFoundError, PackageStructureError
from .oxml import get_placeholder_info, iter_texts
from .package import as_package, layout_part, rels_part_for
from .presentation import get_slide_id_list
from .relationships import find_by_id, find_by_type

logger = logging.getLogger(__name__)

TRAILING_NUMBER_RE = re.compile(r'(\d+)\.xml$')
LAYOUT_FILE_RE = re.compile(r'^slideLayout(\d+)\.xml$')
NO_TITLE = '(no title)'
TITLE_FALLBACK_LENGTH = 50


@dataclass
class SlideEntry:
    position: int
    slide_num: int
    slide_id: int
    r_id: str
    part: str
    title: str = NO_TITLE
    layout_index: Optional[int] = None


@dataclass
class LayoutEntry:
    index: int
    name: str
    file: str
    placeholders: List[str] = field(default_factory=list)


# ----------------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------------

def resolve_target(base_dir, target):
    """Resolve a relationship target against the directory of its source part."""
    if target.startswith('/'):
        return target.lstrip('/')
    return posixpath.normpath(posixpath.join(base_dir, target))


def _trailing_number(path):
    match = TRAILING_NUMBER_RE.search(path)
    return int(match.group(1)) if match else 0


def extract_title(slide_root):
    """
    Best-effort slide title.

    Text of the first title/ctrTitle placeholder, else the first text anywhere
    on the slide cut to 50 characters, else '(no title)'.
    """
    for sp in slide_root.iter(qn('p:sp')):
        info = get_placeholder_info(sp)
        if info is not None and info.type in TITLE_PLACEHOLDERS:
            text = next(iter_texts(sp), None)
            if text:
                return text
    text = next(iter_texts(slide_root), None)
    if text:
        return text[:TITLE_FALLBACK_LENGTH]
    return NO_TITLE


def layout_index_of(package, slide_part_name):
    """Layout number a slide points at through its own .rels, or None."""
    for rel in find_by_type(package.read_rels(rels_part_for(slide_part_name)), REL_SLIDE_LAYOUT):
        match = TRAILING_NUMBER_RE.search(rel.target)
        if match:
            return int(match.group(1))
    return None


# ----------------------------------------------------------------------------
# Slides
# ----------------------------------------------------------------------------

def list_slides(package):
    """
    List slides in presentation order.

    Args:
        package: Package or path to an unpacked package

    Returns:
        List of SlideEntry. p:sldId entries whose r:id has no relationship are
        left out.

    Raises:
        PackageStructureError: presentation.xml is missing
    """
    package = as_package(package)
    if not package.exists(PRESENTATION_PART):
        raise PackageStructureError(
            f'{PRESENTATION_PART} not found: {package.path(PRESENTATION_PART)}'
        )
    presentation = package.read_presentation()
    rels = package.read_presentation_rels()

    sld_id_lst = get_slide_id_list(presentation)
    if sld_id_lst is None:
        return []

    slides = []
    for sld_id in sld_id_lst.findall(qn('p:sldId')):
        r_id = sld_id.get(qn('r:id'))
        rel = find_by_id(rels, r_id) if r_id else None
        if rel is None:
            logger.debug(f'Skipping p:sldId {sld_id.get("id")}: no relationship {r_id}')
            continue

        part = resolve_target('ppt', rel.target)
        entry = SlideEntry(
            position=len(slides) + 1,
            slide_num=_trailing_number(part),
            slide_id=int(sld_id.get('id', '0')),
            r_id=r_id,
            part=part,
        )
        if package.exists(part):
            entry.title = extract_title(package.read_xml(part))
            entry.layout_index = layout_index_of(package, part)
        slides.append(entry)

    return slides


def get_slide(package, position):
    """SlideEntry at a 1-based position; NotFoundError if there is none."""
    slides = list_slides(package)
    if position < 1 or position > len(slides):
        raise NotFoundError(
            f'Slide position {position} not found (presentation has {len(slides)} slides)'
        )
    return slides[position - 1]


# ----------------------------------------------------------------------------
# Layouts
# ----------------------------------------------------------------------------

def read_layout_placeholders(layout_root):
    """Placeholder(type, idx, sz) for every placeholder shape of a layout, in order."""
    placeholders = []
    for sp in layout_root.iter(qn('p:sp')):
        info = get_placeholder_info(sp)
        if info is not None:
            placeholders.append(info)
    return placeholders


def layout_name(layout_root, layout_num):
    c_sld = layout_root.find(qn('p:cSld'))
    name = c_sld.get('name') if c_sld is not None else None
    return name or f'Layout {layout_num}'


def layout_numbers(package):
    """Numbers of the slideLayoutN.xml parts present, sorted."""
    numbers = []
    for name in package.list_dir(LAYOUTS_DIR):
        match = LAYOUT_FILE_RE.match(name)
        if match:
            numbers.append(int(match.group(1)))
    return sorted(numbers)


def list_layouts(package):
    """
    List the slide layouts of a package.

    Returns:
        List of LayoutEntry sorted by layout number. placeholders holds each
        placeholder type once, in document order.

    Raises:
        NotFoundError: the package has no ppt/slideLayouts directory
    """
    package = as_package(package)
    if not package.exists(LAYOUTS_DIR):
        raise NotFoundError(f'No slide layouts found: {package.path(LAYOUTS_DIR)}')

    layouts = []
    for num in layout_numbers(package):
        part = layout_part(num)
        root = package.read_xml(part)
        types = []
        for info in read_layout_placeholders(root):
            if info.type and info.type not in types:
                types.append(info.type)
        layouts.append(LayoutEntry(num, layout_name(root, num), part.rsplit('/', 1)[-1], types))
    return layouts
