"""
Identifier allocators.

A package has four independent numbering spaces and each one gets its own
allocator with an explicit scope:

    SlideNumberAllocator     package          slideN.xml file numbers      floor 1
    ShapeIdAllocator         one slide        numeric id="..." attributes  floor 2
    SlideIdAllocator         presentation     p:sldId/@id                  floor 256
    RelationshipIdAllocator  one .rels list   rIdN                         floor 1

All of them scan the values already in use and hand out max + 1, never below
the floor. Allocated values are reserved, so allocating twice in a row never
returns the same value. Gaps are never refilled.
"""

from pptx.oxml.ns import qn
from lxml import etree
import re

from .constants import FIRST_SLIDE_ID, SLIDES_DIR

SLIDE_FILE_RE = re.compile(r'^slide(\d+)\.xml$')
RID_RE = re.compile(r'^rId(\d+)$')


class _Allocator:
    floor = 1

    def __init__(self, used=()):
        used = list(used)
        self._next = max(self.floor, max(used) + 1) if used else self.floor

    def peek(self):
        """Next value allocate() would return, without reserving it."""
        return self._next

    def allocate(self):
        value = self._next
        self._next += 1
        return value


class SlideNumberAllocator(_Allocator):
    """File numbers of ppt/slides/slideN.xml. Numbers of deleted slides are not reused."""

    floor = 1

    @classmethod
    def for_package(cls, package):
        used = []
        for name in package.list_dir(SLIDES_DIR):
            match = SLIDE_FILE_RE.match(name)
            if match:
                used.append(int(match.group(1)))
        return cls(used)


class ShapeIdAllocator(_Allocator):
    """Shape/element ids inside one slide. Id 1 belongs to the root group shape."""

    floor = 2

    @classmethod
    def for_slide(cls, slide_root):
        return cls(numeric_ids(slide_root))


class SlideIdAllocator(_Allocator):
    """p:sldId values in presentation.xml."""

    floor = FIRST_SLIDE_ID

    @classmethod
    def for_presentation(cls, presentation_root):
        used = []
        for sld_id in presentation_root.iter(qn('p:sldId')):
            value = sld_id.get('id', '')
            if value.isdigit():
                used.append(int(value))
        return cls(used)


class RelationshipIdAllocator(_Allocator):
    """rIdN values of one relationship list."""

    floor = 1

    @classmethod
    def for_relationships(cls, rels):
        used = []
        for rel in rels:
            match = RID_RE.match(rel.id or '')
            if match:
                used.append(int(match.group(1)))
        return cls(used)

    def allocate(self):
        return f'rId{super().allocate()}'

    def peek(self):
        return f'rId{super().peek()}'


def numeric_ids(root):
    """Every unqualified numeric `id` attribute value in a tree."""
    ids = []
    for elem in root.iter(etree.Element):
        value = elem.get('id')
        if value is not None and value.isdigit():
            ids.append(int(value))
    return ids
