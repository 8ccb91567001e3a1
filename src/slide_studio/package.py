"""
Handle on an unpacked presentation package.

Every command receives a Package instead of poking at the current working
directory. The handle knows the part naming conventions and how to read and
write XML parts, relationship lists and the content-type registry. Writes go
straight to disk; there is nothing to flush.
"""

from lxml import etree
import logging
import os

from .constants import (
    CONTENT_TYPES_PART,
    LAYOUTS_DIR,
    PRESENTATION_PART,
    PRESENTATION_RELS_PART,
    SLIDE_RELS_DIR,
    SLIDES_DIR,
)
from .content_types import parse_content_types, serialize_content_types
from .errors import NotFoundError, PackageStructureError
from .relationships import parse_relationships, serialize_relationships

logger = logging.getLogger(__name__)


def slide_part(slide_num):
    return f'{SLIDES_DIR}/slide{slide_num}.xml'


def slide_rels_part(slide_num):
    return f'{SLIDE_RELS_DIR}/slide{slide_num}.xml.rels'


def layout_part(layout_num):
    return f'{LAYOUTS_DIR}/slideLayout{layout_num}.xml'


def rels_part_for(part):
    """Return the relationship part that belongs to `part` (a/b.xml -> a/_rels/b.xml.rels)."""
    head, _, name = part.rpartition('/')
    return f'{head}/_rels/{name}.rels' if head else f'_rels/{name}.rels'


def serialize_xml(root):
    return etree.tostring(root, xml_declaration=True, encoding='UTF-8', standalone=True)


class Package:
    """An unpacked OOXML package rooted at a directory."""

    def __init__(self, root):
        self.root = os.path.abspath(os.fspath(root))

    @classmethod
    def open(cls, root):
        """
        Open an existing working directory and check it looks like a package.

        Raises:
            PackageStructureError: the directory, [Content_Types].xml or
                ppt/presentation.xml is missing
        """
        package = cls(root)
        if not os.path.isdir(package.root):
            raise PackageStructureError(f'Working directory not found: {package.root}')
        package.require(CONTENT_TYPES_PART)
        package.require(PRESENTATION_PART)
        return package

    def __repr__(self):
        return f'Package({self.root!r})'

    def path(self, part):
        return os.path.join(self.root, *part.split('/'))

    def exists(self, part):
        return os.path.exists(self.path(part))

    def require(self, part):
        """Fail with PackageStructureError unless a top-level part is present."""
        if not self.exists(part):
            raise PackageStructureError(f'{part} not found: {self.path(part)}')

    def list_dir(self, directory):
        full = self.path(directory)
        if not os.path.isdir(full):
            return []
        return sorted(os.listdir(full))

    # ------------------------------------------------------------------
    # Raw bytes
    # ------------------------------------------------------------------

    def read_bytes(self, part):
        try:
            with open(self.path(part), 'rb') as f:
                return f.read()
        except FileNotFoundError:
            raise NotFoundError(f'Part not found: {self.path(part)}') from None

    def write_bytes(self, part, data):
        full = self.path(part)
        os.makedirs(os.path.dirname(full), exist_ok=True)
        with open(full, 'wb') as f:
            f.write(data)
        logger.debug(f'Wrote {part} ({len(data)} bytes)')

    def remove(self, part):
        """Delete a part if present. Returns True when something was removed."""
        full = self.path(part)
        if not os.path.exists(full):
            return False
        os.remove(full)
        logger.debug(f'Removed {part}')
        return True

    # ------------------------------------------------------------------
    # Typed parts
    # ------------------------------------------------------------------

    def read_xml(self, part):
        return etree.fromstring(self.read_bytes(part))

    def write_xml(self, part, root):
        self.write_bytes(part, serialize_xml(root))

    def read_rels(self, part):
        """Relationship list of a .rels part; a missing part is an empty list."""
        if not self.exists(part):
            return []
        return parse_relationships(self.read_bytes(part))

    def write_rels(self, part, rels):
        self.write_bytes(part, serialize_relationships(rels))

    def read_content_types(self):
        self.require(CONTENT_TYPES_PART)
        return parse_content_types(self.read_bytes(CONTENT_TYPES_PART))

    def write_content_types(self, registry):
        self.write_bytes(CONTENT_TYPES_PART, serialize_content_types(registry))

    def read_presentation(self):
        self.require(PRESENTATION_PART)
        return self.read_xml(PRESENTATION_PART)

    def write_presentation(self, root):
        self.write_xml(PRESENTATION_PART, root)

    def read_presentation_rels(self):
        return self.read_rels(PRESENTATION_RELS_PART)

    def write_presentation_rels(self, rels):
        self.write_rels(PRESENTATION_RELS_PART, rels)


def as_package(target):
    """Accept either a Package or a path to a working directory."""
    if isinstance(target, Package):
        return target
    return Package.open(target)
