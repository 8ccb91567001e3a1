"""
Relationship lists of .rels parts.

A relationship list is a plain Python list of Relationship objects. Nothing in
this module touches the filesystem: callers read a list through the Package,
change it here, and write it back.
"""

from lxml import etree
from dataclasses import dataclass
from typing import Optional

from .constants import NS_PACKAGE_RELS, REL_IMAGE, REL_SLIDE, REL_SLIDE_LAYOUT
from .ids import RelationshipIdAllocator

_RELATIONSHIPS = f'{{{NS_PACKAGE_RELS}}}Relationships'
_RELATIONSHIP = f'{{{NS_PACKAGE_RELS}}}Relationship'


@dataclass
class Relationship:
    id: str
    type: str
    target: str
    target_mode: Optional[str] = None

    @property
    def is_external(self):
        return self.target_mode == 'External'


def parse_relationships(xml):
    """
    Parse a .rels document into a list of Relationship.

    Elements missing an Id, Type or Target are skipped. Empty input gives an
    empty list.
    """
    if not xml:
        return []
    if isinstance(xml, str):
        xml = xml.encode('utf-8')
    root = etree.fromstring(xml)
    rels = []
    for elem in root.iter(_RELATIONSHIP):
        rel_id, rel_type, target = elem.get('Id'), elem.get('Type'), elem.get('Target')
        if not (rel_id and rel_type and target):
            continue
        rels.append(Relationship(rel_id, rel_type, target, elem.get('TargetMode')))
    return rels


def serialize_relationships(rels):
    """Render a relationship list as a .rels document, keeping list order."""
    root = etree.Element(_RELATIONSHIPS, nsmap={None: NS_PACKAGE_RELS})
    for rel in rels:
        elem = etree.SubElement(root, _RELATIONSHIP)
        elem.set('Id', rel.id)
        elem.set('Type', rel.type)
        elem.set('Target', rel.target)
        if rel.target_mode:
            elem.set('TargetMode', rel.target_mode)
    return etree.tostring(
        root, xml_declaration=True, encoding='UTF-8', standalone=True, pretty_print=True
    )


def next_relationship_id(rels):
    """rId one above the highest rIdN in the list, or rId1."""
    return RelationshipIdAllocator.for_relationships(rels).peek()


def add_relationship(rels, rel_type, target, target_mode=None):
    """Append a relationship with a fresh id and return that id."""
    rel_id = next_relationship_id(rels)
    rels.append(Relationship(rel_id, rel_type, target, target_mode))
    return rel_id


def remove_relationship(rels, rel_id):
    """Remove the first relationship with `rel_id`; absent ids are ignored."""
    for i, rel in enumerate(rels):
        if rel.id == rel_id:
            del rels[i]
            return True
    return False


def find_by_id(rels, rel_id):
    for rel in rels:
        if rel.id == rel_id:
            return rel
    return None


def find_by_type(rels, rel_type):
    return [rel for rel in rels if rel.type == rel_type]


def find_by_target(rels, target):
    for rel in rels:
        if rel.target == target or rel.target.endswith('/' + target):
            return rel
    return None


def add_slide_relationship(rels, slide_num):
    return add_relationship(rels, REL_SLIDE, f'slides/slide{slide_num}.xml')


def add_layout_relationship(rels, layout_num):
    return add_relationship(rels, REL_SLIDE_LAYOUT, f'../slideLayouts/slideLayout{layout_num}.xml')


def add_image_relationship(rels, media_name):
    return add_relationship(rels, REL_IMAGE, f'../media/{media_name}')
