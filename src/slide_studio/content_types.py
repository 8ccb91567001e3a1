"""
The [Content_Types].xml registry.

Defaults map a file extension to a MIME type, Overrides map one part name to
a MIME type. Defaults keep the order they were read or added in; Overrides
are written sorted by part name so the output diffs cleanly.
"""

from lxml import etree
from dataclasses import dataclass, field
import logging

from .constants import CT_SLIDE, IMAGE_CONTENT_TYPES, NS_CONTENT_TYPES

logger = logging.getLogger(__name__)

_TYPES = f'{{{NS_CONTENT_TYPES}}}Types'
_DEFAULT = f'{{{NS_CONTENT_TYPES}}}Default'
_OVERRIDE = f'{{{NS_CONTENT_TYPES}}}Override'


@dataclass
class ContentTypes:
    defaults: dict = field(default_factory=dict)
    overrides: dict = field(default_factory=dict)


def parse_content_types(xml):
    registry = ContentTypes()
    if not xml:
        return registry
    if isinstance(xml, str):
        xml = xml.encode('utf-8')
    root = etree.fromstring(xml)
    for elem in root.iter(_DEFAULT):
        ext, content_type = elem.get('Extension'), elem.get('ContentType')
        if ext and content_type:
            registry.defaults[ext] = content_type
    for elem in root.iter(_OVERRIDE):
        part_name, content_type = elem.get('PartName'), elem.get('ContentType')
        if part_name and content_type:
            registry.overrides[part_name] = content_type
    return registry


def serialize_content_types(registry):
    root = etree.Element(_TYPES, nsmap={None: NS_CONTENT_TYPES})
    for ext, content_type in registry.defaults.items():
        etree.SubElement(root, _DEFAULT, Extension=ext, ContentType=content_type)
    for part_name in sorted(registry.overrides):
        etree.SubElement(
            root, _OVERRIDE, PartName=part_name, ContentType=registry.overrides[part_name]
        )
    return etree.tostring(
        root, xml_declaration=True, encoding='UTF-8', standalone=True, pretty_print=True
    )


def _part_name(part):
    return part if part.startswith('/') else '/' + part


def add_default(registry, extension, content_type):
    registry.defaults[extension] = content_type
    return registry


def add_override(registry, part, content_type):
    registry.overrides[_part_name(part)] = content_type
    return registry


def remove_override(registry, part):
    registry.overrides.pop(_part_name(part), None)
    return registry


def add_slide_content_type(registry, slide_num):
    return add_override(registry, f'/ppt/slides/slide{slide_num}.xml', CT_SLIDE)


def remove_slide_content_type(registry, slide_num):
    return remove_override(registry, f'/ppt/slides/slide{slide_num}.xml')


def normalize_extension(extension):
    return extension.lower().lstrip('.')


def ensure_image_type(registry, extension):
    """
    Declare a Default for an image extension unless one already exists.

    Only png, jpg/jpeg, gif, bmp and svg are known; any other extension is
    left undeclared.
    """
    ext = normalize_extension(extension)
    if ext in registry.defaults:
        return registry
    content_type = IMAGE_CONTENT_TYPES.get(ext)
    if content_type is None:
        logger.debug(f'No content type known for .{ext}, leaving it undeclared')
        return registry
    registry.defaults[ext] = content_type
    return registry
