"""
Apply a .potx/.pptx template: swap in its theme, slide masters and layouts.

Existing slides keep their layout number when the template has a layout with
that number and fall back to layout 1 otherwise. The old -> new layout table
is returned so callers can see what moved.
"""

from pptx.oxml.ns import qn
import logging
import os
import re
import shutil
import tempfile

from .archive import unpack
from .constants import (
    CT_SLIDE_LAYOUT,
    CT_SLIDE_MASTER,
    CT_THEME,
    FIRST_MASTER_ID,
    LAYOUTS_DIR,
    MASTERS_DIR,
    PRESENTATION_PART,
    PRESENTATION_RELS_PART,
    REL_SLIDE_LAYOUT,
    REL_SLIDE_MASTER,
    REL_THEME,
    SLIDE_RELS_DIR,
    THEME_DIR,
)
from .content_types import add_override, remove_override
from .errors import NotFoundError, PackageStructureError
from .ids import RelationshipIdAllocator
from .inventory import layout_numbers
from .package import Package, as_package
from .relationships import Relationship, find_by_type

logger = logging.getLogger(__name__)

LAYOUT_TARGET_RE = re.compile(r'^(.*slideLayout)(\d+)(\.xml)$')

FALLBACK_LAYOUT = 1

# Directory -> content type of the XML parts in it
REPLACED_DIRS = (
    (THEME_DIR, CT_THEME),
    (MASTERS_DIR, CT_SLIDE_MASTER),
    (LAYOUTS_DIR, CT_SLIDE_LAYOUT),
)


def build_layout_remap(old_layouts, new_layouts):
    """old layout number -> itself if the template has it, else layout 1."""
    new_layouts = set(new_layouts)
    return {num: (num if num in new_layouts else FALLBACK_LAYOUT) for num in old_layouts}


def _xml_parts(package, directory):
    return [name for name in package.list_dir(directory) if name.endswith('.xml')]


def _replace_directory(package, template, directory):
    target = package.path(directory)
    if os.path.isdir(target):
        shutil.rmtree(target)
    source = template.path(directory)
    if os.path.isdir(source):
        shutil.copytree(source, target)
    logger.debug(f'Replaced {directory}')


def _update_content_types(package):
    registry = package.read_content_types()
    for part_name in list(registry.overrides):
        if any(f'/{directory}/' in part_name for directory, _ in REPLACED_DIRS):
            remove_override(registry, part_name)
    for directory, content_type in REPLACED_DIRS:
        for name in _xml_parts(package, directory):
            add_override(registry, f'{directory}/{name}', content_type)
    package.write_content_types(registry)


def _update_presentation_rels(package, template):
    """
    Swap the master and theme relationships of presentation.xml.rels.

    Returns a dict of template master rId -> new rId, in template order.
    """
    rels = [rel for rel in package.read_presentation_rels() if rel.type not in (REL_SLIDE_MASTER, REL_THEME)]
    allocator = RelationshipIdAllocator.for_relationships(rels)

    master_ids = {}
    for rel in template.read_rels(PRESENTATION_RELS_PART):
        if rel.type not in (REL_SLIDE_MASTER, REL_THEME):
            continue
        new_id = allocator.allocate()
        rels.append(Relationship(new_id, rel.type, rel.target))
        if rel.type == REL_SLIDE_MASTER:
            master_ids[rel.id] = new_id

    package.write_presentation_rels(rels)
    return master_ids


def _template_master_ids(template):
    """r:id -> p:sldMasterId/@id as declared in the template's presentation.xml."""
    if not template.exists(PRESENTATION_PART):
        return {}
    ids = {}
    for master_id in template.read_xml(PRESENTATION_PART).iter(qn('p:sldMasterId')):
        r_id, value = master_id.get(qn('r:id')), master_id.get('id', '')
        if r_id and value.isdigit():
            ids[r_id] = int(value)
    return ids


def _rebuild_master_id_list(package, template, master_ids):
    """Point p:sldMasterIdLst at the new master relationships."""
    declared = _template_master_ids(template)
    presentation = package.read_presentation()

    master_id_lst = presentation.find(qn('p:sldMasterIdLst'))
    if master_id_lst is None:
        master_id_lst = presentation.makeelement(qn('p:sldMasterIdLst'), {})
        presentation.insert(0, master_id_lst)
    for child in list(master_id_lst):
        master_id_lst.remove(child)

    next_id = FIRST_MASTER_ID
    for template_r_id, new_r_id in master_ids.items():
        value = declared.get(template_r_id, next_id)
        next_id = max(next_id, value + 1)
        master_id_lst.append(
            master_id_lst.makeelement(qn('p:sldMasterId'), {'id': str(value), qn('r:id'): new_r_id})
        )

    package.write_presentation(presentation)


def _remap_slide_layouts(package, remap):
    """Rewrite the slideLayout target of every slide .rels; returns how many changed."""
    changed = 0
    for name in package.list_dir(SLIDE_RELS_DIR):
        if not name.endswith('.rels'):
            continue
        part = f'{SLIDE_RELS_DIR}/{name}'
        rels = package.read_rels(part)
        dirty = False
        for rel in find_by_type(rels, REL_SLIDE_LAYOUT):
            match = LAYOUT_TARGET_RE.match(rel.target)
            if match is None:
                continue
            old = int(match.group(2))
            new = remap.get(old, old)
            if new != old:
                rel.target = f'{match.group(1)}{new}{match.group(3)}'
                dirty = True
        if dirty:
            package.write_rels(part, rels)
            changed += 1
    return changed


def apply_template(package, template_path):
    """
    Replace the theme, slide masters and slide layouts with a template's.

    Args:
        package: Package or path to an unpacked package
        template_path: Path to a .potx or .pptx file

    Returns:
        Dict of old layout number -> new layout number

    Raises:
        NotFoundError: the template file does not exist
        PackageStructureError: the template is not a ZIP archive or has no
            slide masters or layouts
    """
    package = as_package(package)
    template_path = os.path.abspath(template_path)
    if not os.path.isfile(template_path):
        raise NotFoundError(f'Template file not found: {template_path}')

    with tempfile.TemporaryDirectory(prefix='potx-') as temp_dir:
        logger.info('Extracting template...')
        unpack(template_path, temp_dir)
        template = Package(temp_dir)

        new_layouts = layout_numbers(template)
        if not new_layouts or not _xml_parts(template, MASTERS_DIR):
            raise PackageStructureError(f'Template has no slide masters or layouts: {template_path}')

        remap = build_layout_remap(layout_numbers(package), new_layouts)

        logger.info('Replacing theme and layouts...')
        for directory, _ in REPLACED_DIRS:
            _replace_directory(package, template, directory)

        _update_content_types(package)
        master_ids = _update_presentation_rels(package, template)
        _rebuild_master_id_list(package, template, master_ids)

    changed = _remap_slide_layouts(package, remap)
    logger.info(f'Template applied: {len(new_layouts)} layouts, {changed} slides remapped')
    return remap
