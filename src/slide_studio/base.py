"""
Generate the base package: one Office theme, one slide master, the 11
standard layouts and a single title slide.
"""

from pptx.opc.constants import CONTENT_TYPE as CT
from pptx.opc.constants import RELATIONSHIP_TYPE as RT
from pptx.oxml.ns import qn
from lxml import etree
from datetime import datetime, timezone
import logging
import os
import posixpath
import tempfile

from .archive import pack
from .constants import (
    CT_PRESENTATION,
    CT_SLIDE,
    CT_SLIDE_LAYOUT,
    CT_SLIDE_MASTER,
    CT_THEME,
    FIRST_MASTER_ID,
    FIRST_SLIDE_ID,
    LAYOUT_NAMES,
    PRESENTATION_PART,
    REL_SLIDE,
    REL_SLIDE_LAYOUT,
    REL_SLIDE_MASTER,
    REL_THEME,
    ROOT_RELS_PART,
    SLIDE_WIDTH_4_3,
    SLIDE_WIDTH_16_9,
)
from .content_types import ContentTypes, add_default, add_override
from .oxml import Placeholder, find_sp_tree, parse_fragment, splice_shape
from .package import Package, layout_part, rels_part_for, slide_part, slide_rels_part
from .presentation import insert_slide_id
from .relationships import Relationship, add_relationship
from .slides import EMPTY_SLIDE_XML, build_placeholder_shape
from . import templates

logger = logging.getLogger(__name__)

MASTER_PART = 'ppt/slideMasters/slideMaster1.xml'
THEME_PART = 'ppt/theme/theme1.xml'

STATIC_PARTS = {
    'ppt/presProps.xml': (templates.PRES_PROPS_XML, CT.PML_PRES_PROPS, RT.PRES_PROPS),
    'ppt/viewProps.xml': (templates.VIEW_PROPS_XML, CT.PML_VIEW_PROPS, RT.VIEW_PROPS),
    THEME_PART: (templates.THEME_XML, CT_THEME, REL_THEME),
    'ppt/tableStyles.xml': (templates.TABLE_STYLES_XML, CT.PML_TABLE_STYLES, RT.TABLE_STYLES),
}


def _xml_bytes(markup):
    return (templates.XML_DECLARATION + markup).encode('utf-8')


def _scale_x(value):
    """Scale a horizontal 4:3 coordinate to the 16:9 slide width."""
    return value * SLIDE_WIDTH_16_9 // SLIDE_WIDTH_4_3


def _relative(from_part, to_part):
    return posixpath.relpath(to_part, posixpath.dirname(from_part))


# ----------------------------------------------------------------------------
# Parts
# ----------------------------------------------------------------------------

def build_layout(num):
    """slideLayoutN.xml markup for one of the standard layouts."""
    layout_type, placeholders = templates.LAYOUTS[num]
    layout = etree.fromstring(templates.SLIDE_LAYOUT_XML)
    layout.set('type', layout_type)
    layout.find(qn('p:cSld')).set('name', LAYOUT_NAMES[num])
    sp_tree = find_sp_tree(layout)

    for shape_id, ph in enumerate(placeholders, start=2):
        sp = etree.fromstring(templates.LAYOUT_PLACEHOLDER_XML.format(
            id=shape_id, x=_scale_x(ph['x']), y=ph['y'], cx=_scale_x(ph['cx']), cy=ph['cy'],
        ))
        sp.find(f".//{qn('p:cNvPr')}").set('name', f"{ph['type']} {shape_id}")
        ph_elem = sp.find(f".//{qn('p:ph')}")
        ph_elem.set('type', ph['type'])
        if 'idx' in ph:
            ph_elem.set('idx', str(ph['idx']))
        if ph.get('vert'):
            sp.find(f".//{qn('a:bodyPr')}").set('vert', 'eaVert')
        splice_shape(sp_tree, sp)

    return layout


def build_master():
    master = etree.fromstring(templates.SLIDE_MASTER_XML)
    layout_id_lst = master.find(qn('p:sldLayoutIdLst'))
    for num in sorted(templates.LAYOUTS):
        layout_id_lst.append(layout_id_lst.makeelement(
            qn('p:sldLayoutId'), {'id': str(FIRST_MASTER_ID + num), qn('r:id'): f'rId{num}'}
        ))
    return master


def build_title_slide():
    """Title slide with a centred title and a subtitle, both bound to layout 1."""
    slide = parse_fragment(EMPTY_SLIDE_XML)
    sp_tree = find_sp_tree(slide)
    splice_shape(sp_tree, build_placeholder_shape(2, 'Title 1', Placeholder('ctrTitle', None, None), 'Title'))
    splice_shape(sp_tree, build_placeholder_shape(3, 'Subtitle 2', Placeholder('subTitle', '1', None), 'Subtitle'))
    return slide


def build_content_types():
    registry = ContentTypes()
    add_default(registry, 'rels', CT.OPC_RELATIONSHIPS)
    add_default(registry, 'xml', CT.XML)
    add_override(registry, PRESENTATION_PART, CT_PRESENTATION)
    for part, (_, content_type, _) in STATIC_PARTS.items():
        add_override(registry, part, content_type)
    add_override(registry, MASTER_PART, CT_SLIDE_MASTER)
    for num in templates.LAYOUTS:
        add_override(registry, layout_part(num), CT_SLIDE_LAYOUT)
    add_override(registry, slide_part(1), CT_SLIDE)
    add_override(registry, 'docProps/core.xml', CT.OPC_CORE_PROPERTIES)
    add_override(registry, 'docProps/app.xml', CT.OFC_EXTENDED_PROPERTIES)
    return registry


# ----------------------------------------------------------------------------
# Entry points
# ----------------------------------------------------------------------------

def create_base(work_dir):
    """
    Write the base package into a directory (created if needed).

    Existing parts with the same names are overwritten.

    Returns:
        Package for the new working directory
    """
    os.makedirs(work_dir, exist_ok=True)
    package = Package(work_dir)

    package.write_content_types(build_content_types())
    package.write_rels(ROOT_RELS_PART, [
        Relationship('rId1', RT.OFFICE_DOCUMENT, PRESENTATION_PART),
        Relationship('rId2', RT.CORE_PROPERTIES, 'docProps/core.xml'),
        Relationship('rId3', RT.EXTENDED_PROPERTIES, 'docProps/app.xml'),
    ])
    now = datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')
    package.write_bytes('docProps/core.xml', _xml_bytes(templates.CORE_PROPS_XML.format(now=now)))
    package.write_bytes('docProps/app.xml', _xml_bytes(templates.APP_PROPS_XML))

    # presentation.xml.rels: master, first slide, then the presentation-level parts
    presentation_rels = []
    master_r_id = add_relationship(presentation_rels, REL_SLIDE_MASTER, _relative(PRESENTATION_PART, MASTER_PART))
    slide_r_id = add_relationship(presentation_rels, REL_SLIDE, _relative(PRESENTATION_PART, slide_part(1)))
    for part, (markup, _, rel_type) in STATIC_PARTS.items():
        package.write_bytes(part, _xml_bytes(markup))
        add_relationship(presentation_rels, rel_type, _relative(PRESENTATION_PART, part))
    package.write_presentation_rels(presentation_rels)

    presentation = etree.fromstring(templates.PRESENTATION_XML)
    master_id_lst = presentation.find(qn('p:sldMasterIdLst'))
    master_id_lst.append(master_id_lst.makeelement(
        qn('p:sldMasterId'), {'id': str(FIRST_MASTER_ID), qn('r:id'): master_r_id}
    ))
    insert_slide_id(presentation, FIRST_SLIDE_ID, slide_r_id)
    package.write_presentation(presentation)

    package.write_xml(MASTER_PART, build_master())
    master_rels = []
    for num in sorted(templates.LAYOUTS):
        add_relationship(master_rels, REL_SLIDE_LAYOUT, _relative(MASTER_PART, layout_part(num)))
    add_relationship(master_rels, REL_THEME, _relative(MASTER_PART, THEME_PART))
    package.write_rels(rels_part_for(MASTER_PART), master_rels)

    for num in sorted(templates.LAYOUTS):
        part = layout_part(num)
        package.write_xml(part, build_layout(num))
        package.write_rels(rels_part_for(part), [
            Relationship('rId1', REL_SLIDE_MASTER, _relative(part, MASTER_PART)),
        ])

    package.write_xml(slide_part(1), build_title_slide())
    slide_rels = []
    add_relationship(slide_rels, REL_SLIDE_LAYOUT, _relative(slide_part(1), layout_part(1)))
    package.write_rels(slide_rels_part(1), slide_rels)

    logger.info(f'Created base package in {package.root} ({len(templates.LAYOUTS)} layouts)')
    return package


def create_base_pptx(output):
    """Generate the base package and pack it into a .pptx file."""
    with tempfile.TemporaryDirectory(prefix='slide-studio-') as temp_dir:
        create_base(temp_dir)
        return pack(temp_dir, output)
