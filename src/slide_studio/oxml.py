"""
Small helpers over slide, layout and presentation element trees.
"""

from pptx.oxml.ns import nsdecls, qn
from lxml import etree
from collections import namedtuple

Placeholder = namedtuple('Placeholder', ['type', 'idx', 'sz'])

SHAPE_TAGS = {qn('p:sp'), qn('p:grpSp'), qn('p:pic'), qn('p:graphicFrame'), qn('p:cxnSp')}


def parse_fragment(xml, **values):
    """
    Parse a markup fragment that uses the a:, p: and r: prefixes.

    `xml` is a str.format template; {nsdecls} is filled with the namespace
    declarations and any other field from `values`. Only pass numbers and
    attribute-safe tokens as values, text content is set on the tree afterwards.
    """
    return etree.fromstring(xml.format(nsdecls=nsdecls('a', 'p', 'r'), **values))


def get_placeholder_info(sp_elem):
    """
    Get placeholder info from a shape element.
    Returns a Placeholder(type, idx, sz) if the shape is a placeholder, None otherwise.
    """
    if sp_elem.tag != qn('p:sp'):
        return None
    nvSpPr = sp_elem.find(qn('p:nvSpPr'))
    if nvSpPr is None:
        return None
    nvPr = nvSpPr.find(qn('p:nvPr'))
    if nvPr is None:
        return None
    ph = nvPr.find(qn('p:ph'))
    if ph is None:
        return None
    return Placeholder(ph.get('type'), ph.get('idx'), ph.get('sz'))


def get_shape_id(shape_elem):
    """The cNvPr id of a shape, as an int, or None."""
    for c_nv_pr in shape_elem.iter(qn('p:cNvPr')):
        value = c_nv_pr.get('id', '')
        return int(value) if value.isdigit() else None
    return None


def get_shape_name(shape_elem):
    for c_nv_pr in shape_elem.iter(qn('p:cNvPr')):
        return c_nv_pr.get('name', '')
    return ''


def iter_texts(elem):
    """Non-empty a:t strings under `elem`, in document order."""
    for t in elem.iter(qn('a:t')):
        if t.text:
            yield t.text


def find_sp_tree(slide_root):
    return slide_root.find(f"{qn('p:cSld')}/{qn('p:spTree')}")


def splice_shape(sp_tree, shape_elem):
    """
    Add a shape as the last drawable child of a shape tree.

    p:extLst must stay the final child, so the shape goes in front of it when
    present.
    """
    ext_lst = sp_tree.find(qn('p:extLst'))
    if ext_lst is not None:
        ext_lst.addprevious(shape_elem)
    else:
        sp_tree.append(shape_elem)
    return shape_elem


def offset_ids_in_tree(tree, offset):
    """
    Add `offset` to every numeric unqualified id attribute in a tree.
    Connection references (a:stCxn/a:endCxn) move with the shapes they point at.
    """
    for elem in tree.iter(etree.Element):
        value = elem.get('id')
        if value is not None and value.isdigit():
            elem.set('id', str(int(value) + offset))
