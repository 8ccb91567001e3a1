"""
Edits to the slide list of presentation.xml.

p:sldIdLst order is presentation order. Entries are always located by their
r:id, never by counting, so the list stays correct even when slide file
numbers and positions disagree.
"""

from pptx.oxml.ns import qn

from .constants import SLIDE_HEIGHT_16_9, SLIDE_WIDTH_16_9

# Children of p:presentation that must come before p:sldIdLst
_BEFORE_SLD_ID_LST = (
    qn('p:sldMasterIdLst'),
    qn('p:notesMasterIdLst'),
    qn('p:handoutMasterIdLst'),
)


def get_slide_id_list(presentation_root, create=False):
    sld_id_lst = presentation_root.find(qn('p:sldIdLst'))
    if sld_id_lst is not None or not create:
        return sld_id_lst

    sld_id_lst = presentation_root.makeelement(qn('p:sldIdLst'), {})
    index = 0
    for i, child in enumerate(presentation_root):
        if child.tag in _BEFORE_SLD_ID_LST:
            index = i + 1
    presentation_root.insert(index, sld_id_lst)
    return sld_id_lst


def insert_slide_id(presentation_root, slide_id, r_id, position=None):
    """
    Insert a p:sldId entry into the slide list.

    position None or beyond the end appends; 1 or less inserts at the head;
    anything in between goes right before the slide currently at that position.
    Returns the new element.
    """
    sld_id_lst = get_slide_id_list(presentation_root, create=True)
    entries = sld_id_lst.findall(qn('p:sldId'))
    sld_id = sld_id_lst.makeelement(qn('p:sldId'), {'id': str(slide_id), qn('r:id'): r_id})

    if position is None or position > len(entries):
        if entries:
            entries[-1].addnext(sld_id)
        else:
            sld_id_lst.insert(0, sld_id)
    elif not entries or position <= 1:
        sld_id_lst.insert(0, sld_id)
    else:
        entries[position - 1].addprevious(sld_id)
    return sld_id


def remove_slide_id(presentation_root, r_id):
    """Remove every p:sldId whose r:id is `r_id`. Returns the number removed."""
    sld_id_lst = get_slide_id_list(presentation_root)
    if sld_id_lst is None:
        return 0
    removed = 0
    for sld_id in list(sld_id_lst.findall(qn('p:sldId'))):
        if sld_id.get(qn('r:id')) == r_id:
            sld_id_lst.remove(sld_id)
            removed += 1
    return removed


def get_slide_size(presentation_root):
    """(cx, cy) of p:sldSz in EMU, 16:9 when absent or degenerate."""
    sld_sz = presentation_root.find(qn('p:sldSz'))
    if sld_sz is None:
        return SLIDE_WIDTH_16_9, SLIDE_HEIGHT_16_9
    cx, cy = int(sld_sz.get('cx', 0)), int(sld_sz.get('cy', 0))
    if cx <= 0 or cy <= 0:
        return SLIDE_WIDTH_16_9, SLIDE_HEIGHT_16_9
    return cx, cy
