"""
Replace the text of a shape on a slide.

Shapes are located with an ordered list of matcher strategies. The first
strategy that matches anything wins and its name is returned, so callers and
tests can see which structure was found.
"""

from pptx.oxml.ns import qn
from collections import namedtuple
import logging
import warnings

from .errors import AmbiguousMatchWarning, NotFoundError
from .inventory import get_slide
from .oxml import get_shape_id
from .package import as_package

logger = logging.getLogger(__name__)

MatcherStrategy = namedtuple('MatcherStrategy', ['name', 'match'])


# ----------------------------------------------------------------------------
# Matchers
# ----------------------------------------------------------------------------

def _match_nvpr_placeholder(slide_root, ph_type):
    """p:sp whose own p:nvSpPr/p:nvPr/p:ph has the placeholder type."""
    path = f"{qn('p:nvSpPr')}/{qn('p:nvPr')}/{qn('p:ph')}"
    matches = []
    for sp in slide_root.iter(qn('p:sp')):
        ph = sp.find(path)
        if ph is not None and ph.get('type') == ph_type:
            matches.append(sp)
    return matches


def _match_descendant_placeholder(slide_root, ph_type):
    """p:sp with a p:ph of the placeholder type anywhere inside it."""
    matches = []
    for sp in slide_root.iter(qn('p:sp')):
        for ph in sp.iter(qn('p:ph')):
            if ph.get('type') == ph_type:
                matches.append(sp)
                break
    return matches


def _match_shape_id(slide_root, shape_id):
    """p:sp whose p:nvSpPr/p:cNvPr id is the shape id."""
    path = f"{qn('p:nvSpPr')}/{qn('p:cNvPr')}"
    matches = []
    for sp in slide_root.iter(qn('p:sp')):
        c_nv_pr = sp.find(path)
        if c_nv_pr is not None and c_nv_pr.get('id') == str(shape_id):
            matches.append(sp)
    return matches


PLACEHOLDER_STRATEGIES = (
    MatcherStrategy('nvPr-placeholder', _match_nvpr_placeholder),
    MatcherStrategy('descendant-placeholder', _match_descendant_placeholder),
)

SHAPE_ID_STRATEGIES = (
    MatcherStrategy('shape-id', _match_shape_id),
)


def find_shape(slide_root, key, strategies):
    """
    Try each strategy in order and return (shape, strategy name) for the first hit.

    When the winning strategy matches several shapes an AmbiguousMatchWarning
    is issued and the first one is used. Returns (None, None) when nothing matches.
    """
    for strategy in strategies:
        matches = strategy.match(slide_root, key)
        if not matches:
            continue
        if len(matches) > 1:
            warnings.warn(
                f'{len(matches)} shapes match {key!r} with {strategy.name}, using the first '
                f'(id={get_shape_id(matches[0])})',
                AmbiguousMatchWarning,
                stacklevel=3,
            )
        logger.debug(f'Matched {key!r} with {strategy.name}')
        return matches[0], strategy.name
    return None, None


# ----------------------------------------------------------------------------
# Text body
# ----------------------------------------------------------------------------

def _get_or_add_tx_body(sp):
    tx_body = sp.find(qn('p:txBody'))
    if tx_body is not None:
        return tx_body
    tx_body = sp.makeelement(qn('p:txBody'), {})
    ext_lst = sp.find(qn('p:extLst'))
    if ext_lst is not None:
        ext_lst.addprevious(tx_body)
    else:
        sp.append(tx_body)
    return tx_body


def replace_text_body(sp, text):
    """
    Replace every paragraph of a shape with one paragraph per line of `text`.

    a:bodyPr and a:lstStyle are kept (and created if missing); run formatting
    of the old paragraphs is dropped.
    """
    tx_body = _get_or_add_tx_body(sp)

    body_pr = tx_body.find(qn('a:bodyPr'))
    lst_style = tx_body.find(qn('a:lstStyle'))
    for child in list(tx_body):
        tx_body.remove(child)

    if body_pr is None:
        body_pr = tx_body.makeelement(qn('a:bodyPr'), {})
    if lst_style is None:
        lst_style = tx_body.makeelement(qn('a:lstStyle'), {})
    tx_body.append(body_pr)
    tx_body.append(lst_style)

    for line in text.splitlines() or ['']:
        p = tx_body.makeelement(qn('a:p'), {})
        tx_body.append(p)
        if not line:
            p.append(p.makeelement(qn('a:endParaRPr'), {'lang': 'en-US', 'dirty': '0'}))
            continue
        r = p.makeelement(qn('a:r'), {})
        p.append(r)
        r.append(r.makeelement(qn('a:rPr'), {'lang': 'en-US', 'dirty': '0'}))
        t = r.makeelement(qn('a:t'), {})
        t.text = line
        r.append(t)

    return tx_body


# ----------------------------------------------------------------------------
# Mutator
# ----------------------------------------------------------------------------

def edit_text(package, position, text, placeholder=None, shape_id=None):
    """
    Replace the text of one shape on a slide.

    Args:
        package: Package or path to an unpacked package
        position: 1-based slide position
        text: New text; each line becomes a paragraph
        placeholder: Placeholder type to look for (title, body, ...)
        shape_id: Shape id to look for

    Returns:
        Name of the matcher strategy that found the shape

    Raises:
        ValueError: not exactly one of placeholder and shape_id given
        NotFoundError: no slide at that position, or no matching shape
    """
    if (placeholder is None) == (shape_id is None):
        raise ValueError('Specify exactly one of placeholder or shape_id')

    package = as_package(package)
    entry = get_slide(package, position)
    if not package.exists(entry.part):
        raise NotFoundError(f'Slide file not found: {package.path(entry.part)}')
    slide = package.read_xml(entry.part)

    if placeholder is not None:
        sp, strategy = find_shape(slide, placeholder, PLACEHOLDER_STRATEGIES)
        if sp is None:
            raise NotFoundError(f"Placeholder type '{placeholder}' not found in slide {position}")
    else:
        sp, strategy = find_shape(slide, shape_id, SHAPE_ID_STRATEGIES)
        if sp is None:
            raise NotFoundError(f"Shape with id '{shape_id}' not found in slide {position}")

    replace_text_body(sp, text)
    package.write_xml(entry.part, slide)

    logger.info(f'Updated text in slide {position} ({strategy})')
    return strategy
