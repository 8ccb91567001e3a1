from pptx.oxml.ns import qn
from copy import deepcopy
import pytest

from slide_studio.errors import AmbiguousMatchWarning, NotFoundError
from slide_studio.oxml import find_sp_tree, iter_texts, parse_fragment
from slide_studio.package import slide_part
from slide_studio.shapes import build_rect
from slide_studio.slides import add_slide
from slide_studio.text import (
    PLACEHOLDER_STRATEGIES,
    SHAPE_ID_STRATEGIES,
    edit_text,
    find_shape,
    replace_text_body,
)

NESTED_PLACEHOLDER_XML = (
    '<p:sp {nsdecls}>'
    '<p:nvSpPr><p:cNvPr id="9" name="Odd body"/><p:cNvSpPr/>'
    '<p:nvPr><p:custDataLst><p:ph type="body"/></p:custDataLst></p:nvPr>'
    '</p:nvSpPr><p:spPr/>'
    '</p:sp>'
)


def _texts(package, slide_num=1):
    return list(iter_texts(package.read_xml(slide_part(slide_num))))


class TestEditText:
    def test_by_placeholder(self, package):
        assert edit_text(package, 1, 'Quarterly Review', placeholder='ctrTitle') == 'nvPr-placeholder'
        assert _texts(package) == ['Quarterly Review', 'Subtitle']

    def test_by_shape_id(self, package):
        assert edit_text(package, 1, 'Q3 2026', shape_id=3) == 'shape-id'
        assert _texts(package) == ['Title', 'Q3 2026']

    def test_one_paragraph_per_line(self, package):
        add_slide(package, 2)
        edit_text(package, 2, 'First\n\nThird', placeholder='body')
        slide = package.read_xml(slide_part(2))
        body = slide.findall(f".//{qn('p:sp')}")[1]
        paragraphs = body.findall(f"{qn('p:txBody')}/{qn('a:p')}")
        assert len(paragraphs) == 3
        assert paragraphs[1].find(qn('a:endParaRPr')) is not None
        assert [t.text for t in body.iter(qn('a:t'))] == ['First', 'Third']

    def test_keeps_body_properties(self, package):
        edit_text(package, 1, 'New', placeholder='subTitle')
        tx_body = package.read_xml(slide_part(1)).findall(f".//{qn('p:txBody')}")[1]
        assert [child.tag for child in tx_body] == [qn('a:bodyPr'), qn('a:lstStyle'), qn('a:p')]

    def test_missing_placeholder(self, package):
        with pytest.raises(NotFoundError, match="Placeholder type 'body' not found in slide 1"):
            edit_text(package, 1, 'x', placeholder='body')

    def test_missing_shape_id(self, package):
        with pytest.raises(NotFoundError, match="Shape with id '42' not found in slide 1"):
            edit_text(package, 1, 'x', shape_id=42)

    def test_missing_slide(self, package):
        with pytest.raises(NotFoundError):
            edit_text(package, 3, 'x', placeholder='title')

    @pytest.mark.parametrize('selectors', [{}, {'placeholder': 'title', 'shape_id': 2}])
    def test_exactly_one_selector(self, package, selectors):
        with pytest.raises(ValueError):
            edit_text(package, 1, 'x', **selectors)

    def test_ambiguous_match_uses_first(self, package):
        slide = package.read_xml(slide_part(1))
        sp_tree = find_sp_tree(slide)
        title = sp_tree.findall(qn('p:sp'))[0]
        sp_tree.append(deepcopy(title))
        package.write_xml(slide_part(1), slide)

        with pytest.warns(AmbiguousMatchWarning):
            edit_text(package, 1, 'Only the first', placeholder='ctrTitle')
        assert _texts(package) == ['Only the first', 'Subtitle', 'Title']


class TestFindShape:
    def test_descendant_strategy_is_the_fallback(self):
        slide = parse_fragment(
            '<p:sld {nsdecls}><p:cSld><p:spTree/></p:cSld></p:sld>'
        )
        find_sp_tree(slide).append(parse_fragment(NESTED_PLACEHOLDER_XML))
        sp, strategy = find_shape(slide, 'body', PLACEHOLDER_STRATEGIES)
        assert strategy == 'descendant-placeholder'
        assert sp.find(f".//{qn('p:cNvPr')}").get('id') == '9'

    def test_no_match(self, package):
        slide = package.read_xml(slide_part(1))
        assert find_shape(slide, 'pic', PLACEHOLDER_STRATEGIES) == (None, None)
        assert find_shape(slide, 77, SHAPE_ID_STRATEGIES) == (None, None)


class TestReplaceTextBody:
    def test_creates_text_body(self):
        sp = build_rect(5, 0, 0, 10, 10)
        replace_text_body(sp, 'Label')
        tx_body = sp.find(qn('p:txBody'))
        assert [child.tag for child in tx_body] == [qn('a:bodyPr'), qn('a:lstStyle'), qn('a:p')]
        assert list(iter_texts(sp)) == ['Label']

    def test_crlf_line_endings(self):
        sp = build_rect(5, 0, 0, 10, 10)
        replace_text_body(sp, 'One\r\nTwo')
        assert list(iter_texts(sp)) == ['One', 'Two']

    def test_empty_text_keeps_one_paragraph(self):
        sp = build_rect(5, 0, 0, 10, 10)
        replace_text_body(sp, '')
        paragraphs = sp.findall(f"{qn('p:txBody')}/{qn('a:p')}")
        assert len(paragraphs) == 1
        assert paragraphs[0].find(qn('a:endParaRPr')) is not None

    def test_run_properties(self):
        sp = build_rect(5, 0, 0, 10, 10)
        replace_text_body(sp, 'Label')
        r_pr = sp.find(f".//{qn('a:rPr')}")
        assert (r_pr.get('lang'), r_pr.get('dirty')) == ('en-US', '0')
