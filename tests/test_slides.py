from pptx.oxml.ns import qn
import pytest

from slide_studio.constants import REL_NOTES_SLIDE, REL_SLIDE_LAYOUT
from slide_studio.errors import NotFoundError
from slide_studio.ids import numeric_ids
from slide_studio.inventory import list_slides
from slide_studio.oxml import get_placeholder_info, get_shape_name
from slide_studio.package import slide_part, slide_rels_part
from slide_studio.relationships import Relationship, find_by_type
from slide_studio.slides import add_slide, clone_slide, delete_slide


def _shapes(package, slide_num):
    return list(package.read_xml(slide_part(slide_num)).iter(qn('p:sp')))


class TestAddSlide:
    def test_insert_then_list(self, package):
        ref = add_slide(package, 2)
        slides = list_slides(package)
        assert len(slides) == 2
        assert slides[1].layout_index == 2
        assert slides[1].slide_num == 2
        assert (ref.slide_num, ref.slide_id, ref.r_id) == (2, 257, 'rId7')

    def test_placeholder_shapes_follow_layout(self, package):
        add_slide(package, 2)
        shapes = _shapes(package, 2)
        assert [get_placeholder_info(sp).type for sp in shapes] == ['title', 'body']
        assert get_placeholder_info(shapes[1]).idx == '1'
        assert [get_shape_name(sp) for sp in shapes] == ['title 1', 'body 2']
        assert list_slides(package)[1].title == 'Title and Content'

    def test_blank_layout_has_no_shapes(self, package):
        add_slide(package, 7)
        assert _shapes(package, 2) == []

    def test_picture_placeholder_skipped(self, package):
        add_slide(package, 9)
        assert [get_placeholder_info(sp).type for sp in _shapes(package, 2)] == ['title', 'body']

    def test_writes_layout_relationship(self, package):
        add_slide(package, 4)
        rels = package.read_rels(slide_rels_part(2))
        assert rels == [Relationship('rId1', REL_SLIDE_LAYOUT, '../slideLayouts/slideLayout4.xml')]

    def test_registers_content_type(self, package):
        add_slide(package, 2)
        assert '/ppt/slides/slide2.xml' in package.read_content_types().overrides

    @pytest.mark.parametrize('position, expected', [
        (None, [1, 2]),
        (1, [2, 1]),
        (0, [2, 1]),
        (2, [1, 2]),
        (10, [1, 2]),
    ])
    def test_positions(self, package, position, expected):
        add_slide(package, 2, position=position)
        assert [s.slide_num for s in list_slides(package)] == expected

    @pytest.mark.parametrize('position', [None, 0, 1, 5])
    def test_positions_on_empty_deck(self, package, position):
        delete_slide(package, 1)
        ref = add_slide(package, 2, position=position)
        slides = list_slides(package)
        assert [s.slide_num for s in slides] == [ref.slide_num]
        assert f'/ppt/slides/slide{ref.slide_num}.xml' in package.read_content_types().overrides

    def test_insert_in_the_middle(self, package):
        add_slide(package, 2)
        add_slide(package, 3)
        add_slide(package, 6, position=2)
        assert [s.slide_num for s in list_slides(package)] == [1, 4, 2, 3]

    def test_missing_layout_writes_nothing(self, package):
        before = package.read_bytes('ppt/presentation.xml')
        with pytest.raises(NotFoundError):
            add_slide(package, 99)
        assert not package.exists(slide_part(2))
        assert package.read_bytes('ppt/presentation.xml') == before


class TestCloneSlide:
    def test_ids_are_offset(self, package):
        ref = clone_slide(package, 1)
        assert ref.slide_num == 2
        offset = 1000 + 2 * 100
        assert sorted(numeric_ids(package.read_xml(slide_part(2)))) == [1 + offset, 2 + offset, 3 + offset]

    def test_keeps_layout(self, package):
        add_slide(package, 5)
        clone_slide(package, 2)
        assert list_slides(package)[2].layout_index == 5

    def test_notes_relationship_not_copied(self, package):
        rels = package.read_rels(slide_rels_part(1))
        rels.append(Relationship('rId2', REL_NOTES_SLIDE, '../notesSlides/notesSlide1.xml'))
        package.write_rels(slide_rels_part(1), rels)

        clone_slide(package, 1)
        copied = package.read_rels(slide_rels_part(2))
        assert find_by_type(copied, REL_NOTES_SLIDE) == []
        assert len(find_by_type(copied, REL_SLIDE_LAYOUT)) == 1

    def test_position(self, package):
        add_slide(package, 2)
        clone_slide(package, 2, position=1)
        assert [s.slide_num for s in list_slides(package)] == [3, 1, 2]

    def test_clone_then_delete_source(self, package):
        clone_slide(package, 1)
        cloned_ids = sorted(numeric_ids(package.read_xml(slide_part(2))))

        delete_slide(package, 1)
        slides = list_slides(package)
        assert len(slides) == 1
        assert slides[0].slide_num == 2
        assert slides[0].title == 'Title'
        assert sorted(numeric_ids(package.read_xml(slide_part(2)))) == cloned_ids

    def test_missing_source(self, package):
        with pytest.raises(NotFoundError):
            clone_slide(package, 3)


class TestDeleteSlide:
    def test_delete_completeness(self, package):
        add_slide(package, 2)
        entry = delete_slide(package, 2)
        assert entry.slide_num == 2

        assert not package.exists(slide_part(2))
        assert not package.exists(slide_rels_part(2))
        assert all(rel.id != entry.r_id for rel in package.read_presentation_rels())
        sld_ids = package.read_presentation().iter(qn('p:sldId'))
        assert all(sld_id.get(qn('r:id')) != entry.r_id for sld_id in sld_ids)
        assert '/ppt/slides/slide2.xml' not in package.read_content_types().overrides
        assert [s.slide_num for s in list_slides(package)] == [1]

    def test_delete_by_position_not_file_number(self, package):
        add_slide(package, 2, position=1)
        delete_slide(package, 1)
        assert [s.slide_num for s in list_slides(package)] == [1]

    def test_missing_parts_are_not_an_error(self, package):
        package.remove(slide_rels_part(1))
        package.remove(slide_part(1))
        delete_slide(package, 1)
        assert list_slides(package) == []

    def test_out_of_range(self, package):
        with pytest.raises(NotFoundError):
            delete_slide(package, 2)

    def test_slide_numbers_follow_highest_file(self, package):
        add_slide(package, 2)
        delete_slide(package, 2)
        assert add_slide(package, 2).slide_num == 2
        add_slide(package, 2)
        delete_slide(package, 2)
        assert add_slide(package, 2).slide_num == 4
