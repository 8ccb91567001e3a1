from slide_studio.ids import (
    RelationshipIdAllocator,
    ShapeIdAllocator,
    SlideIdAllocator,
    SlideNumberAllocator,
    numeric_ids,
)
from slide_studio.package import slide_part
from slide_studio.relationships import Relationship


class TestFloors:
    def test_empty_scopes_start_at_floor(self):
        assert SlideNumberAllocator().allocate() == 1
        assert ShapeIdAllocator().allocate() == 2
        assert SlideIdAllocator().allocate() == 256
        assert RelationshipIdAllocator().allocate() == 'rId1'

    def test_values_below_floor_do_not_lower_it(self):
        assert SlideIdAllocator([3, 7]).allocate() == 256


class TestAllocation:
    def test_max_plus_one(self):
        assert ShapeIdAllocator([2, 9, 4]).allocate() == 10

    def test_consecutive_allocations_are_distinct(self):
        allocator = SlideIdAllocator([256, 300])
        assert [allocator.allocate() for _ in range(3)] == [301, 302, 303]

    def test_peek_does_not_reserve(self):
        allocator = RelationshipIdAllocator.for_relationships([Relationship('rId3', 't', 'x')])
        assert allocator.peek() == 'rId4'
        assert allocator.allocate() == 'rId4'
        assert allocator.peek() == 'rId5'


class TestScopes:
    def test_slide_numbers_from_package(self, package):
        assert SlideNumberAllocator.for_package(package).allocate() == 2

    def test_slide_number_gaps_are_not_refilled(self, package):
        package.write_bytes(slide_part(7), package.read_bytes(slide_part(1)))
        assert SlideNumberAllocator.for_package(package).allocate() == 8

    def test_shape_ids_from_slide(self, package):
        slide = package.read_xml(slide_part(1))
        assert sorted(numeric_ids(slide)) == [1, 2, 3]
        assert ShapeIdAllocator.for_slide(slide).allocate() == 4

    def test_slide_ids_from_presentation(self, package):
        assert SlideIdAllocator.for_presentation(package.read_presentation()).allocate() == 257

    def test_relationship_ids_from_list(self, package):
        allocator = RelationshipIdAllocator.for_relationships(package.read_presentation_rels())
        assert allocator.allocate() == 'rId7'
