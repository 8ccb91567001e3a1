from slide_studio.constants import REL_IMAGE, REL_SLIDE, REL_SLIDE_LAYOUT
from slide_studio.relationships import (
    Relationship,
    add_image_relationship,
    add_layout_relationship,
    add_relationship,
    find_by_id,
    find_by_target,
    find_by_type,
    next_relationship_id,
    parse_relationships,
    remove_relationship,
    serialize_relationships,
)

RELS_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    f'<Relationship Id="rId1" Type="{REL_SLIDE_LAYOUT}" Target="../slideLayouts/slideLayout2.xml"/>'
    f'<Relationship Id="rId4" Type="{REL_IMAGE}" Target="../media/image1.png"/>'
    '<Relationship Id="rId7" Type="http://example.com/link" Target="https://example.com" TargetMode="External"/>'
    '<Relationship Type="http://example.com/broken" Target="nowhere.xml"/>'
    '</Relationships>'
)


class TestParse:
    def test_reads_every_complete_relationship(self):
        rels = parse_relationships(RELS_XML)
        assert [rel.id for rel in rels] == ['rId1', 'rId4', 'rId7']
        assert rels[0].target == '../slideLayouts/slideLayout2.xml'

    def test_external_target_mode(self):
        rels = parse_relationships(RELS_XML)
        assert rels[2].is_external
        assert not rels[0].is_external

    def test_empty_input(self):
        assert parse_relationships(b'') == []
        assert parse_relationships(None) == []

    def test_serialize_keeps_order_and_target_mode(self):
        rels = parse_relationships(RELS_XML)
        again = parse_relationships(serialize_relationships(rels))
        assert again == rels


class TestIds:
    def test_first_id(self):
        assert next_relationship_id([]) == 'rId1'

    def test_max_plus_one_not_gap_fill(self):
        rels = parse_relationships(RELS_XML)
        assert next_relationship_id(rels) == 'rId8'

    def test_non_numeric_ids_ignored(self):
        rels = [Relationship('rIdFoo', REL_SLIDE, 'slides/slide1.xml')]
        assert next_relationship_id(rels) == 'rId1'

    def test_add_returns_new_id(self):
        rels = []
        assert add_relationship(rels, REL_SLIDE, 'slides/slide1.xml') == 'rId1'
        assert add_relationship(rels, REL_SLIDE, 'slides/slide2.xml') == 'rId2'
        assert len(rels) == 2


class TestEdit:
    def test_remove(self):
        rels = parse_relationships(RELS_XML)
        assert remove_relationship(rels, 'rId4')
        assert find_by_id(rels, 'rId4') is None

    def test_remove_absent_id(self):
        rels = parse_relationships(RELS_XML)
        assert not remove_relationship(rels, 'rId99')
        assert len(rels) == 3

    def test_find_by_type(self):
        rels = parse_relationships(RELS_XML)
        assert [rel.id for rel in find_by_type(rels, REL_SLIDE_LAYOUT)] == ['rId1']
        assert find_by_type(rels, REL_SLIDE) == []

    def test_find_by_target_matches_file_name(self):
        rels = parse_relationships(RELS_XML)
        assert find_by_target(rels, 'image1.png').id == 'rId4'
        assert find_by_target(rels, 'image2.png') is None

    def test_typed_helpers(self):
        rels = []
        add_layout_relationship(rels, 3)
        add_image_relationship(rels, 'image5.jpeg')
        assert rels[0] == Relationship('rId1', REL_SLIDE_LAYOUT, '../slideLayouts/slideLayout3.xml')
        assert rels[1] == Relationship('rId2', REL_IMAGE, '../media/image5.jpeg')
