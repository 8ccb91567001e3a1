from pptx.oxml.ns import qn
from pptx.util import Inches, Pt
import pytest

from slide_studio.constants import IMAGE_CONTENT_TYPES, REL_IMAGE
from slide_studio.errors import NotFoundError
from slide_studio.images import image_size
from slide_studio.oxml import find_sp_tree, get_shape_id
from slide_studio.package import slide_part, slide_rels_part
from slide_studio.relationships import find_by_id
from slide_studio.shapes import add_image, add_shape, build_rect, next_media_name


def _shape(package, shape_id, slide_num=1):
    for elem in package.read_xml(slide_part(slide_num)).iter(qn('p:sp'), qn('p:pic')):
        if get_shape_id(elem) == shape_id:
            return elem
    return None


class TestAddShape:
    def test_textbox(self, package):
        shape_id = add_shape(package, 1, 'textbox', text='Hello', font_size=24, bold=True, align='center')
        assert shape_id == 4

        sp = _shape(package, 4)
        assert sp.find(f".//{qn('a:t')}").text == 'Hello'
        r_pr = sp.find(f".//{qn('a:rPr')}")
        assert r_pr.get('sz') == '2400'
        assert r_pr.get('b') == '1'
        assert r_pr.get('i') is None
        assert sp.find(f".//{qn('a:pPr')}").get('algn') == 'ctr'
        assert r_pr.find(f"{qn('a:solidFill')}/{qn('a:schemeClr')}").get('val') == 'dk1'

    def test_geometry_in_emu(self, package):
        add_shape(package, 1, 'text', x=Inches(2), y=Inches(0.5), width=Inches(3), height=Inches(1))
        off = _shape(package, 4).find(f".//{qn('a:off')}")
        ext = _shape(package, 4).find(f".//{qn('a:ext')}")
        assert (off.get('x'), off.get('y')) == ('1828800', '457200')
        assert (ext.get('cx'), ext.get('cy')) == ('2743200', '914400')

    def test_hex_colour(self, package):
        add_shape(package, 1, 'textbox', text='Red', color='#ff0000')
        clr = _shape(package, 4).find(f".//{qn('a:rPr')}/{qn('a:solidFill')}/{qn('a:srgbClr')}")
        assert clr.get('val') == 'FF0000'

    def test_rectangle_defaults_to_accent1(self, package):
        add_shape(package, 1, 'rect')
        sp_pr = _shape(package, 4).find(qn('p:spPr'))
        assert sp_pr.find(f"{qn('a:solidFill')}/{qn('a:schemeClr')}").get('val') == 'accent1'
        assert sp_pr.find(f"{qn('a:ln')}/{qn('a:noFill')}") is not None

    def test_rectangle_stroke(self, package):
        add_shape(package, 1, 'rectangle', fill='00FF00', stroke='accent2', stroke_width=Pt(3))
        ln = _shape(package, 4).find(f"{qn('p:spPr')}/{qn('a:ln')}")
        assert ln.get('w') == '38100'
        assert ln.find(f"{qn('a:solidFill')}/{qn('a:schemeClr')}").get('val') == 'accent2'

    def test_unknown_kind(self, package):
        with pytest.raises(ValueError, match='Unknown shape type'):
            add_shape(package, 1, 'circle')

    def test_invalid_colour(self, package):
        with pytest.raises(ValueError, match='Invalid color'):
            add_shape(package, 1, 'textbox', color='chartreuse')

    def test_missing_slide(self, package):
        with pytest.raises(NotFoundError):
            add_shape(package, 5, 'rect')

    def test_spliced_before_ext_lst(self, package):
        slide = package.read_xml(slide_part(1))
        sp_tree = find_sp_tree(slide)
        sp_tree.append(sp_tree.makeelement(qn('p:extLst'), {}))
        package.write_xml(slide_part(1), slide)

        add_shape(package, 1, 'rect')
        children = list(find_sp_tree(package.read_xml(slide_part(1))))
        assert children[-1].tag == qn('p:extLst')
        assert get_shape_id(children[-2]) == 4

    def test_ids_keep_increasing(self, package):
        assert [add_shape(package, 1, 'rect') for _ in range(3)] == [4, 5, 6]

    def test_build_rect_without_fill(self):
        sp = build_rect(7, 0, 0, 10, 10, fill=None)
        assert sp.find(f"{qn('p:spPr')}/{qn('a:noFill')}") is not None


class TestAddImage:
    def test_adds_picture(self, package, png_file):
        ref = add_image(package, 1, png_file)
        assert ref.media_name == 'image1.png'
        assert ref.shape_id == 4
        assert package.read_bytes('ppt/media/image1.png') == png_file.read_bytes()

        rel = find_by_id(package.read_rels(slide_rels_part(1)), ref.r_id)
        assert rel.type == REL_IMAGE
        assert rel.target == '../media/image1.png'

        pic = _shape(package, 4)
        assert pic.tag == qn('p:pic')
        assert pic.find(f".//{qn('a:blip')}").get(qn('r:embed')) == ref.r_id

    def test_default_size_from_pixels(self, package, png_file):
        add_image(package, 1, png_file)
        ext = _shape(package, 4).find(f".//{qn('a:ext')}")
        assert (ext.get('cx'), ext.get('cy')) == (str(2 * 9525), str(9525))

    def test_explicit_size(self, package, png_file):
        add_image(package, 1, png_file, width=Inches(2), height=Inches(1))
        ext = _shape(package, 4).find(f".//{qn('a:ext')}")
        assert (ext.get('cx'), ext.get('cy')) == ('1828800', '914400')

    def test_content_type_declared_once(self, package, png_file):
        add_image(package, 1, png_file)
        add_image(package, 1, png_file)
        registry = package.read_content_types()
        assert registry.defaults['png'] == IMAGE_CONTENT_TYPES['png']
        assert package.list_dir('ppt/media') == ['image1.png', 'image2.png']

    def test_extension_lowercased(self, package, png_file, tmp_path):
        upper = tmp_path / 'PHOTO.PNG'
        upper.write_bytes(png_file.read_bytes())
        assert add_image(package, 1, upper).media_name == 'image1.png'

    def test_media_name_skips_taken_names(self, package):
        package.write_bytes('ppt/media/image2.png', b'')
        assert next_media_name(package, 'png') == 'image3.png'

    def test_missing_image(self, package, tmp_path):
        with pytest.raises(NotFoundError, match='Image file not found'):
            add_image(package, 1, tmp_path / 'missing.png')


class TestImageSize:
    def test_png(self, png_file):
        assert image_size(png_file) == (2, 1)

    def test_unreadable_falls_back(self, tmp_path):
        path = tmp_path / 'broken.png'
        path.write_bytes(b'not an image')
        assert image_size(path) == (400, 300)
