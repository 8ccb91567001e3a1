"""
OOXML constants shared by every slide-studio command.

Relationship types and content types come straight from python-pptx so the
strings written into packages are the same ones python-pptx itself writes.
"""

from pptx.opc.constants import CONTENT_TYPE as CT
from pptx.opc.constants import RELATIONSHIP_TYPE as RT

# Namespaces that python-pptx's qn() does not need to know about
NS_CONTENT_TYPES = 'http://schemas.openxmlformats.org/package/2006/content-types'
NS_PACKAGE_RELS = 'http://schemas.openxmlformats.org/package/2006/relationships'

# Part locations inside a package, always '/'-separated
CONTENT_TYPES_PART = '[Content_Types].xml'
ROOT_RELS_PART = '_rels/.rels'
PRESENTATION_PART = 'ppt/presentation.xml'
PRESENTATION_RELS_PART = 'ppt/_rels/presentation.xml.rels'
SLIDES_DIR = 'ppt/slides'
SLIDE_RELS_DIR = 'ppt/slides/_rels'
LAYOUTS_DIR = 'ppt/slideLayouts'
MASTERS_DIR = 'ppt/slideMasters'
THEME_DIR = 'ppt/theme'
MEDIA_DIR = 'ppt/media'

# Relationship types used by the part mutators
REL_SLIDE = RT.SLIDE
REL_SLIDE_LAYOUT = RT.SLIDE_LAYOUT
REL_SLIDE_MASTER = RT.SLIDE_MASTER
REL_THEME = RT.THEME
REL_IMAGE = RT.IMAGE
REL_NOTES_SLIDE = RT.NOTES_SLIDE

# Content types
CT_PRESENTATION = CT.PML_PRESENTATION_MAIN
CT_SLIDE = CT.PML_SLIDE
CT_SLIDE_LAYOUT = CT.PML_SLIDE_LAYOUT
CT_SLIDE_MASTER = CT.PML_SLIDE_MASTER
CT_THEME = CT.OFC_THEME

# Image extension -> MIME type, the only media types the registry declares
IMAGE_CONTENT_TYPES = {
    'png': CT.PNG,
    'jpg': CT.JPEG,
    'jpeg': CT.JPEG,
    'gif': CT.GIF,
    'bmp': CT.BMP,
    'svg': 'image/svg+xml',
}

# EMU conversions (English Metric Units)
EMU_PER_INCH = 914400
EMU_PER_CM = 360000
EMU_PER_PT = 12700
EMU_PER_PX = 9525  # at 96 DPI

# Standard slide sizes
SLIDE_WIDTH_16_9 = 12192000
SLIDE_HEIGHT_16_9 = 6858000
SLIDE_WIDTH_4_3 = 9144000
SLIDE_HEIGHT_4_3 = 6858000

# Used when an image header cannot be read
DEFAULT_IMAGE_SIZE = (400, 300)

# OOXML convention: p:sldId values start at 256, p:sldMasterId at 2^31
FIRST_SLIDE_ID = 256
FIRST_MASTER_ID = 2147483648

# Footer-type placeholders inherit from the layout/master and are never generated
CHROME_PLACEHOLDERS = ('dt', 'ftr', 'sldNum')
TITLE_PLACEHOLDERS = ('title', 'ctrTitle')

THEME_COLORS = (
    'dk1', 'dk2', 'lt1', 'lt2',
    'accent1', 'accent2', 'accent3', 'accent4', 'accent5', 'accent6',
    'hlink', 'folHlink',
)

LAYOUT_NAMES = {
    1: 'Title Slide',
    2: 'Title and Content',
    3: 'Section Header',
    4: 'Two Content',
    5: 'Comparison',
    6: 'Title Only',
    7: 'Blank',
    8: 'Content with Caption',
    9: 'Picture with Caption',
    10: 'Title and Vertical Text',
    11: 'Vertical Title and Text',
}
