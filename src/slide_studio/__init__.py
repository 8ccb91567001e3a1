"""
slide-studio: edit unpacked PowerPoint packages at the part level.
"""

from .archive import pack, unpack
from .base import create_base, create_base_pptx
from .content_types import ContentTypes, ensure_image_type
from .errors import AmbiguousMatchWarning, NotFoundError, PackageStructureError, SlideStudioError
from .ids import RelationshipIdAllocator, ShapeIdAllocator, SlideIdAllocator, SlideNumberAllocator
from .inventory import LayoutEntry, SlideEntry, get_slide, list_layouts, list_slides
from .package import Package
from .relationships import Relationship
from .shapes import PictureRef, add_image, add_shape
from .slides import SlideRef, add_slide, clone_slide, delete_slide
from .template import apply_template
from .text import edit_text
from .visualize import visualize_slide

__version__ = '0.1.0'

__all__ = [
    'AmbiguousMatchWarning',
    'ContentTypes',
    'LayoutEntry',
    'NotFoundError',
    'Package',
    'PackageStructureError',
    'PictureRef',
    'Relationship',
    'RelationshipIdAllocator',
    'ShapeIdAllocator',
    'SlideEntry',
    'SlideIdAllocator',
    'SlideNumberAllocator',
    'SlideRef',
    'SlideStudioError',
    'add_image',
    'add_shape',
    'add_slide',
    'apply_template',
    'clone_slide',
    'create_base',
    'create_base_pptx',
    'delete_slide',
    'edit_text',
    'ensure_image_type',
    'get_slide',
    'list_layouts',
    'list_slides',
    'pack',
    'unpack',
    'visualize_slide',
]
