"""Image dimensions for pictures added to slides."""

from PIL import Image, UnidentifiedImageError
import logging

from .constants import DEFAULT_IMAGE_SIZE

logger = logging.getLogger(__name__)


def image_size(path):
    """
    Pixel size of an image file.

    Args:
        path: Path to the image

    Returns:
        (width, height) in pixels, or (400, 300) when the file cannot be
        decoded (SVG, truncated or unknown formats)
    """
    try:
        with Image.open(path) as img:
            return img.width, img.height
    except (UnidentifiedImageError, OSError) as e:
        logger.debug(f'Could not read image size of {path}: {e}')
        return DEFAULT_IMAGE_SIZE
