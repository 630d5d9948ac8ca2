"""Image file metadata."""

import logging
from pathlib import Path

from PIL import Image

from .models import Size

logger = logging.getLogger(__name__)


class ImageReadError(Exception):
    """Raised when an image file cannot be opened."""

    pass


def get_image_size(image_path: str | Path) -> Size:
    """Get the intrinsic size of an image file.

    Only the header is read; pixel data is not decoded.

    Args:
        image_path: Path to the image file.

    Returns:
        Image size in pixels.

    Raises:
        ImageReadError: If the file is missing or not a recognized image.
    """
    try:
        with Image.open(image_path) as img:
            width, height = img.size
    except OSError as e:
        raise ImageReadError(f"Failed to read {image_path}: {e}") from e
    logger.debug(f"Read image size {width}x{height} from {image_path}")
    return Size(width=width, height=height)
