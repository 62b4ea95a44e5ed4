"""Image decoding for ``image`` statements."""
import logging
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from .errors import ImageDecodeError
from .models import ImageData
from .paths import resolve_asset

logger = logging.getLogger(__name__)


def decode_image(path: Union[str, Path]) -> ImageData:
    """
    Decode *path* into an RGBA pixel buffer.

    Raises:
        ImageDecodeError: if the file is missing, unreadable or not an image
    """
    try:
        with Image.open(path) as img:
            channels = len(img.getbands())
            rgba = img.convert("RGBA")
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        raise ImageDecodeError(f"Failed to load image: {path} ({exc})") from exc

    return ImageData(
        pixels=rgba.tobytes(),
        width=rgba.width,
        height=rgba.height,
        channels=channels,
    )


class ImageLoader:
    """Resolves slideshow image paths against a base directory and decodes them."""

    def __init__(self, base_dir: Optional[Path] = None, debug: bool = False):
        self.base_dir = Path(base_dir) if base_dir else None
        self.debug = debug

    def __call__(self, filename: str) -> ImageData:
        path = resolve_asset(filename, base_dir=self.base_dir)
        data = decode_image(path)
        if self.debug:
            logger.debug(f"📷 Decoded {path}: {data.width}x{data.height}, {data.channels} channels")
        return data
