# region Docstring
"""
clipstack.thumbnails
Preview generation for captured images.
Overview:
- The classifier trusts the format tag and never decodes image bytes, so corrupt images
    can reach the history. This module is where image bytes are first decoded, and a
    decode failure here is non-fatal: the caller gets None and the entry is kept.
Contents:
- Functions:
    - make_thumbnail(data, size) -> Optional[bytes]:
        Shrinks the image to fit `size` keeping aspect ratio and returns PNG bytes.
        Results are memoised per (data, size).
Design notes:
- Images with an alpha channel (RGBA, LA, or P with transparency) are composited onto a
    transparent RGBA background; everything else is converted to RGB.
"""
# endregion
# region Imports
import logging
from functools import lru_cache
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

# endregion

logger = logging.getLogger("clipstack").getChild("Thumbnails")


@lru_cache(maxsize=128)
def make_thumbnail(data: bytes, size: tuple[int, int] = (200, 200)) -> Optional[bytes]:
    """
    Generate a PNG thumbnail from raw image bytes.

    Args:
        data (bytes): Encoded image bytes in any format Pillow understands.
        size (tuple[int, int]): Bounding box (width, height) of the thumbnail.

    Returns:
        Optional[bytes]: PNG encoded thumbnail, or None if the bytes cannot be decoded.
    """
    if not data:
        return None
    try:
        with Image.open(BytesIO(data)) as img:
            img_copy = img.copy()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        logger.debug(f"Could not decode image ({len(data)} bytes): {e}")
        return None

    # shrink the copy to fit longest side to size while maintaining aspect ratio
    img_copy.thumbnail(size)

    if img_copy.mode in ("RGBA", "LA") or (
        img_copy.mode == "P" and "transparency" in img_copy.info
    ):
        rgba = img_copy.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 0))
        background.paste(rgba, mask=rgba.split()[3])  # 3 is the alpha channel
        img_copy = background
    else:
        img_copy = img_copy.convert("RGB")

    buffered = BytesIO()
    img_copy.save(buffered, format="PNG")
    return buffered.getvalue()


__all__ = ["make_thumbnail"]
