"""Nearest-neighbour resizing and format-specific re-encoding."""

import io
import math
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from cyber_zen.core.errors import CompressionError, UserInputError

MIN_RATE = 0.1
MAX_RATE = 1.0
MIN_DIMENSION = 50

JPEG_BASE_QUALITY = 85
JPEG_MIN_QUALITY = 70
JPEG_MAX_QUALITY = 100

# Pillow format names that are re-encoded; everything else is copied as-is
LOSSY_FORMATS = {"JPEG"}
LOSSLESS_FORMATS = {"PNG", "GIF"}


def validate_rate(rate: float) -> float:
    if not MIN_RATE <= rate <= MAX_RATE:
        raise UserInputError(
            f"Compression rate must be between {MIN_RATE} and {MAX_RATE}, got {rate}"
        )
    return rate


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def target_size(width: int, height: int, rate: float) -> Tuple[int, int]:
    """Scale both axes by rate, rounding halves up, never below MIN_DIMENSION."""
    validate_rate(rate)
    return (
        max(MIN_DIMENSION, _round_half_up(width * rate)),
        max(MIN_DIMENSION, _round_half_up(height * rate)),
    )


def jpeg_quality(rate: float) -> int:
    """Map the size rate to a JPEG quality that never drops below 70."""
    quality = int(JPEG_BASE_QUALITY + (rate - 0.5) * 30)
    return max(JPEG_MIN_QUALITY, min(JPEG_MAX_QUALITY, quality))


def source_index(dst: int, src_dim: int, dst_dim: int) -> int:
    """Source coordinate sampled for destination coordinate dst."""
    return min(max(dst * src_dim // dst_dim, 0), src_dim - 1)


def resize_nearest(image: Image.Image, width: int, height: int) -> Image.Image:
    """Resize by picking the nearest source pixel, without any blending.

    Returns the image itself when the size is unchanged.
    """
    if width < 1 or height < 1:
        raise ValueError(f"Invalid target size {width}x{height}")

    src_width, src_height = image.size
    if (src_width, src_height) == (width, height):
        return image

    xs = [source_index(x, src_width, width) for x in range(width)]
    ys = [source_index(y, src_height, height) for y in range(height)]

    resized = Image.new(image.mode, (width, height))
    if image.mode == "P":
        resized.putpalette(image.getpalette())
        if "transparency" in image.info:
            resized.info["transparency"] = image.info["transparency"]

    src = image.load()
    dst = resized.load()
    for y, sy in enumerate(ys):
        for x, sx in enumerate(xs):
            dst[x, y] = src[sx, sy]
    return resized


def decode_image(data: bytes) -> Image.Image:
    """Decode raw bytes, raising CompressionError for anything unreadable."""
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise CompressionError(f"Cannot decode image: {e}") from e
    return image


def is_reencodable(image_format: Optional[str]) -> bool:
    return image_format in LOSSY_FORMATS or image_format in LOSSLESS_FORMATS


def encode_image(image: Image.Image, image_format: str, rate: float) -> bytes:
    """Encode image in image_format; only JPEG takes a quality setting."""
    buffer = io.BytesIO()
    if image_format == "JPEG":
        if image.mode not in ("RGB", "L", "CMYK"):
            image = image.convert("RGB")
        image.save(buffer, format="JPEG", quality=jpeg_quality(rate))
    elif image_format in LOSSLESS_FORMATS:
        image.save(buffer, format=image_format)
    else:
        raise CompressionError(f"Unsupported format for re-encoding: {image_format}")
    return buffer.getvalue()
