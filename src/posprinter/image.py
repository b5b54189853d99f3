"""
Raster Bit Images for ESC/POS Printers.

Converts images to the packed 1-bit raster format printed by GS v 0.
Images are fit within the maximum size and flattened onto white before
they are converted to grayscale and thresholded.
"""

from dataclasses import dataclass
from enum import IntEnum
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from .constants import BIT_IMAGE
from .errors import InputError
from .params import check_enum, pack_length

# Image size limits to prevent memory exhaustion from malicious/malformed images
MAX_IMAGE_DIMENSION = 10000  # Maximum width or height in pixels
MAX_IMAGE_PIXELS = 10_000_000  # Maximum total pixels (10 megapixels)

# Gray level at or below which a pixel is printed
INK_THRESHOLD = 128

ImageSource = Union[str, Path, bytes, Image.Image]


class ImageSizeError(InputError):
    """Image dimensions exceed safety limits."""

    pass


class BitImageSize(IntEnum):
    """Raster size multiplier (the m byte of GS v 0)."""

    NORMAL = 0
    DOUBLE_WIDTH = 1
    DOUBLE_HEIGHT = 2
    QUADRUPLE = 3


@dataclass(frozen=True)
class BitImageOption:
    """
    Raster options.

    Attributes:
        max_width: Maximum width in dots, a multiple of 8 (None for no limit)
        max_height: Maximum height in dots, a multiple of 8 (None for no limit)
        size: Size multiplier applied by the printer
    """

    max_width: Optional[int] = 512
    max_height: Optional[int] = 512
    size: BitImageSize = BitImageSize.NORMAL

    def __post_init__(self):
        for name, value in (("width", self.max_width), ("height", self.max_height)):
            if value is not None and (value <= 0 or value % 8 != 0):
                raise InputError(f"Max {name} must be a positive multiple of 8 (got {value})")


def load_image(source: ImageSource) -> Image.Image:
    """
    Load an image from various sources.

    Args:
        source: File path, encoded image bytes, or PIL Image

    Returns:
        PIL Image object

    Raises:
        ImageSizeError: If image dimensions exceed safety limits
        InputError: If the source cannot be read or decoded
    """
    if isinstance(source, Image.Image):
        img = source
    elif isinstance(source, (str, Path, bytes)):
        try:
            img = Image.open(BytesIO(source) if isinstance(source, bytes) else source)
            img.load()
        except (OSError, UnidentifiedImageError) as e:
            raise InputError(f"Failed to load image: {e}") from e
    else:
        raise InputError(f"Unsupported image source type: {type(source)}")

    # Validate image dimensions to prevent memory exhaustion
    if img.width > MAX_IMAGE_DIMENSION or img.height > MAX_IMAGE_DIMENSION:
        raise ImageSizeError(
            f"Image dimensions ({img.width}x{img.height}) exceed maximum "
            f"({MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION})"
        )
    if img.width * img.height > MAX_IMAGE_PIXELS:
        raise ImageSizeError(
            f"Image pixel count ({img.width * img.height:,}) exceeds "
            f"maximum ({MAX_IMAGE_PIXELS:,})"
        )

    return img


def fit_size(width: int, height: int, box_width: int, box_height: int) -> tuple[int, int]:
    """Largest size with the same aspect ratio that fits in the box."""
    ratio = min(box_width / width, box_height / height)
    return max(int(width * ratio + 0.5), 1), max(int(height * ratio + 0.5), 1)


def flatten_alpha(image: Image.Image) -> Image.Image:
    """Composite the image over opaque white and drop transparency."""
    raw = image.convert("RGBA").tobytes()
    flat = bytearray(len(raw))
    for i in range(0, len(raw), 4):
        alpha = raw[i + 3]
        background = (255 - alpha) * 255
        flat[i] = (raw[i] * alpha + background) // 255
        flat[i + 1] = (raw[i + 1] * alpha + background) // 255
        flat[i + 2] = (raw[i + 2] * alpha + background) // 255
        flat[i + 3] = 255
    return Image.frombytes("RGBA", image.size, bytes(flat))


class BitImage:
    """An image prepared for raster printing."""

    def __init__(self, source: ImageSource, option: Optional[BitImageOption] = None):
        """
        Prepare an image.

        Args:
            source: File path, encoded image bytes, or PIL Image
            option: Raster options (default: 512x512 max, normal size)

        Raises:
            InputError: If the image cannot be loaded or is too large
        """
        self.option = option or BitImageOption()
        image = self._resize(load_image(source))
        self.image = flatten_alpha(image).convert("L")

    def _resize(self, image: Image.Image) -> Image.Image:
        max_width, max_height = self.option.max_width, self.option.max_height

        # A single bound is applied to both sides
        if max_width is not None and max_height is None:
            box = (max_width, max_width) if image.width > max_width else None
        elif max_width is None and max_height is not None:
            box = (max_height, max_height) if image.height > max_height else None
        elif max_width is not None and max_height is not None:
            too_big = image.width > max_width or image.height > max_height
            box = (max_width, max_height) if too_big else None
        else:
            box = None

        if box is None:
            return image
        return image.resize(fit_size(image.width, image.height, *box), Image.Resampling.NEAREST)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def width_bytes(self) -> int:
        """Bytes per raster row."""
        return (self.image.width + 7) // 8

    def raster_data(self) -> bytes:
        """
        Pack pixels into raster bytes.

        Returns packed bytes where each bit represents a pixel.
        MSB is leftmost pixel. Ink pixels are 1, paper is 0. Rows are padded
        with zero bits to a whole byte.
        """
        width, height = self.image.size
        pixels = self.image.tobytes()
        result = bytearray(self.width_bytes * height)

        for row in range(height):
            offset = row * width
            out = row * self.width_bytes
            for col in range(width):
                if pixels[offset + col] <= INK_THRESHOLD:
                    result[out + col // 8] |= 0x80 >> (col % 8)

        return bytes(result)

    def command(self) -> bytes:
        """Build GS v 0 m xL xH yL yH d1...dk."""
        x_low, x_high = pack_length(self.width_bytes)
        y_low, y_high = pack_length(self.height)
        size = check_enum("Bit image size", BitImageSize, self.option.size)
        header = BIT_IMAGE + bytes([size, x_low, x_high, y_low, y_high])
        return header + self.raster_data()
