"""Raster encoding and BMP export for rendered images.

This module turns an encoded float image into 8-bit pixels and writes
them as an uncompressed 24-bit BMP:

    - 54-byte header (14-byte file header + 40-byte info header)
    - pixel rows stored bottom-to-top, 3 bytes per pixel in B, G, R order
    - every row zero-padded to a multiple of 4 bytes
    - 0x0B13 pixels/meter resolution on both axes (72 dpi)

The file itself is written by Pillow; pack_pixel_rows produces the same
pixel array on its own, for callers that want the raw rows.

Example:
    >>> from orthotrace.output.raster import save_bmp
    >>> save_bmp(renderer.get_image_numpy(), "output.bmp")
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)

# Size of the BMP file header plus the BITMAPINFOHEADER
BMP_HEADER_SIZE = 54

# 72 dpi, stored by Pillow as int(72 * 39.3701 + 0.5) = 0x0B13 pixels/meter
BMP_DPI = (72, 72)

BYTES_PER_PIXEL = 3


def row_padding(width: int) -> int:
    """Number of zero bytes needed to pad one row to a multiple of 4."""
    return (4 - width * BYTES_PER_PIXEL % 4) % 4


def raw_data_size(width: int, height: int) -> int:
    """Size in bytes of the padded pixel array."""
    return (width * BYTES_PER_PIXEL + row_padding(width)) * height


def file_size(width: int, height: int) -> int:
    """Total size in bytes of a 24-bit BMP file."""
    return BMP_HEADER_SIZE + raw_data_size(width, height)


def quantize(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert an encoded float image to 8-bit channels.

    Each channel becomes clamp(c * 255, 0, 255), truncated toward zero.
    This is the only place colors are clamped.

    Args:
        image: Image array of shape (H, W, 3), nominally in [0, 1].

    Returns:
        Array of shape (H, W, 3) with dtype uint8.
    """
    return np.clip(np.asarray(image, dtype=np.float64) * 255.0, 0.0, 255.0).astype(np.uint8)


def _check_image_shape(image: npt.NDArray) -> None:
    if image.ndim != 3 or image.shape[2] != 3 or image.shape[0] == 0 or image.shape[1] == 0:
        raise ValueError(f"Expected a non-empty (H, W, 3) image, got shape {image.shape}")


def pack_pixel_rows(pixels: npt.NDArray[np.uint8]) -> bytes:
    """Pack 8-bit RGB pixels into the BMP pixel array layout.

    Reference packer for the rows save_bmp writes. Files are written by
    Pillow, so this is not on the write path; it exists for callers that
    need the raw pixel array and to check the written layout against.

    Args:
        pixels: Array of shape (H, W, 3), top row first, channels R, G, B.

    Returns:
        The pixel array: rows bottom-to-top, channels B, G, R, each row
        followed by row_padding(W) zero bytes.

    Raises:
        ValueError: If pixels is not an (H, W, 3) array.
    """
    _check_image_shape(pixels)
    height, width, _ = pixels.shape

    # Bottom row first, channels reversed to B, G, R
    rows = np.asarray(pixels, dtype=np.uint8)[::-1, :, ::-1].reshape(height, width * BYTES_PER_PIXEL)

    padded = np.zeros((height, width * BYTES_PER_PIXEL + row_padding(width)), dtype=np.uint8)
    padded[:, : width * BYTES_PER_PIXEL] = rows
    return padded.tobytes()


def encode_bmp(image: npt.NDArray[np.floating]) -> bytes:
    """Encode a float image as the bytes of a 24-bit BMP file.

    Produces the same bytes save_bmp writes, in memory instead of on disk.

    Args:
        image: Encoded (display-referred) image of shape (H, W, 3), top row
            first.

    Returns:
        The complete BMP file contents.

    Raises:
        ValueError: If image is not an (H, W, 3) array.
    """
    _check_image_shape(np.asarray(image))
    buffer = io.BytesIO()
    _to_pil(image).save(buffer, format="BMP", dpi=BMP_DPI)
    return buffer.getvalue()


def save_bmp(image: npt.NDArray[np.floating], filepath: str | Path) -> Path:
    """Save a float image as a 24-bit BMP file.

    Args:
        image: Encoded (display-referred) image of shape (H, W, 3), top row
            first.
        filepath: Output file path.

    Returns:
        Path of the written file.

    Raises:
        ValueError: If image is not an (H, W, 3) array.
        OSError: If the file cannot be opened or written.
    """
    image = np.asarray(image)
    _check_image_shape(image)
    height, width, _ = image.shape
    output_file = Path(filepath)

    logger.info("%d bytes required for pixels in a row", width * BYTES_PER_PIXEL)
    logger.info("Padding of %d bytes will be used at the end of each row", row_padding(width))
    logger.info("Size of raw BMP data: %d bytes", raw_data_size(width, height))
    logger.info("Total size of BMP image file: %d bytes", file_size(width, height))

    _to_pil(image).save(output_file, format="BMP", dpi=BMP_DPI)

    logger.info("Wrote %s", output_file)
    return output_file


def _to_pil(image: npt.NDArray[np.floating]) -> PILImage.Image:
    """Quantize an image and wrap it in a Pillow RGB image."""
    return PILImage.fromarray(quantize(image))
