"""Output module for raster encoding and image export.

Components:
    raster: 8-bit quantization, BMP row packing and BMP file export
"""

from .raster import (
    encode_bmp,
    file_size,
    pack_pixel_rows,
    quantize,
    raw_data_size,
    row_padding,
    save_bmp,
)

__all__ = [
    "quantize",
    "row_padding",
    "raw_data_size",
    "file_size",
    "pack_pixel_rows",
    "encode_bmp",
    "save_bmp",
]
