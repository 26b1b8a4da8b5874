import logging

import numpy as np

from ..models.pixel_matrix import PixelMatrix
from ..models.errors import EmptyInputError

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights, in thousandths
LUMA_WEIGHTS = np.array([299, 587, 114], dtype=np.int64)


class ColorimetryService:
    """Colour-space conversions. No I/O, no neighbourhood access."""

    @staticmethod
    def convert_to_grey_scale(matrix: PixelMatrix) -> PixelMatrix:
        """
        luminance = trunc(0.299 R + 0.587 G + 0.114 B), alpha kept.

        Evaluated in integer thousandths so the truncation is exact and a
        grey pixel maps onto itself. A float evaluation of the same formula
        can land just below an integer and truncate one level lower; this
        exact form is intended and may differ from it by 1 on such inputs.
        """
        if matrix.height == 0:
            raise EmptyInputError("empty matrix")

        rgb = matrix.pixels[..., :3].astype(np.int64)
        luminance = ((rgb * LUMA_WEIGHTS).sum(axis=-1) // 1000).astype(np.uint8)

        grey = np.empty_like(matrix.pixels)
        grey[..., 0] = luminance
        grey[..., 1] = luminance
        grey[..., 2] = luminance
        grey[..., 3] = matrix.pixels[..., 3]

        logger.debug(f"Greyscale on {matrix.width}x{matrix.height}")
        return PixelMatrix(grey)
