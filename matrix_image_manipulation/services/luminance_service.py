import logging
import math

import numpy as np

from ..models.pixel_matrix import PixelMatrix
from ..models.errors import EmptyInputError

logger = logging.getLogger(__name__)


class LuminanceService:
    """
    Linear point transforms g(u) = m*u + b on the RGB channels.
    Alpha is passed through untouched.
    """

    @staticmethod
    def adjust_contrast(matrix: PixelMatrix, m: float, b: float) -> PixelMatrix:
        """
        Args:
            matrix (PixelMatrix): Input image, left untouched.
            m (float): Multiplicative gain.
            b (float): Additive offset.

        Returns:
            PixelMatrix: RGB = trunc(clamp(m*u + b, 0, 255)).
        """
        if matrix.height == 0:
            raise EmptyInputError("empty matrix")
        if not (math.isfinite(m) and math.isfinite(b)):
            raise ValueError(f"contrast parameters must be finite, got m={m} b={b}")

        rgb = matrix.pixels[..., :3].astype(np.float64)
        adjusted = np.empty_like(matrix.pixels)
        adjusted[..., :3] = np.clip(m * rgb + b, 0.0, 255.0).astype(np.uint8)
        adjusted[..., 3] = matrix.pixels[..., 3]

        logger.debug(f"Contrast m={m} b={b} on {matrix.width}x{matrix.height}")
        return PixelMatrix(adjusted)

    def adjust_luminosity(self, matrix: PixelMatrix, b: float) -> PixelMatrix:
        """Brightness shift; same as adjust_contrast with m=1."""
        return self.adjust_contrast(matrix, 1.0, b)
