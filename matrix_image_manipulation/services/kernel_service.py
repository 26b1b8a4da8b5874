import logging
import math

import numpy as np

from ..models.kernel import Kernel
from ..models.errors import InvalidKernelError

logger = logging.getLogger(__name__)


class KernelService:
    """
    Builds convolution kernels. Pure numpy, no I/O.
    """

    @staticmethod
    def validate(size: int, sigma: float) -> None:
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
            raise InvalidKernelError(f"kernel size must be an integer, got {size!r}")
        if size < 1 or size % 2 == 0:
            raise InvalidKernelError(f"kernel size must be a positive odd integer, got {size}")
        if not math.isfinite(sigma) or sigma <= 0:
            raise InvalidKernelError(f"sigma must be a positive finite number, got {sigma}")

    def generate_gaussian_kernel(self, size: int, sigma: float) -> Kernel:
        """
        Square Gaussian kernel normalised so its weights sum to 1.

        Args:
            size (int): Side length, positive and odd so the kernel has a centre.
            sigma (float): Standard deviation of the Gaussian.

        Returns:
            Kernel: weights[dy + offset][dx + offset] = g(dx, dy) / sum(g).
        """
        self.validate(size, sigma)
        offset = size // 2

        d = np.arange(-offset, offset + 1, dtype=np.float64)
        dx, dy = np.meshgrid(d, d)
        weights = (1.0 / (2.0 * math.pi * sigma * sigma)) * np.exp(-(dx * dx + dy * dy) / (2.0 * sigma * sigma))
        weights /= weights.sum()

        logger.debug(f"Gaussian kernel size={size} sigma={sigma} centre={weights[offset, offset]:.6f}")
        return Kernel(weights=weights, sigma=float(sigma))
