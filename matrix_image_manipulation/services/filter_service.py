from __future__ import annotations

import os
import logging

import numpy as np
from tqdm import trange
from dotenv import load_dotenv

from ..models.pixel_matrix import PixelMatrix, Pixel
from ..models.kernel import Kernel
from ..models.errors import EmptyInputError, OutOfBoundsError
from .kernel_service import KernelService

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class FilterService:
    """
    Neighbourhood filters (convolution) over PixelMatrix objects.
    *   No I/O here, works only with PixelMatrix objects.
    *   Never mutates its input; every filter returns a new matrix.
    """

    def __init__(self, kernel_service: KernelService | None = None):
        self.kernel_service = kernel_service or KernelService()
        self.default_kernel_size = int(os.getenv("GAUSSIAN_KERNEL_SIZE", "7"))
        self.default_sigma = float(os.getenv("GAUSSIAN_SIGMA", "10.5"))
        self.show_progress = os.getenv("SHOW_PROGRESS", "false").lower() in ("1", "true", "yes")

    # ─── Single pixel ──────────────────────────────────────────────
    @staticmethod
    def apply_kernel(matrix: PixelMatrix, kernel: Kernel, x: int, y: int) -> Pixel:
        """
        Convolve the neighbourhood of (x, y) with `kernel`.

        The kernel is walked in reverse relative to the neighbourhood
        (true convolution, not correlation). Each channel is summed in
        float64, clamped to [0, 255] and truncated.
        """
        k = kernel.offset
        if not (k <= x < matrix.width - k and k <= y < matrix.height - k):
            raise OutOfBoundsError(
                f"kernel of size {kernel.size} at ({x}, {y}) leaves a {matrix.width}x{matrix.height} matrix"
            )

        sums = [0.0, 0.0, 0.0, 0.0]
        for ky in range(kernel.size):
            for kx in range(kernel.size):
                px = matrix.get(x + k - kx, y + k - ky)
                w = kernel.weights[ky, kx]
                for i in range(4):
                    sums[i] += float(px[i]) * w

        r, g, b, a = (int(min(max(s, 0.0), 255.0)) for s in sums)
        return r, g, b, a

    # ─── Whole matrix ──────────────────────────────────────────────
    def convolve(self, matrix: PixelMatrix, kernel: Kernel) -> PixelMatrix:
        """
        Apply `kernel` to every strictly interior pixel. Pixels closer than
        kernel.offset to any edge are left at (0, 0, 0, 0).

        Vectorised over the interior: for each kernel cell the shifted
        neighbourhood slice is accumulated in the same (ky, kx) order as
        apply_kernel, so both give bit-identical results.
        """
        height, width = matrix.height, matrix.width
        k = kernel.offset
        filtered = PixelMatrix.blank(width, height)

        inner_h, inner_w = height - 2 * k, width - 2 * k
        if inner_h <= 0 or inner_w <= 0:
            logger.debug(f"{width}x{height} matrix has no interior for kernel size {kernel.size}")
            return filtered

        src = matrix.pixels.astype(np.float64)
        acc = np.zeros((inner_h, inner_w, 4), dtype=np.float64)
        for ky in trange(kernel.size, desc="convolve", ncols=70, disable=not self.show_progress):
            for kx in range(kernel.size):
                # Interior y maps to source row y + k - ky, so rows [2k-ky, height-ky).
                window = src[2 * k - ky:height - ky, 2 * k - kx:width - kx]
                acc += window * kernel.weights[ky, kx]

        filtered.pixels[k:height - k, k:width - k] = np.clip(acc, 0.0, 255.0).astype(np.uint8)
        return filtered

    def gaussian_filter(
        self,
        matrix: PixelMatrix,
        kernel_size: int | None = None,
        sigma: float | None = None,
    ) -> PixelMatrix:
        """
        Gaussian blur with a zero (0, 0, 0, 0) border of width kernel_size // 2.

        Args:
            matrix (PixelMatrix): Input image, left untouched.
            kernel_size (int): Positive odd side length (defaults to GAUSSIAN_KERNEL_SIZE).
            sigma (float): Standard deviation (defaults to GAUSSIAN_SIGMA).

        Returns:
            PixelMatrix: A new matrix with the same dimensions.
        """
        if matrix.height == 0:
            raise EmptyInputError("empty matrix")

        kernel_size = self.default_kernel_size if kernel_size is None else kernel_size
        sigma = self.default_sigma if sigma is None else sigma
        kernel = self.kernel_service.generate_gaussian_kernel(kernel_size, sigma)

        logger.info(f"Gaussian filter on {matrix.width}x{matrix.height} (size={kernel_size}, sigma={sigma})")
        return self.convolve(matrix, kernel)
