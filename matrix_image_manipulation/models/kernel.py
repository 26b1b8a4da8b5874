from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass
class Kernel:
    """
    Square convolution weights. Built per filter call and thrown away.
    """
    weights: np.ndarray  # Shape (size, size), float64, sums to 1.
    sigma: float

    @property
    def size(self) -> int:
        return self.weights.shape[0]

    @property
    def offset(self) -> int:
        """Half-width of the kernel; also the width of the untouched border."""
        return self.size // 2

    def total(self) -> float:
        return float(self.weights.sum())
