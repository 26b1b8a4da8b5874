from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, Tuple
import numpy as np

from .errors import InvalidMatrixError

Pixel = Tuple[int, int, int, int]  # (red, green, blue, alpha), each in [0, 255]

CHANNELS = 4


@dataclass(eq=False)
class PixelMatrix:
    """
    Simple data object: RGBA pixels (+ optional path for bookkeeping).
    Storage is row-major, shape (H, W, 4), dtype uint8. Always address
    single pixels through get(x, y) / set(x, y, pixel).
    """
    pixels: np.ndarray  # Shape (H, W, 4), dtype uint8, RGBA order.
    path: Path | None = None  # Source or destination of the image.

    def __post_init__(self):
        arr = np.asarray(self.pixels)
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            raise InvalidMatrixError(
                f"expected pixels of shape (height, width, {CHANNELS}), got {arr.shape}"
            )
        if arr.dtype != np.uint8:
            if arr.size and (not np.isfinite(arr).all() or arr.min() < 0 or arr.max() > 255):
                raise InvalidMatrixError("invalid matrix: channel values outside [0, 255]")
            arr = arr.astype(np.uint8)
        self.pixels = arr
        if self.path is not None:
            self.path = Path(self.path)

    # ── Construction ────────────────────────────────────────────────
    @classmethod
    def blank(cls, width: int, height: int, path: Path | None = None) -> PixelMatrix:
        """Zero-initialised (0, 0, 0, 0) matrix."""
        if width < 0 or height < 0:
            raise InvalidMatrixError(f"negative dimensions {width}x{height}")
        return cls(np.zeros((height, width, CHANNELS), dtype=np.uint8), path)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Iterable[int]]]) -> PixelMatrix:
        """Build from nested rows of RGBA tuples, rows[y][x]."""
        if len(rows) == 0:
            return cls.blank(0, 0)
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise InvalidMatrixError("jagged rows: every row must have the same width")
        width = widths.pop()
        if width == 0:
            return cls.blank(0, len(rows))
        try:
            arr = np.array(rows, dtype=np.int64)
        except ValueError as err:
            raise InvalidMatrixError(f"pixels must all be RGBA 4-tuples: {err}") from err
        return cls(arr)

    # ── Dimensions ──────────────────────────────────────────────────
    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def is_empty(self) -> bool:
        return self.height == 0

    # ── Pixel access ────────────────────────────────────────────────
    def get(self, x: int, y: int) -> Pixel:
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def set(self, x: int, y: int, pixel: Iterable[int]) -> None:
        values = tuple(pixel)
        if len(values) != CHANNELS or any(v < 0 or v > 255 for v in values):
            raise InvalidMatrixError(f"invalid pixel {values}")
        self.pixels[y, x] = values

    def copy(self) -> PixelMatrix:
        return PixelMatrix(self.pixels.copy(), self.path)

    def to_rows(self) -> list[list[Pixel]]:
        return [[self.get(x, y) for x in range(self.width)] for y in range(self.height)]

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelMatrix):
            return NotImplemented
        return self.pixels.shape == other.pixels.shape and np.array_equal(self.pixels, other.pixels)
