import os

import numpy as np
import pytest

from matrix_image_manipulation.models.pixel_matrix import PixelMatrix
from matrix_image_manipulation.repositories.pixel_matrix_repository import PixelMatrixRepository

RANDOM_SEED = int(os.getenv("RANDOM_SEED", "42"))


@pytest.fixture
def rng():
    return np.random.default_rng(RANDOM_SEED)


@pytest.fixture
def random_matrix(rng):
    """Factory for random RGBA matrices of a given width and height."""
    def _make(width: int, height: int) -> PixelMatrix:
        return PixelMatrix(rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8))
    return _make


@pytest.fixture
def uniform_matrix():
    def _make(width: int, height: int, pixel) -> PixelMatrix:
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[...] = pixel
        return PixelMatrix(pixels)
    return _make


@pytest.fixture
def empty_matrix():
    return PixelMatrix.blank(0, 0)


@pytest.fixture
def png_file(tmp_path, random_matrix):
    """A random 12x9 PNG on disk, returned with the matrix it holds."""
    matrix = random_matrix(12, 9)
    path = tmp_path / "sample.png"
    path.write_bytes(PixelMatrixRepository.encode(matrix))
    return path, matrix
