import numpy as np
import pytest

from matrix_image_manipulation.models.pixel_matrix import PixelMatrix
from matrix_image_manipulation.models.errors import InvalidMatrixError


def test_blank_is_zero_initialised():
    matrix = PixelMatrix.blank(4, 3)
    assert (matrix.width, matrix.height) == (4, 3)
    assert matrix.pixels.shape == (3, 4, 4)
    assert matrix.pixels.dtype == np.uint8
    assert not matrix.pixels.any()


def test_get_and_set_use_x_then_y():
    matrix = PixelMatrix.blank(5, 2)
    matrix.set(4, 1, (1, 2, 3, 4))
    assert matrix.get(4, 1) == (1, 2, 3, 4)
    # Backing storage is row-major
    assert tuple(matrix.pixels[1, 4]) == (1, 2, 3, 4)
    assert matrix.get(1, 0) == (0, 0, 0, 0)


def test_from_rows_round_trips_to_rows():
    rows = [
        [(1, 2, 3, 4), (5, 6, 7, 8), (9, 10, 11, 12)],
        [(13, 14, 15, 16), (17, 18, 19, 20), (21, 22, 23, 24)],
    ]
    matrix = PixelMatrix.from_rows(rows)
    assert (matrix.width, matrix.height) == (3, 2)
    assert matrix.get(2, 1) == (21, 22, 23, 24)
    assert matrix.to_rows() == rows


def test_from_rows_rejects_jagged_rows():
    with pytest.raises(InvalidMatrixError):
        PixelMatrix.from_rows([[(0, 0, 0, 0)], [(0, 0, 0, 0), (0, 0, 0, 0)]])


def test_from_rows_rejects_bad_pixels():
    with pytest.raises(InvalidMatrixError):
        PixelMatrix.from_rows([[(0, 0, 0)]])


@pytest.mark.parametrize("value", [-1, 256, 300])
def test_out_of_range_values_are_rejected(value):
    pixels = np.zeros((2, 2, 4), dtype=np.int64)
    pixels[1, 1, 2] = value
    with pytest.raises(InvalidMatrixError):
        PixelMatrix(pixels)


def test_in_range_integers_are_stored_as_uint8():
    pixels = np.full((2, 3, 4), 255, dtype=np.int64)
    matrix = PixelMatrix(pixels)
    assert matrix.pixels.dtype == np.uint8
    assert matrix.get(2, 1) == (255, 255, 255, 255)


def test_wrong_shape_is_rejected():
    with pytest.raises(InvalidMatrixError):
        PixelMatrix(np.zeros((2, 2, 3), dtype=np.uint8))
    with pytest.raises(InvalidMatrixError):
        PixelMatrix(np.zeros((2, 2), dtype=np.uint8))


def test_set_rejects_out_of_range_pixel():
    matrix = PixelMatrix.blank(1, 1)
    with pytest.raises(InvalidMatrixError):
        matrix.set(0, 0, (0, 0, 256, 0))


def test_empty_matrix():
    matrix = PixelMatrix.blank(0, 0)
    assert matrix.is_empty
    assert PixelMatrix.from_rows([]).is_empty


def test_equality_and_copy(random_matrix):
    matrix = random_matrix(6, 4)
    clone = matrix.copy()
    assert clone == matrix
    clone.set(0, 0, tuple(255 - v for v in matrix.get(0, 0)))
    assert clone != matrix
    assert PixelMatrix.blank(2, 3) != PixelMatrix.blank(3, 2)
