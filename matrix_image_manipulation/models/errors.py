class MatrixImageError(Exception):
    """Base class for every error raised by matrix_image_manipulation."""


class EmptyInputError(MatrixImageError, ValueError):
    """A transform received a matrix with zero height."""


class InvalidMatrixError(MatrixImageError, ValueError):
    """Pixel data has the wrong shape or channel values outside [0, 255]."""


class InvalidKernelError(MatrixImageError, ValueError):
    """Kernel size is not a positive odd integer, or sigma is not positive."""


class OutOfBoundsError(MatrixImageError, IndexError):
    """A kernel neighbourhood reaches outside the matrix."""


class NotPNGError(MatrixImageError):
    """Input bytes do not start with the PNG signature."""


class DecodeError(MatrixImageError):
    """PNG data could not be decoded."""


class EncodeError(MatrixImageError):
    """A matrix could not be encoded as PNG."""
