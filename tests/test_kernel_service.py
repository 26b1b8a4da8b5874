import math

import cv2
import numpy as np
import pytest

from matrix_image_manipulation.services.kernel_service import KernelService
from matrix_image_manipulation.models.errors import InvalidKernelError


@pytest.fixture
def kernel_service():
    return KernelService()


@pytest.mark.parametrize("size", [1, 3, 5, 7, 11, 21])
@pytest.mark.parametrize("sigma", [0.3, 1.0, 2.5, 10.5])
def test_kernel_is_normalised(kernel_service, size, sigma):
    kernel = kernel_service.generate_gaussian_kernel(size, sigma)
    assert kernel.size == size
    assert kernel.offset == size // 2
    assert abs(kernel.total() - 1.0) < 1e-9
    assert (kernel.weights >= 0).all()


def test_kernel_is_symmetric_and_peaks_at_centre(kernel_service):
    kernel = kernel_service.generate_gaussian_kernel(5, 1.2)
    w = kernel.weights
    np.testing.assert_allclose(w, w.T)
    np.testing.assert_allclose(w, w[::-1, ::-1])
    assert w.argmax() == 12  # centre of a 5x5 grid


def test_kernel_matches_closed_form(kernel_service):
    size, sigma = 3, 1.0
    kernel = kernel_service.generate_gaussian_kernel(size, sigma)

    raw = [[math.exp(-(dx * dx + dy * dy) / (2 * sigma * sigma)) for dx in (-1, 0, 1)] for dy in (-1, 0, 1)]
    total = sum(sum(row) for row in raw)
    expected = np.array(raw) / total
    np.testing.assert_allclose(kernel.weights, expected, rtol=0, atol=1e-12)


@pytest.mark.parametrize("size,sigma", [(3, 0.8), (7, 10.5), (9, 2.0)])
def test_kernel_agrees_with_opencv(kernel_service, size, sigma):
    g = cv2.getGaussianKernel(size, sigma, cv2.CV_64F)
    expected = g @ g.T
    kernel = kernel_service.generate_gaussian_kernel(size, sigma)
    np.testing.assert_allclose(kernel.weights, expected, rtol=1e-9, atol=1e-12)


def test_size_one_kernel_is_identity(kernel_service):
    kernel = kernel_service.generate_gaussian_kernel(1, 3.0)
    assert kernel.weights.shape == (1, 1)
    assert kernel.weights[0, 0] == pytest.approx(1.0)


@pytest.mark.parametrize("size", [0, -3, 2, 4, 3.0, True])
def test_invalid_sizes_are_rejected(kernel_service, size):
    with pytest.raises(InvalidKernelError):
        kernel_service.generate_gaussian_kernel(size, 1.0)


@pytest.mark.parametrize("sigma", [0.0, -1.0, float("nan"), float("inf")])
def test_invalid_sigmas_are_rejected(kernel_service, sigma):
    with pytest.raises(InvalidKernelError):
        kernel_service.generate_gaussian_kernel(3, sigma)
