"""
Transform Pipeline
Decode a PNG, run one pixel transform, encode the result beside the source.
Nothing is written unless the transform and the encode both succeed.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import List, Union

from ..models.pixel_matrix import PixelMatrix
from ..services.pixel_matrix_service import PixelMatrixService
from ..services.colorimetry_service import ColorimetryService
from ..services.luminance_service import LuminanceService
from ..services.filter_service import FilterService

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    GREYSCALE = "greyscale"
    GAUSSIAN_BLUR = "gaussian"
    CONTRAST = "contrast"
    LUMINOSITY = "luminosity"


def apply_operation(
    matrix: PixelMatrix,
    operation: Operation | str,
    *,
    m: float = 1.0,
    b: float = 0.0,
    kernel_size: int | None = None,
    sigma: float | None = None,
    colorimetry_service: ColorimetryService | None = None,
    luminance_service: LuminanceService | None = None,
    filter_service: FilterService | None = None,
) -> PixelMatrix:
    """
    Dispatch a single transform. Returns a new matrix; `matrix` is untouched.

    Args:
        matrix: Decoded input image
        operation: Which transform to run
        m: Contrast gain (CONTRAST only)
        b: Additive offset (CONTRAST and LUMINOSITY)
        kernel_size: Gaussian kernel side (GAUSSIAN_BLUR, defaults from env)
        sigma: Gaussian standard deviation (GAUSSIAN_BLUR, defaults from env)

    Returns:
        PixelMatrix: the transformed image, carrying no path
    """
    operation = Operation(operation)

    if operation is Operation.GREYSCALE:
        return (colorimetry_service or ColorimetryService()).convert_to_grey_scale(matrix)
    if operation is Operation.CONTRAST:
        return (luminance_service or LuminanceService()).adjust_contrast(matrix, m, b)
    if operation is Operation.LUMINOSITY:
        return (luminance_service or LuminanceService()).adjust_luminosity(matrix, b)
    return (filter_service or FilterService()).gaussian_filter(matrix, kernel_size, sigma)


def transform_file(
    path: Union[str, Path],
    operation: Operation | str,
    *,
    pixel_matrix_service: PixelMatrixService | None = None,
    output_path: Union[str, Path, None] = None,
    **params,
) -> Path:
    """
    Load `path`, apply `operation`, save as <stem>_new.png next to it.

    Returns:
        Path: where the result was written
    """
    pixel_matrix_service = pixel_matrix_service or PixelMatrixService()

    matrix = pixel_matrix_service.load(path)
    return _transform_and_save(matrix, operation, pixel_matrix_service, output_path, **params)


def transform_directory(
    folder: Union[str, Path],
    operation: Operation | str,
    *,
    recursive: bool = False,
    pixel_matrix_service: PixelMatrixService | None = None,
    **params,
) -> List[Path]:
    """
    Apply `operation` to every PNG in `folder`. Previous outputs are skipped.
    Unreadable files are skipped by the repository; transform and encode
    errors propagate.
    """
    pixel_matrix_service = pixel_matrix_service or PixelMatrixService()

    written = []
    for matrix in pixel_matrix_service.stream_gallery(folder, recursive=recursive):
        if pixel_matrix_service.is_output_file(matrix.path):
            logger.info(f"Skipping previous output: {matrix.path}")
            continue
        written.append(_transform_and_save(matrix, operation, pixel_matrix_service, None, **params))

    log_results(written)
    return written


def _transform_and_save(
    matrix: PixelMatrix,
    operation: Operation | str,
    pixel_matrix_service: PixelMatrixService,
    output_path: Union[str, Path, None],
    **params,
) -> Path:
    height, width = pixel_matrix_service.get_dimensions(matrix)
    logger.info(f"Applying {Operation(operation).value} to {matrix.path} ({width}x{height})")

    result = apply_operation(matrix, operation, **params)
    target = Path(output_path) if output_path is not None else pixel_matrix_service.output_path_for(matrix.path)
    saved = pixel_matrix_service.save(result, target)

    logger.info(f"Wrote {saved}")
    return saved


def log_results(written: List[Path]) -> None:
    """
    Log a summary of a directory run.
    """
    if not written:
        logger.info("No images were transformed.")
        return

    logger.info(f"Transformed {len(written)} image(s):")
    for i, path in enumerate(written, 1):
        logger.info(f"{i}. {Path(path).name}")
