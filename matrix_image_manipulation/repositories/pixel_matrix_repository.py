from __future__ import annotations
from pathlib import Path
from typing import Union, Iterable, List, Iterator, Tuple
from io import BytesIO
import logging
import struct
import os

import numpy as np
from PIL import Image as PILImage, UnidentifiedImageError
from dotenv import load_dotenv

from ..models.pixel_matrix import PixelMatrix
from ..models.errors import NotPNGError, DecodeError, EncodeError, MatrixImageError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

PNG_SIGNATURE = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])


class PixelMatrixRepository:
    """
    Handles file I/O and PNG encoding for PixelMatrix entities.
    The only place that touches Pillow.
    """
    def __init__(self):
        self.VALID_EXTS = {
            ext.strip().lower()
            for ext in os.getenv("VALID_IMAGE_EXTENSIONS", ".png").split(",")
            if ext.strip()
        }

    @staticmethod
    def retrieve_dimensions(matrix: PixelMatrix) -> Tuple[int, int]:
        """(height, width)"""
        return matrix.pixels.shape[:2]

    # ─── Codec ─────────────────────────────────────────────────────────
    @staticmethod
    def has_png_signature(data: bytes) -> bool:
        return data[:len(PNG_SIGNATURE)] == PNG_SIGNATURE

    @classmethod
    def decode(cls, data: bytes) -> PixelMatrix:
        if not cls.has_png_signature(data):
            raise NotPNGError("file is not a PNG image")
        try:
            # verify() walks every chunk and its CRC through IEND; it leaves
            # the image unusable, so the pixels come from a second open.
            with PILImage.open(BytesIO(data), formats=["PNG"]) as checked:
                checked.verify()
            with PILImage.open(BytesIO(data), formats=["PNG"]) as pil_img:
                arr = cls._to_rgba(pil_img)
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError, struct.error) as err:
            raise DecodeError(f"could not decode PNG data: {err}") from err
        return PixelMatrix(arr)

    @staticmethod
    def _to_rgba(pil_img: PILImage.Image) -> np.ndarray:
        """(H, W, 4) uint8 RGBA array for any PNG colour type."""
        if pil_img.mode.startswith("I"):
            # 16-bit greyscale: scale [0, 65535] down to [0, 255] rather than clip
            grey = (np.array(pil_img, dtype=np.uint32) // 257).astype(np.uint8)
            alpha = np.full(grey.shape, 255, dtype=np.uint8)
            return np.stack([grey, grey, grey, alpha], axis=-1)
        return np.array(pil_img.convert("RGBA"), dtype=np.uint8)

    @staticmethod
    def encode(matrix: PixelMatrix) -> bytes:
        if matrix.width == 0 or matrix.height == 0:
            raise EncodeError(f"cannot encode a {matrix.width}x{matrix.height} image")
        buffer = BytesIO()
        try:
            PILImage.fromarray(np.ascontiguousarray(matrix.pixels)).save(buffer, format="PNG")
        except (OSError, ValueError, TypeError) as err:
            raise EncodeError(f"could not encode PNG data: {err}") from err
        return buffer.getvalue()

    # ─── File I/O ──────────────────────────────────────────────────────
    @classmethod
    def load(cls, path: Union[str, Path]) -> PixelMatrix:
        path = Path(path)
        data = path.read_bytes()  # FileNotFoundError / OSError propagate
        matrix = cls.decode(data)
        matrix.path = path
        logger.debug(f"Loaded {path} ({matrix.width}x{matrix.height})")
        return matrix

    @classmethod
    def save(cls, matrix: PixelMatrix, path: Union[str, Path, None] = None) -> Path:
        """
        Encode fully in memory before touching the filesystem, so a failed
        encode never leaves a partial file behind.
        """
        target = Path(path) if path is not None else matrix.path
        if target is None:
            raise ValueError("no destination path given and matrix has no path")
        data = cls.encode(matrix)
        target.write_bytes(data)
        matrix.path = target
        logger.debug(f"Saved {target} ({len(data)} bytes)")
        return target

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[PixelMatrix]:
        """
        Yield PixelMatrix objects one at a time.  Nothing accumulates in memory.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if p.suffix.lower() not in allowed:
                logger.debug(f"Skipping due to extension: {p}")
                continue
            if not p.is_file():
                logger.debug(f"Skipping because not file: {p}")
                continue
            try:
                matrix = self.load(p)
            except (MatrixImageError, OSError) as err:
                logger.warning(f"Skipping {p.name}: {err}")
                continue
            yield matrix

    def load_dir(
        self, folder: Union[str, Path], *, recursive=False, exts=None
    ) -> List[PixelMatrix]:
        """
        Convenience wrapper that still returns a list, but internally streams.
        """
        return list(self.iter_dir(folder, recursive=recursive, exts=exts))
