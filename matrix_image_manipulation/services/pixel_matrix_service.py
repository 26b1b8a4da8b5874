from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Union
import os

from dotenv import load_dotenv

from ..models.pixel_matrix import PixelMatrix
from ..repositories.pixel_matrix_repository import PixelMatrixRepository

# Load environment variables
load_dotenv()


class PixelMatrixService:
    """I/O helpers.  No pixel maths here."""
    def __init__(self):
        self.OUTPUT_SUFFIX = os.getenv("OUTPUT_SUFFIX", "_new")
        self.pixel_matrix_repository = PixelMatrixRepository()

    def load(self, path: str | Path) -> PixelMatrix:
        """Load a single PNG from disk into a PixelMatrix."""
        return self.pixel_matrix_repository.load(path)

    def stream_gallery(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[PixelMatrix]:
        """
        Yield matrices lazily instead of returning a gigantic list.
        """
        return self.pixel_matrix_repository.iter_dir(folder,
                                                     recursive=recursive,
                                                     exts=exts)

    def output_path_for(self, path: Union[str, Path]) -> Path:
        """<dir>/<stem><OUTPUT_SUFFIX>.png beside the source file."""
        path = Path(path)
        return path.with_name(f"{path.stem}{self.OUTPUT_SUFFIX}.png")

    def is_output_file(self, path: Union[str, Path]) -> bool:
        """
        True when `path` is a previous result: its stem ends with OUTPUT_SUFFIX
        and the source it was written from sits beside it.
        """
        path = Path(path)
        if not self.OUTPUT_SUFFIX or not path.stem.endswith(self.OUTPUT_SUFFIX):
            return False
        source = path.with_name(path.stem[:-len(self.OUTPUT_SUFFIX)] + path.suffix)
        return source.is_file()

    def get_dimensions(self, matrix: PixelMatrix):
        return self.pixel_matrix_repository.retrieve_dimensions(matrix)

    def save(self, matrix: PixelMatrix, path: Union[str, Path, None] = None) -> Path:
        """
        Business-level method to save the matrix to its path (or `path`).
        """
        return self.pixel_matrix_repository.save(matrix, path)
