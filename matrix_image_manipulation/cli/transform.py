import os
import sys
import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..models.errors import MatrixImageError
from ..pipeline.transform_pipeline import Operation, transform_file, transform_directory

logger = logging.getLogger(__name__)

MENU = {
    "1": Operation.GREYSCALE,
    "2": Operation.GAUSSIAN_BLUR,
    "3": Operation.CONTRAST,
    "4": Operation.LUMINOSITY,
}


def configure_logging() -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def _ask_float(prompt: str) -> float:
    raw = input(prompt).strip()
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"'{raw}' is not a number") from None


def prompt_operation():
    """Ask which transform to run and collect its parameters."""
    print("Choose an operation:")
    print("  1) Greyscale")
    print("  2) Gaussian blur")
    print("  3) Adjust contrast")
    print("  4) Adjust luminosity")
    choice = input("Operation [1-4]: ").strip()
    if choice not in MENU:
        raise ValueError(f"unknown operation '{choice}'")

    operation = MENU[choice]
    params = {}
    if operation is Operation.CONTRAST:
        params["m"] = _ask_float("Contrast gain m: ")
        params["b"] = _ask_float("Offset b: ")
    elif operation is Operation.LUMINOSITY:
        params["b"] = _ask_float("Offset b: ")
    return operation, params


def main() -> int:
    configure_logging()

    try:
        path = Path(input("Input file path: ").strip())
        operation, params = prompt_operation()

        if path.is_dir():
            written = transform_directory(path, operation, **params)
            print(f"Wrote {len(written)} image(s) in {path}")
        else:
            written = transform_file(path, operation, **params)
            print(f"Wrote {written}")
    except (MatrixImageError, OSError, ValueError, EOFError) as err:
        logger.error(f"{type(err).__name__}: {err}")
        print(f"Error: {err}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
