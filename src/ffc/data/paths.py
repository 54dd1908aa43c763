"""Location of the bundled book and spell definitions."""
from __future__ import annotations

import os
from pathlib import Path

DEFINITIONS_ENV_VAR = "FFC_DEFINITIONS_DIR"

# src/ffc/data/paths.py sits three levels below the checkout
BUNDLED_DEFINITIONS_DIR = Path(__file__).resolve().parents[3] / "data" / "definitions"


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Pick the definitions directory: explicit path, then FFC_DEFINITIONS_DIR, then the bundled copy."""
    if base_path is not None:
        return Path(base_path)
    override = os.getenv(DEFINITIONS_ENV_VAR)
    return Path(override).expanduser() if override else BUNDLED_DEFINITIONS_DIR
