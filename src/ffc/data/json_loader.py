"""Reads one definition document from disk."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from .errors import DataLoadError, DataValidationError


def read_definition_document(path: Path) -> Dict[str, object]:
    """Return the top-level object of a definitions file keyed by book or spell."""
    try:
        with path.open(encoding="utf-8") as handle:
            document = json.load(handle)
    except FileNotFoundError as exc:
        raise DataLoadError("definition file not found", source=path) from exc
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"invalid JSON at line {exc.lineno}", source=path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError("definition file could not be read", source=path) from exc

    if not isinstance(document, dict):
        raise DataValidationError(f"expected an object, found {type(document).__name__}", source=path)
    return document
