"""Book and spell definition loading."""

from .errors import DataError, DataLoadError, DataReferenceError, DataValidationError
from .paths import DEFINITIONS_ENV_VAR, get_definitions_path

__all__ = [
    "DataError",
    "DataLoadError",
    "DataReferenceError",
    "DataValidationError",
    "DEFINITIONS_ENV_VAR",
    "get_definitions_path",
]
