"""Structify: turn messy text into schema-shaped data.

An LLM does the reading; a deterministic layer validates the schema,
repairs the model's JSON and normalizes every value to its declared type.
"""

from importlib.metadata import PackageNotFoundError, version

from structify.config import get_config, init, load_config, reset_config
from structify.core.enums import ErrorCode, FieldType
from structify.core.exceptions import StructifyError
from structify.core.models import ExtractionOutcome, ExtractOptions
from structify.extractor import ExtractionPipeline, extract, safe_extract

try:
    __version__ = version("structify")
except PackageNotFoundError:
    # Fallback for source-only usage before installation.
    __version__ = "0.1.0"
__license__ = "Apache-2.0"

__all__ = [
    "ErrorCode",
    "ExtractOptions",
    "ExtractionOutcome",
    "ExtractionPipeline",
    "FieldType",
    "StructifyError",
    "extract",
    "get_config",
    "init",
    "load_config",
    "reset_config",
    "safe_extract",
]
