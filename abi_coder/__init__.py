"""Resolve, encode and decode contract calls, events and errors from a JSON ABI."""

from .coder import (
    Coder,
    ConstructorData,
    ErrorData,
    EventData,
    EventEncoding,
    FunctionData,
    FunctionOutputData,
)
from .config import Settings, load_settings
from .utils.logbook import configure_logging
from .errors import (
    AbiCoderError,
    InvalidAbi,
    InvalidType,
    MissingParameters,
    NameMismatch,
    NotFound,
    TopicCountMismatch,
    ValueCountMismatch,
)

__version__ = "5.0.0"

__all__ = [
    "AbiCoderError",
    "Coder",
    "ConstructorData",
    "ErrorData",
    "EventData",
    "EventEncoding",
    "FunctionData",
    "FunctionOutputData",
    "InvalidAbi",
    "InvalidType",
    "MissingParameters",
    "NameMismatch",
    "NotFound",
    "Settings",
    "TopicCountMismatch",
    "ValueCountMismatch",
    "__version__",
    "configure_logging",
    "load_settings",
]
