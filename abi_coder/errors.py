"""Exception hierarchy shared by every ABI coder component."""

from __future__ import annotations


class AbiCoderError(Exception):
    """Base class for all errors raised by :mod:`abi_coder`."""


class NotFound(AbiCoderError, LookupError):
    """No fragment matches the requested name, selector, topic or kind."""


class MissingParameters(AbiCoderError, ValueError):
    """A resolved fragment carries no usable inputs/outputs list."""


class NameMismatch(AbiCoderError, KeyError):
    """A value map is missing a required key or names an unknown parameter."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0]) if self.args else ""


class InvalidType(AbiCoderError, ValueError):
    """A parameter type string could not be recognised."""


class InvalidAbi(AbiCoderError, ValueError):
    """An interface description payload is not a list of JSON objects."""


class ValueCountMismatch(AbiCoderError, ValueError):
    """The number of positional values differs from the parameter count."""


class TopicCountMismatch(AbiCoderError, ValueError):
    """Event topics do not line up with the fragment's indexed parameters."""


__all__ = [
    "AbiCoderError",
    "InvalidAbi",
    "InvalidType",
    "MissingParameters",
    "NameMismatch",
    "NotFound",
    "TopicCountMismatch",
    "ValueCountMismatch",
]
