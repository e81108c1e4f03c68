"""Exceptions raised around the normalizer.

The rendering core never raises for malformed schemas; these are used by the
validator adapter and the config reader.
"""

from __future__ import annotations

from typing import List, Sequence


class NormalizerError(Exception):
    """Base class for errors raised by this package."""


class InvalidConfigurationError(NormalizerError):
    """Configuration failed schema validation.

    The message is the rendered report, ready to be shown to a user as is.
    """

    def __init__(self, message: str, errors: Sequence = ()):
        super().__init__(message)
        self.errors: List = list(errors)


class ConfigReadError(NormalizerError):
    """A config or schema file could not be read or parsed."""
