# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Custom exceptions and error handling types for leaksim"""

__all__ = [
    'ConfigurationError',
    'CoefficientLookupError',
    'ModelNotFoundError',
    'DuplicateModelError',
    'InvalidOperandError',
    'MissingOperandWarning',
]


class ConfigurationError(Exception):
    """Raised when a model or data source is given calibration data that cannot satisfy its requirements."""


class CoefficientLookupError(LookupError):
    """Raised during trace generation when an opcode/term pair has no usable coefficient vector."""


class ModelNotFoundError(Exception):
    """Raised when a leakage model is requested by a name that has not been registered."""


class DuplicateModelError(Exception):
    """Raised when a second leakage model attempts to register under an already taken name."""


class InvalidOperandError(ValueError):
    """Raised when an operand token is neither a known register nor a parseable immediate value."""


class MissingOperandWarning(UserWarning):
    """Warning for when an instruction has fewer operands than a model reads, the missing value is taken as 0."""
