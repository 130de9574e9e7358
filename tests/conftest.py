# Copyright (c) 2023 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Helper fixtures and stand-in data sources to simplify testing of the leakage models."""

import pytest
import numpy as np

from leaksim.models.coefficients import Coefficients
from leaksim.math.bits import NUM_BITS


class PermissiveCoefficients:
    """Coefficient source that claims to support every term but serves a fixed vector, used to test generation-time
    failures that initial validation cannot catch."""
    def __init__(self, vector):
        self.vector = vector

    def has_term(self, opcode, term):
        return True

    def weights(self, opcode, term):
        return self.vector


@pytest.fixture
def uniform_coeffs():
    """Returns a builder for coefficient tables where every term of every listed opcode uses a constant weight."""
    def build(opcodes, terms, weight=1.0):
        return Coefficients({op: {term: np.full(NUM_BITS, weight) for term in terms} for op in opcodes})
    return build


@pytest.fixture
def permissive_coeffs():
    return PermissiveCoefficients
