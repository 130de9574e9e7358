# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Bit-level combinatorial primitives leveraged by the leaksim leakage models."""

from .bits import *
from . import bits

__all__ = bits.__all__
