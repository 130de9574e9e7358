# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Data sources and leakage models used in the leaksim package. Importing registers the built-in models."""

from . import instructions, executions, coefficients, leakage_models, hamming_weight, power
from .instructions import *
from .executions import *
from .coefficients import *
from .leakage_models import *
from .hamming_weight import *
from .power import *

__all__ = list(instructions.__all__)
__all__ += executions.__all__
__all__ += coefficients.__all__
__all__ += leakage_models.__all__
__all__ += hamming_weight.__all__
__all__ += power.__all__
