# Copyright (c) 2023 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""
leaksim Side-Channel Leakage Trace Simulator (module leaksim)

Description
-----------
The leaksim module converts a cycle-by-cycle record of a target program's execution into a synthetic physical
side-channel trace, such as power consumption or electromagnetic emission, allowing the side-channel resistance of
embedded software to be evaluated without physical measurement equipment. Results realism is governed by the leakage
model used and the quality of the hardware calibration coefficients supplied to it.

Leakage models are interchangeable. Each model declares the calibration terms it reads, is validated against the
supplied coefficients when constructed, and produces one sample per execution cycle. Models register themselves by
name so that new models can be added without changing any of the existing code, simply decorate the new model class
with 'register_model' and import its module.

Core Interface
---------
Execution - Class that is instantiated to hold the recorded pipeline execution of the target program
Coefficients - Class that is instantiated to hold the per-opcode calibration coefficients
LeakageModel - Base class for all leakage models, see HammingWeightMdl and PowerMdl for the built-in models
model_registry - The registry that maps model names to model types
generate_traces - The main procedure for the module, selects a model by name and generates the trace
"""

# This value determines the project version for PyPi as well
__version__ = '0.1.0'

from . import models
from . import math
from .models import *
from .math import *
from .sim import generate_traces
from .helpers import configure_logger

__all__ = ['generate_traces', 'configure_logger', 'models']
__all__.extend(models.__all__)
__all__.extend(math.__all__)
