# Copyright (c) 2023 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""leaksim top-level trace generation functions"""

from __future__ import annotations

import numpy as np

from leaksim.models import *
from leaksim.helpers import logger

__all__ = ['generate_traces']


def generate_traces(model_name: str, execution: Execution, coefficients: Coefficients = None,
                    registry: ModelRegistry = None) -> np.ndarray:
    """
    Generate a synthetic side-channel trace for a recorded program execution using a leakage model selected by name

    Parameters
    ----------
    model_name: str
        The registered name of the leakage model to use, e.g. 'Power' or 'Hamming Weight'
    execution: Execution
        The recorded cycle-by-cycle execution of the target program
    coefficients: Coefficients, optional
        Calibration data for the model, an empty table is used if not provided
    registry: ModelRegistry, optional
        The registry to select the model from (default is the package-wide model_registry)

    Returns
    -------
    numpy.ndarray
        One leakage sample per execution cycle
    """
    if coefficients is None:
        coefficients = Coefficients()
    if registry is None:
        registry = model_registry
    mdl = registry.create(model_name, execution, coefficients)
    logger.debug(f"Constructed leakage model '{model_name}' requiring terms: {', '.join(sorted(mdl.required_terms))}.")
    return mdl.generate_traces()
