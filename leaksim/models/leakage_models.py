# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Base leakage model contract along with the registry used to select models by name"""

from __future__ import annotations

import numpy as np
from typing import Callable

from leaksim.math.bits import NUM_BITS
from leaksim.exceptions import ConfigurationError, DuplicateModelError, ModelNotFoundError

__all__ = ['LeakageModel', 'ModelRegistry', 'model_registry', 'register_model']


class LeakageModel:
    """
    Base class for mathematical models that turn a recorded program execution into a synthetic side-channel trace.

    This class should not be instantiated directly, use an inheriting class. Inheriting classes list the calibration
    terms they read in REQUIRED_TERMS and implement generate_traces(). Both collaborators are held by reference and
    must not be modified while the model is in use.

    Attributes
    ----------
    name: str
        The name the model type is registered under, set by the register_model decorator
    stage: str
        The pipeline stage observed by the model
    """
    name: str = None
    stage: str = 'Execute'
    REQUIRED_TERMS: frozenset = frozenset()

    def __init__(self, execution, coefficients):
        """
        Parameters
        ----------
        execution: Execution
            The recorded program execution to generate traces for
        coefficients: Coefficients
            The calibration data source providing the weights for the model's required terms

        Raises
        ------
        ConfigurationError
            If any required term lacks coefficients for an opcode observed during the execution
        """
        self._execution = execution
        self._coefficients = coefficients
        self._check_interaction_terms()

    @property
    def required_terms(self) -> frozenset:
        """The interaction term names that the model retrieves from its coefficients."""
        return self.REQUIRED_TERMS

    def _observed_opcodes(self) -> set:
        return {self._execution.instruction(i, self.stage).opcode
                for i in range(self._execution.cycle_count()) if self._execution.is_normal_state(i, self.stage)}

    def _has_coefficients(self, opcode: str, term: str) -> bool:
        # Sources only need to provide weights(), has_term() is used when available
        if hasattr(self._coefficients, 'has_term'):
            return self._coefficients.has_term(opcode, term)
        try:
            weights = self._coefficients.weights(opcode, term)
        except LookupError:
            return False
        return weights is not None and len(weights) == NUM_BITS

    def _check_interaction_terms(self):
        if not self.required_terms:
            return
        missing = [(opcode, term) for opcode in sorted(self._observed_opcodes())
                   for term in sorted(self.required_terms) if not self._has_coefficients(opcode, term)]
        if missing:
            listing = ', '.join(f"{opcode}/{term}" for opcode, term in missing)
            raise ConfigurationError(f"Model '{self.name}' was not provided with the required interaction terms by "
                                     f"the coefficients, missing: {listing}.")

    def generate_traces(self) -> np.ndarray:
        """
        Compute one leakage sample for every cycle of the execution.

        Returns
        -------
        numpy.ndarray
            The trace, a float array with length equal to the execution cycle count
        """
        raise NotImplementedError(f"Leakage model '{self.name}' does not implement trace generation.")


class ModelRegistry:
    """
    Mapping from unique model names to factories that construct the model from an (execution, coefficients) pair.
    """

    def __init__(self):
        self._factories = {}

    def register(self, name: str, factory: Callable):
        """
        Add a model factory under a unique name.

        Parameters
        ----------
        name: str
            The name used to select the model
        factory: Callable
            Any callable accepting (execution, coefficients) and returning a LeakageModel, typically the model class
        """
        if name in self._factories:
            raise DuplicateModelError(f"A leakage model is already registered under the name '{name}'.")
        self._factories[name] = factory

    def create(self, name: str, execution, coefficients) -> LeakageModel:
        """
        Construct a registered model for the given execution and coefficients.

        Parameters
        ----------
        name: str
            The registered name of the model to construct
        execution: Execution
            The recorded program execution to analyze
        coefficients: Coefficients
            The calibration data for the model

        Returns
        -------
        LeakageModel
            The constructed and validated model
        """
        try:
            factory = self._factories[name]
        except KeyError as e:
            raise ModelNotFoundError(f"No leakage model named '{name}', available models are: "
                                     f"{', '.join(sorted(self._factories))}.") from e
        return factory(execution, coefficients)

    def names(self) -> list:
        """Sorted list of all the registered model names."""
        return sorted(self._factories)

    def __contains__(self, name):
        return name in self._factories


# Package-wide registry, filled by the model modules imported from leaksim.models
model_registry = ModelRegistry()


def register_model(name: str, registry: ModelRegistry = None):
    """
    Class decorator that registers a leakage model type under the given name and records the name on the class.

    Parameters
    ----------
    name: str
        Unique name for the model type
    registry: ModelRegistry, optional
        The registry to add the model to (default is the package-wide model_registry)

    Returns
    -------
    Callable
        The decorator, which returns the model class unchanged apart from its name attribute
    """
    def decorator(mdl_cls):
        (registry if registry is not None else model_registry).register(name, mdl_cls)
        mdl_cls.name = name
        return mdl_cls
    return decorator
