# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""
Power consumption leakage model combining operand bit interactions, cross-cycle bit flips, and calibrated per-opcode
coefficients.

The leakage of a cycle is a linear combination of four scalar features of the instruction in the Execute stage:

- the number of interacting set bit pairs within operand 1 and within operand 2
- the number of interacting flipped bit pairs between each operand and the same operand of the previous instruction

Each feature is scaled by every weight of the coefficient vector calibrated for that feature and opcode, and the
products are summed. Stalled and flushed cycles produce no leakage and do not count as the previous instruction.
"""

from __future__ import annotations

import numpy as np

from leaksim.models.leakage_models import LeakageModel, register_model
from leaksim.math.bits import NUM_BITS, bit_flips, pairwise_interactions
from leaksim.exceptions import CoefficientLookupError
from leaksim.helpers import logger

__all__ = ['InstructionTerms', 'InstructionPairTerms', 'PowerMdl',
           'OPERAND_1_TERM', 'OPERAND_2_TERM', 'BIT_FLIP_1_TERM', 'BIT_FLIP_2_TERM']

OPERAND_1_TERM = 'operand_1_interactions'
OPERAND_2_TERM = 'operand_2_interactions'
BIT_FLIP_1_TERM = 'bit_flip_1_interactions'
BIT_FLIP_2_TERM = 'bit_flip_2_interactions'


class InstructionTerms:
    """
    Intermediate leakage features of a single instruction, computed once per cycle.

    Attributes
    ----------
    opcode: str
        The mnemonic of the instruction
    operand_1: int
        The resolved 32-bit value of the first operand
    operand_2: int
        The resolved 32-bit value of the second operand
    operand_1_interactions: int
        Number of interacting set bit pairs in the first operand
    operand_2_interactions: int
        Number of interacting set bit pairs in the second operand
    """
    __slots__ = ['opcode', 'operand_1', 'operand_2', 'operand_1_interactions', 'operand_2_interactions']

    def __init__(self, opcode: str, operand_1: int, operand_2: int):
        self.opcode = opcode
        self.operand_1 = operand_1
        self.operand_2 = operand_2
        self.operand_1_interactions = pairwise_interactions(operand_1)
        self.operand_2_interactions = pairwise_interactions(operand_2)


class InstructionPairTerms:
    """
    Intermediate leakage features describing the transition from one instruction to the next. Each operand of the
    current instruction is compared against the same operand of the previous instruction.

    Attributes
    ----------
    bit_flip_1: int
        Bits that changed between the previous and current first operand
    bit_flip_2: int
        Bits that changed between the previous and current second operand
    bit_flip_1_interactions: int
        Number of interacting flipped bit pairs in bit_flip_1
    bit_flip_2_interactions: int
        Number of interacting flipped bit pairs in bit_flip_2
    """
    __slots__ = ['bit_flip_1', 'bit_flip_2', 'bit_flip_1_interactions', 'bit_flip_2_interactions']

    def __init__(self, prev: InstructionTerms, curr: InstructionTerms):
        self.bit_flip_1 = bit_flips(prev.operand_1, curr.operand_1)
        self.bit_flip_2 = bit_flips(prev.operand_2, curr.operand_2)
        self.bit_flip_1_interactions = pairwise_interactions(self.bit_flip_1)
        self.bit_flip_2_interactions = pairwise_interactions(self.bit_flip_2)


@register_model('Power')
class PowerMdl(LeakageModel):
    """
    Calibrated power model, see the module documentation for the leakage equation.
    """
    REQUIRED_TERMS = frozenset([OPERAND_1_TERM, OPERAND_2_TERM, BIT_FLIP_1_TERM, BIT_FLIP_2_TERM])

    def _instruction_terms(self, cycle: int) -> InstructionTerms:
        instruction = self._execution.instruction(cycle, self.stage)
        return InstructionTerms(instruction.opcode,
                                self._execution.operand_value(cycle, instruction, 0),
                                self._execution.operand_value(cycle, instruction, 1))

    def _calc_term(self, opcode: str, term: str, feature: int | float) -> float:
        weights = self._coefficients.weights(opcode, term)
        if len(weights) != NUM_BITS:
            raise CoefficientLookupError(f"Coefficients for opcode '{opcode}' term '{term}' have {len(weights)} "
                                         f"weights, expected {NUM_BITS}.")
        # The scalar feature is broadcast across every bit position weight before summing
        return float(np.sum(feature * np.asarray(weights, dtype=float)))

    def calc_sample(self, curr: InstructionTerms, prev: InstructionTerms = None) -> float:
        """
        Compute the leakage sample for one instruction given the previous normally executed instruction.

        Parameters
        ----------
        curr: InstructionTerms
            The features of the instruction in the observed stage
        prev: InstructionTerms, optional
            The features of the previous normally executed instruction, None if there is no such instruction

        Returns
        -------
        float
            The weighted sum of all the required term contributions
        """
        features = {OPERAND_1_TERM: curr.operand_1_interactions, OPERAND_2_TERM: curr.operand_2_interactions,
                    BIT_FLIP_1_TERM: 0, BIT_FLIP_2_TERM: 0}
        if prev is not None:
            pair = InstructionPairTerms(prev, curr)
            features[BIT_FLIP_1_TERM] = pair.bit_flip_1_interactions
            features[BIT_FLIP_2_TERM] = pair.bit_flip_2_interactions
        return sum(self._calc_term(curr.opcode, term, features[term]) for term in sorted(self.required_terms))

    def generate_traces(self) -> np.ndarray:
        num_cycles = self._execution.cycle_count()
        logger.info(f"Generating {self.name} trace over {num_cycles} cycles.")
        trace = np.zeros(num_cycles)
        prev = None
        num_skipped = 0
        for i in range(num_cycles):
            # Stalled and flushed cycles leave the carried previous instruction untouched
            if not self._execution.is_normal_state(i, self.stage):
                num_skipped += 1
                continue
            curr = self._instruction_terms(i)
            trace[i] = self.calc_sample(curr, prev)
            prev = curr
        logger.debug(f"{self.name} trace skipped {num_skipped} stalled or flushed cycles.")
        return trace
