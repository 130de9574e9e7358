# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Minimal first-order leakage model based on the Hamming weight of the observed data path"""

import numpy as np

from leaksim.models.leakage_models import LeakageModel, register_model
from leaksim.math.bits import hamming_weight
from leaksim.helpers import logger

__all__ = ['HammingWeightMdl']


@register_model('Hamming Weight')
class HammingWeightMdl(LeakageModel):
    """
    Leakage model assuming that the leakage of each cycle is proportional to the number of set bits in the first
    operand of the instruction in the Execute stage. Uses no calibration coefficients.
    """
    REQUIRED_TERMS = frozenset()

    def generate_traces(self) -> np.ndarray:
        num_cycles = self._execution.cycle_count()
        logger.info(f"Generating {self.name} trace over {num_cycles} cycles.")
        trace = np.zeros(num_cycles)
        for i in range(num_cycles):
            # Stalls and flushes move no data through the stage, they are left at zero leakage
            if not self._execution.is_normal_state(i, self.stage):
                continue
            instruction = self._execution.instruction(i, self.stage)
            trace[i] = hamming_weight(self._execution.operand_value(i, instruction, 0))
        return trace
