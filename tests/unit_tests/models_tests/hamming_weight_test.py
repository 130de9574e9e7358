# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Hamming weight leakage model"""

import numpy as np

from leaksim.models.hamming_weight import *
from leaksim.models.executions import Execution, CycleState, STALLED, FLUSHED
from leaksim.models.instructions import AssemblyInstruction
from leaksim.models.coefficients import Coefficients


def test_hamming_weight_mdl():
    exe = Execution.from_records([
        {'instruction': 'MOV r1, r2', 'registers': {'r1': 0, 'r2': 0xFFFFFFFF}},
        {'instruction': 'MOV r2, r1'},
        {'instruction': 'MOV r2, r1', 'state': STALLED},
        {'instruction': 'EOR r3, r1', 'registers': {'r3': 0b1011}},
        {'instruction': 'MOV #-1, r1'},
        {'instruction': 'MOV r2, r1', 'state': FLUSHED},
        {'instruction': None},
    ])
    mdl = HammingWeightMdl(exe, Coefficients())
    assert mdl.required_terms == frozenset()
    trace = mdl.generate_traces()
    assert len(trace) == exe.cycle_count()
    assert trace.dtype == float
    assert np.array_equal(trace, [0.0, 32.0, 0.0, 3.0, 32.0, 0.0, 0.0])
    # Repeated generation over the same data is identical
    assert np.array_equal(mdl.generate_traces(), trace)


def test_hamming_weight_empty_execution():
    mdl = HammingWeightMdl(Execution([]), Coefficients())
    assert len(mdl.generate_traces()) == 0


def test_hamming_weight_empty_stage_entry():
    exe = Execution([CycleState({'Execute': None}), CycleState({'Execute': AssemblyInstruction('MOV', ['#7'])})])
    assert np.array_equal(HammingWeightMdl(exe, Coefficients()).generate_traces(), [0.0, 3.0])
