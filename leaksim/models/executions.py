# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Read-only, in-memory record of a target program's cycle-by-cycle pipeline execution"""

from __future__ import annotations

import warnings

from leaksim.models.instructions import AssemblyInstruction
from leaksim.math.bits import WORD_MASK
from leaksim.exceptions import InvalidOperandError, MissingOperandWarning, ConfigurationError

__all__ = ['CycleState', 'Execution', 'NORMAL', 'STALLED', 'FLUSHED', 'ARM_REGISTERS']

NORMAL = 'normal'
STALLED = 'stalled'
FLUSHED = 'flushed'
PIPELINE_STATES = (NORMAL, STALLED, FLUSHED)

ARM_REGISTERS = frozenset([f"r{i}" for i in range(16)] + ['sp', 'lr', 'pc'])


class CycleState:
    """
    Snapshot of the processor pipeline and register file at a single clock cycle.

    Attributes
    ----------
    instructions: dict of AssemblyInstruction
        Mapping from pipeline stage names to the instruction occupying that stage
    states: dict of str
        Mapping from pipeline stage names to the stage state, one of 'normal', 'stalled' or 'flushed'
    registers: dict of int
        Mapping from lowercase register names to their 32-bit contents during the cycle
    """
    __slots__ = ['instructions', 'states', 'registers']

    def __init__(self, instructions: dict, states: dict = None, registers: dict = None):
        """
        Parameters
        ----------
        instructions: dict of AssemblyInstruction
            Mapping from pipeline stage names to the occupying instruction
        states: dict of str, optional
            Mapping from stage names to stage states, stages not listed are in the 'normal' state (default None)
        registers: dict of int, optional
            Register file contents during the cycle (default empty)
        """
        self.instructions = dict(instructions)
        self.states = {stage: NORMAL for stage in self.instructions}
        if states:
            for stage, state in states.items():
                if state not in PIPELINE_STATES:
                    raise ConfigurationError(f"Pipeline stage '{stage}' state '{state}' is not one of "
                                             f"{', '.join(PIPELINE_STATES)}.")
                self.states[stage] = state
        self.registers = {name.lower(): val & WORD_MASK for name, val in (registers or {}).items()}


class Execution:
    """
    Query surface over a recorded program execution, used by leakage models to obtain per-cycle instruction and data.

    Instances are treated as immutable once constructed, so multiple models may read from one concurrently.

    Attributes
    ----------
    register_names: frozenset of str
        The lowercase names of operand tokens that are treated as register references
    """

    def __init__(self, cycles: list, register_names: set | frozenset = ARM_REGISTERS):
        """
        Parameters
        ----------
        cycles: list of CycleState
            One pipeline snapshot per clock cycle, in cycle order starting from cycle 0
        register_names: set of str, optional
            Operand tokens to treat as register references (default ARM core registers r0-r15, sp, lr, pc)
        """
        self._cycles = tuple(cycles)
        self.register_names = frozenset(name.lower() for name in register_names)

    def _cycle(self, cycle: int) -> CycleState:
        if not 0 <= cycle < len(self._cycles):
            raise IndexError(f"Cycle {cycle} is outside of the recorded execution of {len(self._cycles)} cycles.")
        return self._cycles[cycle]

    def cycle_count(self) -> int:
        """Number of simulated clock cycles in the execution."""
        return len(self._cycles)

    def is_normal_state(self, cycle: int, stage: str) -> bool:
        """
        Check whether a pipeline stage is processing an instruction normally at a given cycle.

        Parameters
        ----------
        cycle: int
            The clock cycle to check
        stage: str
            The pipeline stage name, e.g. 'Execute'

        Returns
        -------
        bool
            False if the stage is stalled, flushed, or empty at that cycle
        """
        state = self._cycle(cycle)
        return state.instructions.get(stage) is not None and state.states.get(stage) == NORMAL

    def instruction(self, cycle: int, stage: str) -> AssemblyInstruction | None:
        """Retrieve the instruction occupying a pipeline stage at a given cycle, None if the stage is empty."""
        return self._cycle(cycle).instructions.get(stage)

    def is_register(self, token: str) -> bool:
        """Check whether an operand token references a register."""
        return token.strip().lower() in self.register_names

    def register_value(self, cycle: int, register: str) -> int:
        """Retrieve the 32-bit contents of a register at a given cycle."""
        try:
            return self._cycle(cycle).registers[register.strip().lower()]
        except KeyError as e:
            raise InvalidOperandError(f"Register '{register}' has no recorded value at cycle {cycle}.") from e

    def operand_value(self, cycle: int, instruction: AssemblyInstruction, operand_index: int) -> int:
        """
        Resolve the numeric value carried by one operand of an instruction at a given cycle.

        Parameters
        ----------
        cycle: int
            The clock cycle at which to resolve register contents
        instruction: AssemblyInstruction
            The instruction whose operand to resolve
        operand_index: int
            Zero-based position of the operand within the instruction

        Returns
        -------
        int
            The unsigned 32-bit operand value, register contents for register references and the literal value for
            immediates, 0 if the instruction has no operand at the requested position
        """
        if operand_index >= len(instruction.operands):
            warnings.warn(f"Instruction '{instruction}' at cycle {cycle} has no operand {operand_index}, "
                          f"using value 0.", MissingOperandWarning)
            return 0
        token = instruction.operands[operand_index]
        if self.is_register(token):
            return self.register_value(cycle, token)
        return self._parse_immediate(token)

    @staticmethod
    def _parse_immediate(token: str) -> int:
        text = token.strip().lstrip('#')
        try:
            # Base 0 accepts hex, octal and binary prefixes, but rejects decimal literals with leading zeros
            val = int(text, 0)
        except ValueError:
            try:
                val = int(text, 10)
            except ValueError as e:
                raise InvalidOperandError(f"Operand '{token}' is neither a known register nor an immediate "
                                          f"value.") from e
        return val & WORD_MASK

    @classmethod
    def from_records(cls, records: list, stage: str = 'Execute',
                     register_names: set | frozenset = ARM_REGISTERS) -> Execution:
        """
        Build a single pipeline stage execution from a list of plain per-cycle dictionaries.

        Each record may contain the keys 'instruction' (assembly text or AssemblyInstruction, None for an empty
        stage), 'state' (default 'normal') and 'registers' (register updates). The register file is carried from
        one record to the next so that each record only needs to list the registers that changed.

        Parameters
        ----------
        records: list of dict
            The per-cycle records, in cycle order
        stage: str, optional
            The name of the pipeline stage the records describe (default 'Execute')
        register_names: set of str, optional
            Operand tokens to treat as register references (default ARM core registers)

        Returns
        -------
        Execution
            The constructed execution
        """
        cycles = []
        reg_file = {}
        for record in records:
            reg_file.update(record.get('registers', {}))
            instr = record.get('instruction')
            if isinstance(instr, str):
                instr = AssemblyInstruction.from_text(instr)
            instructions = {stage: instr} if instr is not None else {}
            states = {stage: record.get('state', NORMAL)} if instr is not None else None
            cycles.append(CycleState(instructions, states, reg_file))
        return cls(cycles, register_names)
