# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Representation of the assembly instructions observed flowing through a simulated processor pipeline"""

from __future__ import annotations

__all__ = ['AssemblyInstruction']


class AssemblyInstruction:
    """
    An immutable assembly instruction consisting of an opcode and its ordered operand tokens.

    Operand tokens are kept exactly as written (e.g. 'r1', '#0x10'); whether a token names a register or an immediate
    value is decided by the execution source that resolves it.

    Attributes
    ----------
    opcode: str
        The instruction mnemonic, e.g. 'ADD'
    operands: tuple of str
        The ordered operand tokens of the instruction
    """
    __slots__ = ['opcode', 'operands']
    opcode: str
    operands: tuple

    def __init__(self, opcode: str, operands: list | tuple = ()):
        """
        Parameters
        ----------
        opcode: str
            The instruction mnemonic
        operands: list or tuple of str, optional
            The ordered operand tokens (default no operands)
        """
        object.__setattr__(self, 'opcode', opcode)
        object.__setattr__(self, 'operands', tuple(operands))

    def __setattr__(self, name, value):
        raise AttributeError(f"AssemblyInstruction '{self.opcode}' is immutable, cannot set attribute '{name}'.")

    def __eq__(self, other):
        if not isinstance(other, AssemblyInstruction):
            return NotImplemented
        return self.opcode == other.opcode and self.operands == other.operands

    def __hash__(self):
        return hash((self.opcode, self.operands))

    def __repr__(self):
        return f"AssemblyInstruction({self.opcode!r}, {list(self.operands)!r})"

    def __str__(self):
        return f"{self.opcode} {', '.join(self.operands)}".rstrip()

    @classmethod
    def from_text(cls, text: str) -> AssemblyInstruction:
        """
        Parse a line of assembly such as 'ADD r0, r1, #4' into an instruction.

        Parameters
        ----------
        text: str
            The assembly text, the first whitespace separated word is the opcode and the remainder is a comma
            separated operand list

        Returns
        -------
        AssemblyInstruction
            The parsed instruction
        """
        opcode, operand_text = (text.split(None, 1) + ['', ''])[:2]
        operands = [token.strip() for token in operand_text.split(',') if token.strip()]
        return cls(opcode.upper(), operands)
