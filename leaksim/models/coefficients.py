# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Container for hardware calibrated, per-opcode and per-term leakage coefficient vectors"""

from __future__ import annotations

import json
import numpy as np
import pandas as pd
from pathlib import Path

from leaksim.math.bits import NUM_BITS
from leaksim.exceptions import ConfigurationError, CoefficientLookupError
from leaksim.helpers import logger

__all__ = ['Coefficients']


class Coefficients:
    """
    Read-only table mapping (opcode, interaction term name) pairs to a vector of one weight per data path bit.

    Every vector is validated to contain exactly NUM_BITS (32) weights when the table is built. Vectors are stored as
    read-only numpy arrays so that the table can be shared between models without risk of mutation.
    """

    def __init__(self, table: dict = None):
        """
        Parameters
        ----------
        table: dict of dict, optional
            Nested mapping of opcode -> term name -> sequence of 32 weights (default empty table)
        """
        self._table = {}
        for opcode, terms in (table or {}).items():
            self._table[opcode] = {}
            for term, weights in terms.items():
                self._table[opcode][term] = self._validate(opcode, term, weights)

    @staticmethod
    def _validate(opcode: str, term: str, weights) -> np.ndarray:
        try:
            vec = np.array(weights, dtype=float)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Coefficients for opcode '{opcode}' term '{term}' are not numeric.") from e
        if vec.shape != (NUM_BITS,):
            raise ConfigurationError(f"Coefficients for opcode '{opcode}' term '{term}' must be a vector of "
                                     f"{NUM_BITS} weights, got shape {vec.shape}.")
        vec.setflags(write=False)
        return vec

    def weights(self, opcode: str, term: str) -> np.ndarray:
        """
        Retrieve the per-bit weights for an interaction term of a given opcode.

        Parameters
        ----------
        opcode: str
            The instruction mnemonic the weights were calibrated for
        term: str
            The interaction term name

        Returns
        -------
        numpy.ndarray
            Read-only array of 32 weights, ordered by bit position
        """
        try:
            return self._table[opcode][term]
        except KeyError as e:
            raise CoefficientLookupError(f"No coefficients provided for opcode '{opcode}' term '{term}'.") from e

    def has_term(self, opcode: str, term: str) -> bool:
        """Check whether a coefficient vector exists for the given opcode and term."""
        return opcode in self._table and term in self._table[opcode]

    def opcodes(self) -> set:
        """The set of opcodes with at least one calibrated term."""
        return set(self._table)

    def terms(self, opcode: str) -> set:
        """The set of term names calibrated for an opcode, empty if the opcode is unknown."""
        return set(self._table.get(opcode, {}))

    @classmethod
    def from_dataframe(cls, frame: pd.DataFrame) -> Coefficients:
        """
        Build a coefficient table from a tabular layout with one row per (opcode, term) pair.

        Parameters
        ----------
        frame: pandas.DataFrame
            Must contain the columns 'opcode' and 'term', every other column is taken as a weight, in column order
            from bit 0 up to bit 31

        Returns
        -------
        Coefficients
            The constructed coefficient table
        """
        missing = {'opcode', 'term'} - set(frame.columns)
        if missing:
            raise ConfigurationError(f"Coefficient table is missing required columns: {', '.join(sorted(missing))}.")
        weight_cols = [col for col in frame.columns if col not in ('opcode', 'term')]
        table = {}
        for row in frame.to_dict(orient='records'):
            opcode_terms = table.setdefault(str(row['opcode']), {})
            if str(row['term']) in opcode_terms:
                raise ConfigurationError(f"Coefficient table has duplicate rows for opcode '{row['opcode']}' "
                                         f"term '{row['term']}'.")
            opcode_terms[str(row['term'])] = [row[col] for col in weight_cols]
        return cls(table)

    @classmethod
    def from_file(cls, file: str | Path) -> Coefficients:
        """
        Load a coefficient table from a JSON or CSV file.

        JSON files hold a nested object of opcode -> term -> list of 32 weights. CSV files follow the layout accepted
        by from_dataframe.

        Parameters
        ----------
        file: str or Path
            Path (absolute or relative to CWD) to the coefficients file

        Returns
        -------
        Coefficients
            The loaded coefficient table
        """
        path = Path(file)
        try:
            if path.suffix.lower() == '.json':
                with open(path) as f:
                    coeffs = cls(json.load(f))
            elif path.suffix.lower() == '.csv':
                coeffs = cls.from_dataframe(pd.read_csv(path))
            else:
                raise ConfigurationError(f"Unsupported coefficients file type '{path.suffix}', use .json or .csv.")
        except FileNotFoundError as e:
            msg = f'Could not find the requested coefficients file {file}, the file does not appear to exist.'
            raise FileNotFoundError(msg) from e
        logger.info(f"Loaded coefficients for {len(coeffs.opcodes())} opcodes from {path.name}.")
        return coeffs
