# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Tests for the calibration coefficient table"""

import json
import pytest
import numpy as np
import pandas as pd

from leaksim.models.coefficients import *
from leaksim.exceptions import ConfigurationError, CoefficientLookupError


def weight_frame():
    rows = [{'opcode': 'ADD', 'term': 'a', **{f"w{i}": float(i) for i in range(32)}},
            {'opcode': 'ADD', 'term': 'b', **{f"w{i}": 1.0 for i in range(32)}},
            {'opcode': 'EOR', 'term': 'a', **{f"w{i}": 0.5 for i in range(32)}}]
    return pd.DataFrame(rows)


def test_coefficients_lookup():
    coeffs = Coefficients({'ADD': {'a': list(range(32)), 'b': np.ones(32)}})
    assert np.allclose(coeffs.weights('ADD', 'a'), np.arange(32))
    assert coeffs.weights('ADD', 'b').dtype == float
    assert coeffs.has_term('ADD', 'b')
    assert not coeffs.has_term('ADD', 'c') and not coeffs.has_term('SUB', 'a')
    assert coeffs.opcodes() == {'ADD'}
    assert coeffs.terms('ADD') == {'a', 'b'}
    assert coeffs.terms('SUB') == set()
    with pytest.raises(CoefficientLookupError):
        coeffs.weights('ADD', 'c')
    with pytest.raises(LookupError):
        coeffs.weights('SUB', 'a')
    # Stored vectors cannot be altered through the returned reference
    with pytest.raises(ValueError):
        coeffs.weights('ADD', 'a')[0] = 100


def test_coefficients_validation():
    with pytest.raises(ConfigurationError):
        _ = Coefficients({'ADD': {'a': np.ones(31)}})
    with pytest.raises(ConfigurationError):
        _ = Coefficients({'ADD': {'a': np.ones(33)}})
    with pytest.raises(ConfigurationError):
        _ = Coefficients({'ADD': {'a': np.ones((2, 16))}})
    with pytest.raises(ConfigurationError):
        _ = Coefficients({'ADD': {'a': ['heavy'] * 32}})
    assert Coefficients().opcodes() == set()


def test_coefficients_from_dataframe():
    coeffs = Coefficients.from_dataframe(weight_frame())
    assert coeffs.opcodes() == {'ADD', 'EOR'}
    assert coeffs.weights('ADD', 'a')[31] == 31.0
    assert np.allclose(coeffs.weights('EOR', 'a'), np.full(32, 0.5))

    with pytest.raises(ConfigurationError):
        Coefficients.from_dataframe(weight_frame().drop(columns=['term']))
    with pytest.raises(ConfigurationError):
        Coefficients.from_dataframe(weight_frame().drop(columns=['w31']))
    with pytest.raises(ConfigurationError):
        Coefficients.from_dataframe(pd.concat([weight_frame(), weight_frame().iloc[[0]]], ignore_index=True))


def test_coefficients_from_file(tmp_path):
    json_file = tmp_path / 'coeffs.json'
    with open(json_file, 'w') as f:
        json.dump({'MUL': {'a': [2.0] * 32}}, f)
    coeffs = Coefficients.from_file(json_file)
    assert np.allclose(coeffs.weights('MUL', 'a'), np.full(32, 2.0))

    csv_file = tmp_path / 'coeffs.csv'
    weight_frame().to_csv(csv_file, index=False)
    coeffs = Coefficients.from_file(str(csv_file))
    assert coeffs.terms('ADD') == {'a', 'b'}
    assert coeffs.weights('ADD', 'a')[5] == 5.0

    with pytest.raises(ConfigurationError):
        Coefficients.from_file(tmp_path / 'coeffs.txt')
    with pytest.raises(FileNotFoundError):
        Coefficients.from_file(tmp_path / 'absent.json')
