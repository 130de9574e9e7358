# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""
Pure bit interaction functions used to derive leakage features from 32-bit data path words.

All inputs are reduced to their low 32 bits, so negative Python integers are treated as their two's complement
32-bit encoding.
"""

__all__ = ['NUM_BITS', 'WORD_MASK', 'hamming_weight', 'bit_flips', 'pairwise_interactions']

NUM_BITS = 32
WORD_MASK = (1 << NUM_BITS) - 1


def hamming_weight(value: int) -> int:
    """Count the number of set bits within the 32-bit word."""
    return bin(value & WORD_MASK).count('1')


def bit_flips(prev_word: int, curr_word: int) -> int:
    """
    Compute the bit flip vector between two words, each set bit marks a position at which the words differ.

    Parameters
    ----------
    prev_word: int
        The first 32-bit word, typically the value held on a data path in the preceding cycle
    curr_word: int
        The second 32-bit word, typically the value now held on the same data path

    Returns
    -------
    int
        The 32-bit XOR of the two words
    """
    return (prev_word ^ curr_word) & WORD_MASK


def pairwise_interactions(value: int) -> int:
    """
    Count the bit position pairs (m, n) with m < n for which both bit m and bit n of the word are set.

    The result is the number of ways to choose two of the set bits, i.e. k * (k - 1) / 2 for a word with k set bits,
    ranging from 0 up to 496 for a word with all 32 bits set.

    Parameters
    ----------
    value: int
        The 32-bit word to examine

    Returns
    -------
    int
        The number of interacting set bit pairs within the word
    """
    set_bits = hamming_weight(value)
    return set_bits * (set_bits - 1) // 2
