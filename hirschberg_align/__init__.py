#!/usr/bin/env python3
"""
Copyright (c) 2025, Josh Walker

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

1. Redistributions of source code must retain the above copyright notice, this
   list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright notice,
   this list of conditions and the following disclaimer in the documentation
   and/or other materials provided with the distribution.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

Linear-Space Global Sequence Alignment

This module provides Hirschberg's divide-and-conquer alignment on top of
Needleman-Wunsch scoring. Scores are maximized under caller-supplied
deletion, insertion and substitution cost functions, and only two rows of
the score matrix are ever held in memory per recursion level.

Levenshtein distance and similarity helpers are provided alongside.

Author: Josh Walker

See: https://en.wikipedia.org/wiki/Hirschberg%27s_algorithm
"""

import logging
from dataclasses import dataclass

import edlib

logger = logging.getLogger(__name__)

# Gap marker used in aligned output unless the caller supplies another one
GAP = '-'

# Largest combined alphabet edlib accepts
EDLIB_MAX_SYMBOLS = 256


@dataclass(frozen=True)
class CostModel:
    """
    Constant-cost scoring model for global alignment.

    Costs are added to the alignment score, which is maximized, so penalties
    are negative and a match bonus is positive.

    Attributes:
        deletion: Cost of a seq1 symbol aligned against a gap
        insertion: Cost of a seq2 symbol aligned against a gap
        mismatch: Cost of aligning two different symbols
        match: Cost of aligning two equal symbols
    """
    deletion: int = -2     # Symbol of seq1 opposite a gap
    insertion: int = -2    # Symbol of seq2 opposite a gap
    mismatch: int = -1     # Substitution of different symbols
    match: int = 2         # Equal symbols (bonus)

    def __post_init__(self):
        """Validate that all costs are integers."""
        for field_name, value in self.__dict__.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Cost '{field_name}' must be an integer, got: {value!r}")

    def deletion_cost(self, a):
        return self.deletion

    def insertion_cost(self, b):
        return self.insertion

    def substitution_cost(self, a, b):
        return self.match if a == b else self.mismatch


@dataclass(frozen=True)
class AlignedPair:
    """Result of align_and_score.

    Fields:
        seq1_aligned: First sequence with gap markers inserted
        seq2_aligned: Second sequence with gap markers inserted
        score: Total cost of the alignment under the cost model used
    """
    seq1_aligned: object
    seq2_aligned: object
    score: object


# Reference cost model (del=-2, ins=-2, sub=-1, match=+2)
DEFAULT_COST_MODEL = CostModel()


def _resolve_costs(deletion, insertion, substitution):
    """Fill in missing cost functions from DEFAULT_COST_MODEL."""
    if deletion is None:
        deletion = DEFAULT_COST_MODEL.deletion_cost
    if insertion is None:
        insertion = DEFAULT_COST_MODEL.insertion_cost
    if substitution is None:
        substitution = DEFAULT_COST_MODEL.substitution_cost
    return deletion, insertion, substitution


def _last_row(seq1, seq2, deletion, insertion, substitution):
    """
    Compute the last row of the Needleman-Wunsch score matrix.

    Row i, column j holds the best score for aligning seq1[:i] with seq2[:j].
    Only the previous and current rows are kept; they are swapped after each
    symbol of seq1.

    Args:
        seq1: Sequence indexing the matrix rows
        seq2: Sequence indexing the matrix columns
        deletion, insertion, substitution: Cost functions

    Returns:
        list: len(seq2) + 1 scores for aligning all of seq1 with each prefix of seq2
    """
    prev = [0] * (len(seq2) + 1)
    for j, b in enumerate(seq2):
        prev[j + 1] = prev[j] + insertion(b)

    cur = [0] * (len(seq2) + 1)
    for a in seq1:
        del_a = deletion(a)
        cur[0] = prev[0] + del_a
        for j, b in enumerate(seq2):
            cur[j + 1] = max(
                prev[j] + substitution(a, b),
                prev[j + 1] + del_a,
                cur[j] + insertion(b),
            )
        prev, cur = cur, prev

    return prev


def _align_singleton(c, other, singleton_first, deletion, insertion, substitution, gap):
    """
    Align a single symbol against a sequence (Needleman-Wunsch with backtracking).

    The score matrix has only two rows here (prefixes of length 0 and 1 of the
    singleton side), so it is built in full. Backtracking walks from the last
    cell to the origin and, among moves reaching the recorded score, prefers
    substitution, then deletion of the singleton, then insertion of a symbol
    from the other sequence.

    Args:
        c: The singleton symbol
        other: The other sequence (length >= 1)
        singleton_first: True if c came from seq1, False if from seq2
        deletion, insertion, substitution: Cost functions in seq1/seq2 terms
        gap: Gap marker

    Returns:
        tuple: (aligned1, aligned2) lists in seq1/seq2 argument order
    """
    # Cost functions seen from the singleton's side
    if singleton_first:
        c_gap_cost = deletion(c)
        other_gap = insertion
        pair = substitution
    else:
        c_gap_cost = insertion(c)
        other_gap = deletion

        def pair(x, y):
            return substitution(y, x)

    m = len(other)
    row0 = [0] * (m + 1)
    row1 = [0] * (m + 1)
    row1[0] = c_gap_cost
    for j, b in enumerate(other):
        b_gap_cost = other_gap(b)
        row0[j + 1] = row0[j] + b_gap_cost
        row1[j + 1] = max(
            row0[j] + pair(c, b),
            row0[j + 1] + c_gap_cost,
            row1[j] + b_gap_cost,
        )

    singleton_side = []
    other_side = []
    i, j = 1, m
    while i or j:
        if i:
            # Substitution
            if j and row1[j] == row0[j - 1] + pair(c, other[j - 1]):
                singleton_side.append(c)
                other_side.append(other[j - 1])
                i -= 1
                j -= 1
                continue

            # Deletion of the singleton
            if row1[j] == row0[j] + c_gap_cost:
                singleton_side.append(c)
                other_side.append(gap)
                i -= 1
                continue

        # Insertion from the other sequence
        singleton_side.append(gap)
        other_side.append(other[j - 1])
        j -= 1

    singleton_side.reverse()
    other_side.reverse()

    if singleton_first:
        return singleton_side, other_side
    return other_side, singleton_side


def _hirschberg(seq1, seq2, deletion, insertion, substitution, gap):
    """Recursive step; returns the two aligned rows as lists."""
    n = len(seq1)
    m = len(seq2)

    if n == 0:
        return [gap] * m, list(seq2)
    if m == 0:
        return list(seq1), [gap] * n
    if n == 1:
        return _align_singleton(seq1[0], seq2, True, deletion, insertion, substitution, gap)
    if m == 1:
        return _align_singleton(seq2[0], seq1, False, deletion, insertion, substitution, gap)

    mid = n // 2

    # Forward scores of the top half, backward scores of the bottom half.
    # For odd n the bottom half is one row longer and holds the middle symbol.
    forward = _last_row(seq1[:mid], seq2, deletion, insertion, substitution)
    backward = _last_row(seq1[mid:][::-1], seq2[::-1], deletion, insertion, substitution)

    # First maximum wins ties
    split = 0
    best = forward[0] + backward[m]
    for j in range(1, m + 1):
        total = forward[j] + backward[m - j]
        if total > best:
            best = total
            split = j

    left1, left2 = _hirschberg(seq1[:mid], seq2[:split], deletion, insertion, substitution, gap)
    right1, right2 = _hirschberg(seq1[mid:], seq2[split:], deletion, insertion, substitution, gap)

    left1.extend(right1)
    left2.extend(right2)
    return left1, left2


def align(seq1, seq2, deletion=None, insertion=None, substitution=None, gap=GAP):
    """
    Compute an optimal global alignment of two sequences in linear space.

    Uses Hirschberg's algorithm: seq1 is halved at each recursion level and the
    matching cut of seq2 is found from forward and backward Needleman-Wunsch
    score rows. Recursion depth is O(log len(seq1)).

    Where several alignments attain the optimal score, the cut of seq2 is the
    leftmost optimal one, and single-symbol sub-problems prefer substitution
    over deletion over insertion. Output is therefore deterministic for
    deterministic cost functions.

    Args:
        seq1 (str or sequence): First sequence
        seq2 (str or sequence): Second sequence
        deletion (callable, optional): deletion(a) -> cost of seq1 symbol a opposite a gap
        insertion (callable, optional): insertion(b) -> cost of seq2 symbol b opposite a gap
        substitution (callable, optional): substitution(a, b) -> cost of aligning a with b
        gap (optional): Gap marker. Defaults to '-'.

    Any cost function left as None is taken from DEFAULT_COST_MODEL.

    Returns:
        tuple: (aligned1, aligned2) of equal length. Strings if both inputs are
            strings and gap is a single character, lists otherwise.

    Raises:
        ValueError: If string inputs are combined with a string gap that is not
            a single character. Exceptions raised by cost functions propagate.

    Example:
        >>> align("", "XYZ")
        ('---', 'XYZ')
        >>> align(["A", "C"], ["C"], gap=None)
        (['A', 'C'], [None, 'C'])
    """
    deletion, insertion, substitution = _resolve_costs(deletion, insertion, substitution)

    as_text = isinstance(seq1, str) and isinstance(seq2, str) and isinstance(gap, str)
    if as_text and len(gap) != 1:
        raise ValueError(f"Gap marker must be a single character, got: {gap!r}")

    logger.debug("Aligning sequences of length %d and %d", len(seq1), len(seq2))

    aligned1, aligned2 = _hirschberg(seq1, seq2, deletion, insertion, substitution, gap)

    if as_text:
        return ''.join(aligned1), ''.join(aligned2)
    return aligned1, aligned2


def needleman_wunsch_score(seq1, seq2, deletion=None, insertion=None, substitution=None):
    """
    Optimal global alignment score, without the alignment itself.

    Args:
        seq1, seq2: Sequences to score
        deletion, insertion, substitution (callable, optional): Cost functions,
            defaulting to DEFAULT_COST_MODEL

    Returns:
        Maximum total cost over all global alignments of seq1 and seq2
    """
    deletion, insertion, substitution = _resolve_costs(deletion, insertion, substitution)
    return _last_row(seq1, seq2, deletion, insertion, substitution)[-1]


def alignment_score(seq1_aligned, seq2_aligned, deletion=None, insertion=None,
                    substitution=None, gap=GAP):
    """
    Sum the per-column costs of an existing alignment.

    Args:
        seq1_aligned, seq2_aligned: Aligned rows of equal length
        deletion, insertion, substitution (callable, optional): Cost functions,
            defaulting to DEFAULT_COST_MODEL
        gap (optional): Gap marker used in the rows. Defaults to '-'.

    Returns:
        Total cost of the alignment

    Raises:
        ValueError: If the rows differ in length or a column holds two gaps
    """
    deletion, insertion, substitution = _resolve_costs(deletion, insertion, substitution)

    if len(seq1_aligned) != len(seq2_aligned):
        raise ValueError(
            f"Aligned sequences must have same length: "
            f"seq1={len(seq1_aligned)}, seq2={len(seq2_aligned)}"
        )

    score = 0
    for pos, (a, b) in enumerate(zip(seq1_aligned, seq2_aligned)):
        if a == gap and b == gap:
            raise ValueError(f"Gap aligned with gap at position {pos}")
        if b == gap:
            score += deletion(a)
        elif a == gap:
            score += insertion(b)
        else:
            score += substitution(a, b)
    return score


def align_and_score(seq1, seq2, cost_model=None, gap=GAP):
    """
    Align two sequences under a CostModel and report the alignment score.

    Args:
        seq1, seq2: Sequences to align
        cost_model (CostModel, optional): Defaults to DEFAULT_COST_MODEL
        gap (optional): Gap marker. Defaults to '-'.

    Returns:
        AlignedPair: aligned rows and their total score

    Example:
        >>> result = align_and_score("A", "A")
        >>> result.score
        2
    """
    if cost_model is None:
        cost_model = DEFAULT_COST_MODEL

    costs = (cost_model.deletion_cost, cost_model.insertion_cost, cost_model.substitution_cost)
    seq1_aligned, seq2_aligned = align(seq1, seq2, *costs, gap=gap)

    return AlignedPair(
        seq1_aligned=seq1_aligned,
        seq2_aligned=seq2_aligned,
        score=alignment_score(seq1_aligned, seq2_aligned, *costs, gap=gap),
    )


def dist(seq1, seq2):
    """
    Levenshtein distance: minimum number of unit-cost single-symbol
    insertions, deletions and substitutions turning seq1 into seq2.

    Args:
        seq1, seq2 (str or sequence): Sequences to compare

    Returns:
        int: Edit distance (0 <= distance <= max(len(seq1), len(seq2)))

    Examples:
        >>> dist("kitten", "sitting")
        3
    """
    if len(seq1) == 0:
        return len(seq2)
    if len(seq2) == 0:
        return len(seq1)
    if seq1 == seq2:
        return 0

    # edlib maps symbols to bytes and rejects larger alphabets
    if len(set(seq1) | set(seq2)) > EDLIB_MAX_SYMBOLS:
        return _levenshtein_rows(seq1, seq2)

    result = edlib.align(seq1, seq2, mode="NW", task="distance")
    return result['editDistance']


def _levenshtein_rows(seq1, seq2):
    """Unit-cost edit distance with two rolling rows (O(len(seq2)) memory)."""
    prev = list(range(len(seq2) + 1))
    cur = [0] * (len(seq2) + 1)
    for i, a in enumerate(seq1):
        cur[0] = i + 1
        for j, b in enumerate(seq2):
            cur[j + 1] = min(
                cur[j] + 1,
                prev[j + 1] + 1,
                prev[j] + (0 if a == b else 1),
            )
        prev, cur = cur, prev

    return prev[-1]


def simi(seq1, seq2):
    """
    Levenshtein similarity: 1 - dist(seq1, seq2) / max(len(seq1), len(seq2)).

    The result lies in [0, 1] since the distance never exceeds the longer
    length. Identical sequences (including two empty ones) score 1.0.

    Examples:
        >>> round(simi("kitten", "sitting"), 4)
        0.5714
    """
    distance = dist(seq1, seq2)
    if distance == 0:
        return 1.0

    return 1.0 - distance / max(len(seq1), len(seq2))
