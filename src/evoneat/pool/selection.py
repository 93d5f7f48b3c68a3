"""
NEAT Parent Selection Module

This module defines the contract for parent selection policies and the
reference rank selection policy.

Classes:
    SelectionPolicy: Protocol for policies picking two parents from a fitness vector
    RankSelection:   Rank-proportionate selection
"""

import random
from typing import Protocol, Sequence

class SelectionPolicy(Protocol):
    """
    Picks two parents out of a group of candidates.

    The policy receives the fitnesses of the candidates sorted in ascending
    order and returns two indices into that vector. Whenever there are at least
    two candidates the indices must be distinct, and a candidate's chance of
    being picked must grow with its rank.
    """

    def select(self, fitnesses: Sequence[float]) -> tuple[int, int]:
        ...


class RankSelection:
    """
    Rank selection.

    Candidates are ranked by fitness: in the ascending fitness vector, the candidate
    at position 'i' has rank r = i + 1 (1 = worst, N = best). Candidates are scanned
    in order, wrapping around, and each is accepted with probability 2r / (N(N+1))
    until a candidate is accepted. The second parent is picked by the same scan with
    the first parent's position skipped, so each remaining candidate keeps its
    acceptance probability and the two parents always differ.

    If no candidate is accepted after 'max_passes' full passes, the best candidate
    (or the best one different from the first parent) is taken, which bounds the
    running time.
    """

    def __init__(self, max_passes: int = 100):
        """
        Parameters:
            max_passes: maximum number of passes over the candidates per parent
        """
        self.max_passes = max_passes

    def select(self, fitnesses: Sequence[float]) -> tuple[int, int]:
        """
        Select two parents.

        Parameters:
            fitnesses: candidate fitnesses, sorted in ascending order

        Returns:
            2-tuple with the indices of the selected parents

        Raises:
            ValueError: if there are no candidates
        """
        size = len(fitnesses)
        if size == 0:
            raise ValueError("cannot select parents out of an empty group")
        if size == 1:
            return 0, 0

        first  = self._pick(size, exclude=None)
        second = self._pick(size, exclude=first)
        return first, second

    def _pick(self, size: int, exclude: int | None) -> int:
        normalizer = size * (size + 1)
        for _ in range(self.max_passes):
            for pos in range(size):
                if pos == exclude:
                    continue
                if random.random() < 2.0 * (pos + 1) / normalizer:
                    return pos

        # Fall back to the best eligible candidate
        return size - 1 if exclude != size - 1 else size - 2
