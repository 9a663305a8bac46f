"""Enumeration of location combinations."""
from typing import List, Sequence


def generate_combinations(values: Sequence[str]) -> List[List[str]]:
    """
    Generate every non-empty subset of values.

    Subsets keep the relative order of their members from the input. The
    output order is deterministic: for ``["a", "b", "c"]`` it is
    ``[a], [b], [a, b], [c], [a, c], [b, c], [a, b, c]``.

    Args:
        values: Distinct keys in the order they should be combined

    Returns:
        List of 2^N - 1 subsets, each a new list
    """
    combinations: List[List[str]] = []

    for current in values:
        # Only extend the subsets that existed before this key was seen
        count = len(combinations)
        combinations.append([current])

        for i in range(count):
            combinations.append(combinations[i] + [current])

    return combinations
