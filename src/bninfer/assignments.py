"""Utility functions for enumerating and comparing assignments.

An assignment is a mapping from random variables to one of their values.
A complete assignment of a set of variables gives every variable a value;
evidence is a partial assignment of the variables of a network.
"""
from collections.abc import Hashable, Iterable, Mapping
from typing import TypeAlias

from .variable import RandomVariable

Assignment: TypeAlias = Mapping[RandomVariable, Hashable]


def all_assignments(variables: Iterable[RandomVariable]) -> list[dict[RandomVariable, Hashable]]:
    """Enumerates every complete assignment of the given variables.

    The result is built by extending the singleton list holding the empty
    assignment one variable at a time, by every value of that variable.

    Example Usage:
    >>> a, b = RandomVariable('a', [0, 1]), RandomVariable('b', 'xyz')
    >>> len(all_assignments([a, b]))
    6
    >>> all_assignments([])
    [{}]

    Args:
      variables: The variables to enumerate assignments of.

    Returns:
      A list with one dict per joint assignment, prod(var.size) in total.
    """
    result = [{}]
    for var in variables:
        result = [{**partial, var: value} for partial in result for value in var.values]
    return result


def is_consistent(event: Assignment, evidence: Assignment) -> bool:
    """Returns true if every evidence variable takes its evidence value in event."""
    return all(var in event and event[var] == value for var, value in evidence.items())
