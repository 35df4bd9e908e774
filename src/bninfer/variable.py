"""Defines the RandomVariable class.

A random variable is a named entity with a finite, ordered set of value
labels. Variables are identified by name: two variables with the same name
compare equal regardless of their values, and two variables that share a
domain but not a name never do.
"""
from __future__ import annotations

from collections.abc import Hashable

import attr

from .errors import InvalidEvidenceError


@attr.dataclass(frozen=True)
class RandomVariable:
    """A discrete random variable.

    Attributes:
        name (str): The identity token of the variable. Used for equality,
            hashing and as the column name of sample frames.
        values (tuple): The ordered value labels of the variable.

    Example Usage:
        >>> rain = RandomVariable('Rain', ['yes', 'no'])
        >>> rain.size
        2
        >>> rain == RandomVariable('Rain', ['wet', 'dry'])
        True
    """
    name: str
    values: tuple = attr.field(converter=tuple, eq=False)

    def __attrs_post_init__(self):
        if len(self.values) == 0:
            raise ValueError(f"{self.name} must have at least one value.")
        if len(self.values) != len(set(self.values)):
            raise ValueError(f"Values of {self.name} must be distinct.")

    @staticmethod
    def boolean(name: str) -> RandomVariable:
        """Construct a variable over the values (True, False)."""
        return RandomVariable(name, (True, False))

    @property
    def size(self) -> int:
        return len(self.values)

    def index(self, value: Hashable) -> int:
        """Return the position of value in the domain of this variable."""
        try:
            return self.values.index(value)
        except ValueError:
            raise InvalidEvidenceError(
                f"{value!r} is not a value of {self.name}; expected one of {self.values}."
            ) from None

    def __str__(self) -> str:
        return self.name
