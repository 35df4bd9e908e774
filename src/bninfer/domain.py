"""Defines the Domain class for representing sets of random variables.

This module provides the `Domain` class, which encapsulates an ordered tuple
of distinct random variables. The shape of a domain is derived from the
number of values of each variable, and is the shape of the probability table
of any factor defined over it. Domains support projection, marginalization,
and merging, which are the bookkeeping half of factor algebra.
"""
import functools
from collections.abc import Iterable, Iterator, Sequence

import attr

from .variable import RandomVariable


@attr.dataclass(frozen=True)
class Domain:
    """Represents an ordered set of discrete random variables.

    Attributes:
        attributes (tuple[RandomVariable, ...]): The variables in the domain,
            in axis order.

    Supported Operations:
        - Projection (`project`): Creates a new domain with a subset of variables.
        - Marginalization (`marginalize`): Creates a new domain excluding specified variables.
        - Merging (`merge`): Combines two domains into a larger one.
        - Size Calculation (`size`): Computes the number of joint assignments.

    Example Usage:
        >>> a = RandomVariable('a', [0, 1])
        >>> b = RandomVariable('b', 'xyz')
        >>> print(Domain([a, b]))
        Domain(a: 2, b: 3)
    """
    attributes: tuple[RandomVariable, ...] = attr.field(converter=tuple)

    def __attrs_post_init__(self):
        if len(self.attributes) != len(set(self.attributes)):
            raise ValueError("Variables must be unique.")

    @functools.cached_property
    def shape(self) -> tuple[int, ...]:
        """Returns the number of values of each variable, in axis order."""
        return tuple(var.size for var in self.attributes)

    def project(self, attributes: RandomVariable | Iterable[RandomVariable]) -> "Domain":
        """Project the domain onto a subset of variables.

        Args:
          attributes: the variables to project onto
        Returns:
          the projected Domain object, ordered as `attributes`
        """
        if isinstance(attributes, RandomVariable):
            attributes = [attributes]
        attributes = tuple(attributes)
        if not set(attributes) <= set(self.attributes):
            raise ValueError(f"Cannot project {self} onto {[str(a) for a in attributes]}.")
        return Domain(attributes)

    def marginalize(self, attrs: Iterable[RandomVariable]) -> "Domain":
        """Marginalize out some variables from the domain (opposite of project).

        Args:
          attrs: the variables to marginalize out.
        Returns:
          the marginalized Domain object
        """
        attrs = set(attrs)
        return Domain(a for a in self.attributes if a not in attrs)

    def contains(self, other: "Domain") -> bool:
        """Checks if this domain contains all variables present in another domain."""
        return set(other.attributes) <= set(self.attributes)

    def canonical(self, attrs):
        """Returns variables common to the domain and input, maintaining the domain's order."""
        return tuple(a for a in self.attributes if a in attrs)

    def axes(self, attrs: Sequence[RandomVariable]) -> tuple[int, ...]:
        """Return the axes tuple for the given variables."""
        return tuple(self.attributes.index(a) for a in attrs)

    def merge(self, other: "Domain") -> "Domain":
        """Merge this Domain object with another.

        Variables of this domain come first, followed by the variables of
        `other` that are not already present.

        Args:
          other: another Domain object
        Returns:
          a new domain object covering the union of both domains.
        """
        extra = other.marginalize(self.attributes)
        return Domain(self.attributes + extra.attributes)

    def size(self, attributes: Sequence[RandomVariable] | None = None) -> int:
        """Return the number of joint assignments of the domain (or a subset)."""
        if attributes is None:
            return functools.reduce(lambda x, y: x * y, self.shape, 1)
        return self.project(attributes).size()

    def __contains__(self, var: RandomVariable) -> bool:
        return var in self.attributes

    def __iter__(self) -> Iterator[RandomVariable]:
        return self.attributes.__iter__()

    def __len__(self) -> int:
        return len(self.attributes)

    def __str__(self) -> str:
        inner = ", ".join("%s: %d" % (a.name, a.size) for a in self.attributes)
        return "Domain(%s)" % inner
