"""Defines the Factor class, the table type of variable elimination.

A factor is a non-negative table indexed by the joint assignments of a set of
random variables. Conditional probability tables, evidence-restricted
tables, their pointwise products, and their marginals are all factors.
Values are stored as a dense float64 array whose axes follow the order of
the factor's `Domain`, so an assignment addresses a cell by the positions of
its values rather than through nested mappings.
"""
from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator, Mapping, Sequence

import attr
import chex
import jax
import jax.numpy as jnp
import numpy as np

from .assignments import Assignment, all_assignments
from .domain import Domain
from .errors import InvalidEvidenceError, InvalidNetworkError, NormalizationError
from .variable import RandomVariable

jax.config.update("jax_enable_x64", True)


def _to_array(values) -> jax.Array:
    return jnp.asarray(values, dtype=jnp.float64)


@attr.dataclass(frozen=True)
class Factor:
    """Represents a factor defined over a discrete domain.

    Attributes:
        domain (Domain): The variables over which the factor is defined.
        values (jax.Array): A float64 array of shape `domain.shape`.

    Supported Operations:
        - Creation: `zeros`, `ones`, `from_dict`.
        - Reshaping: `transpose`, `expand`.
        - Evidence: `restrict` fixes some variables and drops them.
        - Aggregation: `sum`, `project` for marginalizing variables.
        - Binary Ops: `*` is the pointwise product of two factors.
        - Lookup: `factor[assignment]`, `items`, `table`.

    Example Usage:
        >>> a, b = RandomVariable('a', [0, 1]), RandomVariable('b', 'xyz')
        >>> f = Factor.ones(Domain([a])) * Factor.ones(Domain([b]))
        >>> print(f.domain)
        Domain(a: 2, b: 3)
    """
    domain: Domain
    values: jax.Array = attr.field(converter=_to_array)

    def __attrs_post_init__(self):
        if self.values.shape != self.domain.shape:
            raise ValueError("values must be same shape as domain.")

    # Constructors
    @classmethod
    def zeros(cls, domain: Domain) -> Factor:
        """Creates a Factor object with all values initialized to zero."""
        return cls(domain, jnp.zeros(domain.shape))

    @classmethod
    def ones(cls, domain: Domain) -> Factor:
        """Creates a Factor object with all values initialized to one.

        Over the empty domain this is the identity of the pointwise product.
        """
        return cls(domain, jnp.ones(domain.shape))

    @classmethod
    def from_dict(cls, domain: Domain, table: Mapping[tuple, float]) -> Factor:
        """Creates a Factor from a complete { value tuple : probability } table.

        Keys list one value per variable, in the order of `domain`.

        Example Usage:
            >>> a = RandomVariable('a', ['t', 'f'])
            >>> Factor.from_dict(Domain([a]), {('t',): 0.3, ('f',): 0.7}).table()
            {('t',): 0.3, ('f',): 0.7}
        """
        values = np.zeros(domain.shape)
        for idx in np.ndindex(*domain.shape):
            key = tuple(var.values[i] for var, i in zip(domain, idx))
            if key not in table:
                raise InvalidNetworkError(f"Missing table entry {key} for {domain}.")
            values[idx] = table[key]
        return cls(domain, values)

    # Reshaping operations
    def transpose(self, attrs: Sequence[RandomVariable]) -> Factor:
        """Rearranges the factor's axes according to the new variable order."""
        if set(attrs) != set(self.domain.attributes):
            raise ValueError("attrs must be same as domain attributes")
        newdom = self.domain.project(attrs)
        ax = newdom.axes(self.domain.attributes)
        values = jnp.moveaxis(self.values, range(len(ax)), ax)
        return Factor(newdom, values)

    def expand(self, domain: Domain) -> Factor:
        """Expands the factor's domain to include new variables."""
        if not domain.contains(self.domain):
            raise ValueError("Expanded domain must contain domain.")
        dims = len(domain) - len(self.domain)
        values = self.values.reshape(self.domain.shape + tuple([1] * dims))
        ax = domain.axes(self.domain.attributes)
        values = jnp.moveaxis(values, range(len(ax)), ax)
        values = jnp.broadcast_to(values, domain.shape)
        return Factor(domain, values)

    def restrict(self, evidence: Assignment) -> Factor:
        """Keeps the entries consistent with evidence and drops the evidence variables."""
        fixed = [var for var in self.domain if var in evidence]
        if not fixed:
            return self
        index = tuple(
            var.index(evidence[var]) if var in evidence else slice(None)
            for var in self.domain
        )
        return Factor(self.domain.marginalize(fixed), self.values[index])

    # Functions that aggregate along some subset of axes
    def _aggregate(
        self, fn: Callable, attrs: Sequence[RandomVariable] | None = None
    ) -> Factor:
        """Helper for aggregating values along specified variable axes."""
        attrs = self.domain.attributes if attrs is None else attrs
        axes = self.domain.axes(attrs)
        values = fn(self.values, axis=axes)
        newdom = self.domain.marginalize(attrs)
        return Factor(newdom, values)

    def sum(self, attrs: Sequence[RandomVariable] | None = None) -> Factor:
        """Sums out the given variables (all of them by default)."""
        return self._aggregate(jnp.sum, attrs)

    def project(self, attrs: RandomVariable | Sequence[RandomVariable]) -> Factor:
        """Computes the marginal over attrs by summing out every other variable."""
        if isinstance(attrs, RandomVariable):
            attrs = (attrs,)
        marginalized = self.domain.marginalize(attrs).attributes
        return self.sum(marginalized).transpose(attrs)

    def total(self) -> float:
        """Returns the total mass of the factor."""
        return float(jnp.sum(self.values))

    def normalize(self) -> Factor:
        """Rescales the factor so its values sum to one.

        Raises:
            NormalizationError: if the total mass is zero or not finite.
        """
        total = self.total()
        if total <= 0 or not np.isfinite(total):
            raise NormalizationError(f"Cannot normalize {self.domain} with total mass {total}.")
        return Factor(self.domain, self.values / total)

    def __float__(self):
        if len(self.domain) > 0:
            raise ValueError("Domain must be empty to convert to float.")
        return float(self.values)

    # Binary operations between two factors
    def _binaryop(self, fn: Callable, other: Factor | chex.Numeric) -> Factor:
        """Helper for applying binary operations between this factor and another factor or scalar."""
        if isinstance(other, chex.Numeric) and jnp.ndim(other) == 0:
            other = Factor(Domain([]), other)
        newdom = self.domain.merge(other.domain)
        factor1 = self.expand(newdom)
        factor2 = other.expand(newdom)
        return Factor(newdom, fn(factor1.values, factor2.values))

    def __mul__(self, other: Factor | chex.Numeric) -> Factor:
        """Pointwise product of two factors.

        The product is defined over the union of both domains. Each of its
        assignments agrees with exactly one assignment of each operand on the
        operand's variables, and maps to the product of their values.

        Example Usage:
            >>> a, b, c = (RandomVariable(n, [0, 1]) for n in 'abc')
            >>> f3 = Factor.ones(Domain([a, b])) * Factor.ones(Domain([b, c]))
            >>> print(f3.domain)
            Domain(a: 2, b: 2, c: 2)

        Args:
          other: the other factor (or a scalar) to multiply

        Returns:
          the product of the two factors
        """
        return self._binaryop(jnp.multiply, other)

    def __rmul__(self, other: chex.Numeric) -> Factor:
        return self * other

    # Lookup
    def __getitem__(self, assignment: Assignment) -> float:
        """Returns the value of the cell addressed by assignment.

        The assignment may mention variables outside the domain; they are ignored.
        """
        try:
            index = tuple(var.index(assignment[var]) for var in self.domain)
        except KeyError as err:
            raise InvalidEvidenceError(
                f"Assignment has no value for {err.args[0]} in {self.domain}."
            ) from err
        return float(self.values[index])

    def items(self) -> Iterator[tuple[dict[RandomVariable, Hashable], float]]:
        """Iterates over (assignment, value) pairs for every joint assignment."""
        values = np.asarray(self.values)
        for assignment in all_assignments(self.domain):
            index = tuple(var.index(assignment[var]) for var in self.domain)
            yield assignment, float(values[index])

    def table(self) -> dict[tuple, float]:
        """Returns the factor as a { value tuple : value } dictionary."""
        return {
            tuple(assignment[var] for var in self.domain): value
            for assignment, value in self.items()
        }
