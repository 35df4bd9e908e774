"""Defines conditional probability tables and the BayesNet class.

A `BayesNet` is an ordered collection of `CPT`s. The order in which the
tables are given is the declared variable order of the network: it must be a
topological order of the parent graph, and it is the order in which the
enumeration engine recurses, the sampling engines draw values, and (by
default) the elimination engine eliminates hidden variables.
"""
from __future__ import annotations

import functools
import logging
from collections.abc import Hashable, Mapping, Sequence

import attr
import networkx as nx
import numpy as np

from .assignments import Assignment, all_assignments
from .domain import Domain
from .errors import InvalidEvidenceError, InvalidNetworkError
from .factor import Factor
from .variable import RandomVariable

logger = logging.getLogger(__name__)


@attr.dataclass(frozen=True)
class CPT:
    """The conditional probability table of one variable given its parents.

    Attributes:
        variable (RandomVariable): The variable the table is defined for.
        parents (tuple[RandomVariable, ...]): The parents of the variable.
        table (Factor): A factor over `parents + (variable,)`. Each row (a
            fixed assignment of the parents) is a distribution over the
            values of the variable; this is not validated.
    """
    variable: RandomVariable
    parents: tuple[RandomVariable, ...] = attr.field(converter=tuple)
    table: Factor

    def __attrs_post_init__(self):
        if self.table.domain.attributes != self.parents + (self.variable,):
            raise InvalidNetworkError(
                f"Table of {self.variable} is over {self.table.domain}, "
                f"expected parents followed by the variable."
            )

    @staticmethod
    def from_dict(
        variable: RandomVariable,
        parents: Sequence[RandomVariable],
        rows: Mapping[tuple, Mapping[Hashable, float] | Sequence[float]],
    ) -> CPT:
        """Construct a CPT from a { parent values : distribution } dictionary.

        Each distribution is either a { value : probability } mapping or a
        sequence of probabilities in the order of `variable.values`.

        Example Usage:
            >>> rain, wet = RandomVariable.boolean('Rain'), RandomVariable.boolean('Wet')
            >>> cpt = CPT.from_dict(wet, [rain], {(True,): [0.9, 0.1], (False,): [0.2, 0.8]})
            >>> cpt.probability(False, {rain: True})
            0.1

        Args:
          variable: the variable the table is defined for
          parents: the parents of the variable, in key order
          rows: one distribution per joint assignment of the parents
        Returns:
          the CPT object
        """
        parents = tuple(parents)
        table = {}
        for assignment in all_assignments(parents):
            key = tuple(assignment[p] for p in parents)
            if key not in rows:
                raise InvalidNetworkError(f"CPT of {variable} has no row for parents {key}.")
            row = rows[key]
            if not isinstance(row, Mapping):
                if len(row) != variable.size:
                    raise InvalidNetworkError(
                        f"CPT row {key} of {variable} has {len(row)} entries, "
                        f"expected {variable.size}."
                    )
                row = dict(zip(variable.values, row))
            for value in variable.values:
                if value not in row:
                    raise InvalidNetworkError(
                        f"CPT row {key} of {variable} has no entry for {value!r}."
                    )
                table[key + (value,)] = row[value]
        return CPT(variable, parents, Factor.from_dict(Domain(parents + (variable,)), table))

    @staticmethod
    def prior(variable: RandomVariable, probabilities: Mapping[Hashable, float] | Sequence[float]) -> CPT:
        """Construct the CPT of a variable without parents."""
        return CPT.from_dict(variable, (), {(): probabilities})

    @functools.cached_property
    def _rows(self) -> np.ndarray:
        return np.asarray(self.table.values)

    def _row(self, assignment: Assignment) -> np.ndarray:
        index = []
        for parent in self.parents:
            if parent not in assignment:
                raise InvalidEvidenceError(
                    f"No value for {parent}, a parent of {self.variable}."
                )
            index.append(parent.index(assignment[parent]))
        return self._rows[tuple(index)]

    def distribution(self, assignment: Assignment) -> dict[Hashable, float]:
        """Returns P(variable | parents) for the parent values in assignment."""
        return dict(zip(self.variable.values, self._row(assignment).tolist()))

    def probability(self, value: Hashable, assignment: Assignment) -> float:
        """Returns P(variable=value | parents) for the parent values in assignment."""
        return float(self._row(assignment)[self.variable.index(value)])


@attr.dataclass(frozen=True)
class BayesNet:
    """A Bayesian network over discrete random variables.

    Attributes:
        cpts (tuple[CPT, ...]): One table per variable, in declared order.

    Example Usage:
        >>> from bninfer import networks
        >>> net = networks.alarm()
        >>> [v.name for v in net.parents(net['Alarm'])]
        ['Burglary', 'Earthquake']
    """
    cpts: tuple[CPT, ...] = attr.field(converter=tuple)

    def __attrs_post_init__(self):
        names = [cpt.variable.name for cpt in self.cpts]
        if len(names) != len(set(names)):
            raise InvalidNetworkError("Variable names must be unique.")
        for cpt in self.cpts:
            for parent in cpt.parents:
                if parent.name not in names:
                    raise InvalidNetworkError(f"{parent}, a parent of {cpt.variable}, is not declared.")
        if not nx.is_directed_acyclic_graph(self.graph):
            cycle = nx.find_cycle(self.graph)
            raise InvalidNetworkError(f"Network has a cycle: {[(str(a), str(b)) for a, b in cycle]}.")
        seen = set()
        for cpt in self.cpts:
            late = [str(p) for p in cpt.parents if p not in seen]
            if late:
                raise InvalidNetworkError(
                    f"{cpt.variable} is declared before its parents {late}; "
                    "variables must be declared in topological order."
                )
            seen.add(cpt.variable)
        logger.debug("Built network over %d variables.", len(self.cpts))

    @functools.cached_property
    def _by_variable(self) -> dict[RandomVariable, CPT]:
        return {cpt.variable: cpt for cpt in self.cpts}

    @functools.cached_property
    def variables(self) -> tuple[RandomVariable, ...]:
        """The variables of the network, in declared order."""
        return tuple(cpt.variable for cpt in self.cpts)

    @functools.cached_property
    def domain(self) -> Domain:
        return Domain(self.variables)

    @functools.cached_property
    def graph(self) -> nx.DiGraph:
        """The parent graph, with an edge from each parent to its child."""
        graph = nx.DiGraph()
        graph.add_nodes_from(cpt.variable for cpt in self.cpts)
        for cpt in self.cpts:
            graph.add_edges_from((p, cpt.variable) for p in cpt.parents)
        return graph

    def _lookup(self, var: RandomVariable) -> CPT:
        try:
            return self._by_variable[var]
        except KeyError:
            raise InvalidEvidenceError(f"{var} is not a variable of the network.") from None

    def cpt(self, var: RandomVariable) -> Factor:
        """Returns the table of var as a factor over its parents and var."""
        return self._lookup(var).table

    def parents(self, var: RandomVariable) -> tuple[RandomVariable, ...]:
        return self._lookup(var).parents

    def children(self, var: RandomVariable) -> tuple[RandomVariable, ...]:
        self._lookup(var)
        return tuple(self.graph.successors(var))

    def probability(self, var: RandomVariable, value: Hashable, assignment: Assignment) -> float:
        """Returns P(var=value | parents(var)), reading parent values from assignment."""
        return self._lookup(var).probability(value, assignment)

    def distribution(self, var: RandomVariable, assignment: Assignment) -> dict[Hashable, float]:
        """Returns P(var | parents(var)), reading parent values from assignment."""
        return self._lookup(var).distribution(assignment)

    def check_evidence(
        self, evidence: Assignment, query: RandomVariable | None = None
    ) -> dict[RandomVariable, Hashable]:
        """Validates a query and its evidence against the network.

        Args:
          evidence: a partial assignment of the network's variables.
          query: the query variable, if any.
        Returns:
          the evidence as a new dict.
        Raises:
          InvalidEvidenceError: if a variable is not in the network, a value
            is not in its variable's domain, or the query is part of the evidence.
        """
        evidence = dict(evidence)
        for var, value in evidence.items():
            self._lookup(var).variable.index(value)
        if query is not None:
            self._lookup(query)
            if query in evidence:
                raise InvalidEvidenceError(f"Query variable {query} is part of the evidence.")
        return evidence

    def __getitem__(self, name: str) -> RandomVariable:
        """Returns the variable with the given name."""
        for var in self.variables:
            if var.name == name:
                return var
        raise KeyError(name)

    def __iter__(self):
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.cpts)
