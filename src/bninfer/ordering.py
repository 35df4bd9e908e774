"""Elimination orders for variable elimination.

An ordering strategy is a callable `(network, hidden, evidence) -> order`
returning the hidden variables in the order they should be summed out. The
default, `declared_order`, eliminates in the order the network declares its
variables. `greedy_order` picks, at each step, the variable whose elimination
creates the smallest factor; it can be much faster on larger networks but
changes the intermediate factors.
"""
from collections import OrderedDict
from collections.abc import Callable, Collection, Sequence
from typing import TypeAlias

from .assignments import Assignment
from .network import BayesNet
from .variable import RandomVariable

OrderingStrategy: TypeAlias = Callable[
    [BayesNet, Collection[RandomVariable], Assignment], Sequence[RandomVariable]
]


def declared_order(
    network: BayesNet, hidden: Collection[RandomVariable], evidence: Assignment | None = None
) -> list[RandomVariable]:
    """Returns the hidden variables in the network's declared order."""
    hidden = set(hidden)
    return [var for var in network.variables if var in hidden]


def greedy_order(
    network: BayesNet, hidden: Collection[RandomVariable], evidence: Assignment | None = None
) -> list[RandomVariable]:
    """Compute a greedy (min-weight) elimination order of the hidden variables.

    The cost of eliminating a variable is the number of cells of the product
    of every factor that mentions it. Evidence variables are fixed, so they
    are left out of the factors. Ties are broken by declared order.
    """
    evidence = {} if evidence is None else evidence
    order = []
    unmarked = declared_order(network, hidden)
    cliques = {
        tuple(v for v in (var,) + network.parents(var) if v not in evidence)
        for var in network.variables
    }
    domain = network.domain
    for _ in range(len(unmarked)):
        cost = OrderedDict()
        for a in unmarked:
            neighbors = [cl for cl in cliques if a in cl]
            variables = tuple(set.union(set(), *map(set, neighbors)))
            cost[a] = domain.size(variables)

        a = min(cost, key=lambda a: cost[a])
        order.append(a)
        unmarked.remove(a)
        neighbors = [cl for cl in cliques if a in cl]
        variables = domain.canonical(set.union(set(), *map(set, neighbors)) - {a})
        cliques -= set(neighbors)
        cliques.add(variables)

    return order


def resolve_order(
    elimination_order: Sequence[RandomVariable] | OrderingStrategy | None,
    network: BayesNet,
    hidden: Collection[RandomVariable],
    evidence: Assignment | None = None,
) -> list[RandomVariable]:
    """Turns an explicit order, a strategy, or None (declared order) into a list."""
    evidence = {} if evidence is None else evidence
    if elimination_order is None:
        return declared_order(network, hidden, evidence)
    if callable(elimination_order):
        return list(elimination_order(network, hidden, evidence))
    return list(elimination_order)
