"""Exact inference by variable elimination.

Every variable of the network contributes one factor: its conditional
probability table restricted to the evidence. Hidden variables (neither the
query nor observed) are then summed out one at a time, each time replacing
the factors that mention the variable by the marginal of their pointwise
product. The product of the remaining factors is a factor over the query
alone, which is normalized into the posterior.
"""
import functools
import logging
from collections.abc import Hashable, Sequence

from .assignments import Assignment
from .distribution import normalize
from .domain import Domain
from .errors import EliminationError
from .factor import Factor
from .network import BayesNet
from .ordering import OrderingStrategy, resolve_order
from .variable import RandomVariable

logger = logging.getLogger(__name__)


def make_factor(x: RandomVariable, evidence: Assignment, network: BayesNet) -> Factor:
    """Returns the CPT of x restricted to evidence, over {x} | parents(x) minus evidence."""
    return network.cpt(x).restrict(evidence)


def pointwise_product(f1: Factor, f2: Factor) -> Factor:
    """Multiplies two factors on the union of their variables."""
    return f1 * f2


def sum_out_factor(x: RandomVariable, factor: Factor) -> Factor:
    """Marginalizes x out of factor.

    Every assignment of the remaining variables maps to the sum of the
    factor's values over all completions of that assignment by a value of x.
    """
    return factor.sum([x])


def sum_out(x: RandomVariable, factors: Sequence[Factor]) -> list[Factor]:
    """Eliminates x from a list of factors.

    The factors that mention x are replaced by a single factor, the
    marginal of their pointwise product. If no factor mentions x the list is
    returned unchanged.
    """
    relevant = [f for f in factors if x in f.domain]
    if not relevant:
        return list(factors)
    product = functools.reduce(pointwise_product, relevant)
    result = sum_out_factor(x, product)
    logger.debug(
        "Eliminated %s: %d factors, product over %s, result over %s.",
        x, len(relevant), product.domain, result.domain,
    )
    return [f for f in factors if x not in f.domain] + [result]


def variable_elimination_ask(
    query: RandomVariable,
    evidence: Assignment,
    network: BayesNet,
    elimination_order: Sequence[RandomVariable] | OrderingStrategy | None = None,
) -> dict[Hashable, float]:
    """Computes P(query | evidence) by variable elimination.

    Args:
        query: The query variable.
        evidence: A partial assignment of the network's variables.
        network: The Bayesian network.
        elimination_order: The order in which hidden variables are summed
            out: an explicit sequence, a strategy from `bninfer.ordering`, or
            None for the network's declared order.

    Returns:
        A { value : probability } dictionary over the values of the query,
        in the order of `query.values`, summing to one.

    Raises:
        InvalidEvidenceError: if the query or evidence does not fit the network.
        NormalizationError: if the evidence has probability zero.
        EliminationError: if the final factor is not over the query alone,
            e.g. because the elimination order missed a hidden variable.
    """
    evidence = network.check_evidence(evidence, query)
    factors = [make_factor(x, evidence, network) for x in network.variables]
    hidden = [x for x in network.variables if x != query and x not in evidence]

    for x in resolve_order(elimination_order, network, hidden, evidence):
        factors = sum_out(x, factors)

    factor = functools.reduce(pointwise_product, factors, Factor.ones(Domain([])))
    if set(factor.domain) != {query}:
        variables = [str(v) for v in factor.domain]
        raise EliminationError(
            f"Variables in final factor {variables} do not match query {query}.",
            factor.domain.attributes,
        )
    return normalize(
        {assignment[query]: value for assignment, value in factor.items()},
        "contradictory evidence",
    )

