"""Exact inference by enumeration of the joint distribution.

`enumeration_ask` sums the product of conditional probabilities over every
assignment of the hidden variables consistent with the evidence. Its cost is
exponential in the number of hidden variables; it is the semantic baseline
the other engines are checked against.
"""
import logging
from collections.abc import Hashable, Sequence

from .assignments import Assignment
from .distribution import normalize
from .errors import BudgetExceededError
from .network import BayesNet
from .variable import RandomVariable

logger = logging.getLogger(__name__)


class _StepCounter:
    """Counts recursive calls and enforces an optional budget."""

    def __init__(self, max_steps: int | None):
        self.max_steps = max_steps
        self.steps = 0

    def tick(self):
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise BudgetExceededError(f"Enumeration exceeded its budget of {self.max_steps} steps.")


def enumeration_ask(
    query: RandomVariable,
    evidence: Assignment,
    network: BayesNet,
    max_steps: int | None = None,
) -> dict[Hashable, float]:
    """Computes P(query | evidence) by enumerating the joint distribution.

    Args:
        query: The query variable.
        evidence: A partial assignment of the network's variables.
        network: The Bayesian network.
        max_steps: An optional bound on the number of recursive calls.

    Returns:
        A { value : probability } dictionary over the values of the query,
        in the order of `query.values`, summing to one.

    Raises:
        InvalidEvidenceError: if the query or evidence does not fit the network.
        NormalizationError: if the evidence has probability zero.
        BudgetExceededError: if more than `max_steps` recursive calls are needed.
    """
    evidence = network.check_evidence(evidence, query)
    counter = _StepCounter(max_steps)
    weights = {
        x: enumerate_all(network.variables, {**evidence, query: x}, network, counter)
        for x in query.values
    }
    logger.debug("Enumerated %s in %d steps.", query, counter.steps)
    return normalize(weights, "contradictory evidence")


def enumerate_all(
    variables: Sequence[RandomVariable],
    evidence: Assignment,
    network: BayesNet,
    counter: _StepCounter | None = None,
) -> float:
    """Sums the joint probability of evidence over the remaining variables.

    `variables` must be in topological order, so the parents of the first
    variable are already fixed by `evidence`.
    """
    if counter is not None:
        counter.tick()
    if not variables:
        return 1.0
    y, rest = variables[0], variables[1:]
    if y in evidence:
        return network.probability(y, evidence[y], evidence) * enumerate_all(rest, evidence, network, counter)
    return sum(
        network.probability(y, v, evidence) * enumerate_all(rest, {**evidence, y: v}, network, counter)
        for v in y.values
    )
