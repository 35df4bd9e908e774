"""Approximate inference by sampling from the joint distribution.

`prior_sample` draws one complete assignment of a network by sampling each
variable, in declared order, from its distribution given the values already
drawn for its parents. `rejection_sampling` estimates a posterior by drawing
many such samples and keeping only those that agree with the evidence.

All randomness comes from a `numpy.random.Generator` passed in by the caller
(or built from a seed), so results are reproducible.
"""
import collections
import concurrent.futures
import logging
from collections.abc import Hashable, Mapping

import numpy as np
import pandas as pd

from .assignments import Assignment, is_consistent
from .distribution import normalize
from .network import BayesNet
from .variable import RandomVariable

logger = logging.getLogger(__name__)

# Acceptance rates below this are logged as a warning.
LOW_ACCEPTANCE = 0.01


def random_sample(distribution: Mapping[Hashable, float], rng) -> Hashable:
    """Draws one value from a discrete distribution.

    Cumulative breakpoints are built over the items of `distribution` in
    order, and the first value whose breakpoint exceeds a uniform draw from
    [0, 1) is returned. If rounding leaves no breakpoint above the draw, the
    last value is returned.

    Args:
      distribution: a { value : probability } mapping.
      rng: any object with a `random()` method returning a float in [0, 1).
    """
    values = list(distribution.keys())
    breakpoints = np.cumsum(list(distribution.values()))
    draw = rng.random()
    for value, breakpoint in zip(values, breakpoints):
        if draw < breakpoint:
            return value
    return values[-1]


def prior_sample(network: BayesNet, rng=None) -> dict[RandomVariable, Hashable]:
    """Draws one complete assignment from the joint distribution of network.

    Args:
      network: the Bayesian network.
      rng: a seed or `numpy.random.Generator`.
    """
    rng = np.random.default_rng(rng)
    event = {}
    for x in network.variables:
        event[x] = random_sample(network.distribution(x, event), rng)
    return event


def prior_samples(network: BayesNet, n: int, rng=None) -> pd.DataFrame:
    """Draws n independent samples, one row each, with a column per variable name."""
    rng = np.random.default_rng(rng)
    columns = [var.name for var in network.variables]
    rows = []
    for _ in range(n):
        event = prior_sample(network, rng)
        rows.append([event[var] for var in network.variables])
    return pd.DataFrame(rows, columns=columns)


def _tally(
    query: RandomVariable, evidence: Assignment, network: BayesNet, n: int, rng
) -> collections.Counter:
    """Counts the query values of the samples consistent with evidence."""
    rng = np.random.default_rng(rng)
    counts = collections.Counter()
    for _ in range(n):
        event = prior_sample(network, rng)
        if is_consistent(event, evidence):
            counts[event[query]] += 1
    return counts


def rejection_sampling(
    query: RandomVariable,
    evidence: Assignment,
    network: BayesNet,
    n: int,
    rng=None,
    workers: int = 1,
) -> dict[Hashable, float]:
    """Estimates P(query | evidence) by rejection sampling.

    Args:
        query: The query variable.
        evidence: A partial assignment of the network's variables.
        network: The Bayesian network.
        n: The number of samples to draw.
        rng: A seed or `numpy.random.Generator`.
        workers: The number of threads drawing samples. With more than one,
            the samples are split into chunks, each drawn from its own
            generator spawned from `rng`; the counts are merged once every
            chunk is done, so the result only depends on `rng` and `workers`.

    Returns:
        A { value : probability } dictionary over the values of the query.

    Raises:
        InvalidEvidenceError: if the query or evidence does not fit the network.
        NormalizationError: if no sample is consistent with the evidence.
    """
    if n < 0:
        raise ValueError("n must be non-negative.")
    if workers < 1:
        raise ValueError("workers must be positive.")
    evidence = network.check_evidence(evidence, query)
    rng = np.random.default_rng(rng)

    if workers == 1:
        counts = _tally(query, evidence, network, n, rng)
    else:
        sizes = [len(chunk) for chunk in np.array_split(np.arange(n), workers)]
        counts = collections.Counter()
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_tally, query, evidence, network, size, child)
                for size, child in zip(sizes, rng.spawn(workers))
            ]
            for future in concurrent.futures.as_completed(futures):
                counts.update(future.result())

    accepted = sum(counts.values())
    logger.info("Rejection sampling kept %d of %d samples.", accepted, n)
    if 0 < accepted < LOW_ACCEPTANCE * n:
        logger.warning(
            "Only %d of %d samples are consistent with the evidence; the estimate will be noisy.",
            accepted, n,
        )
    return normalize({x: counts[x] for x in query.values}, "no samples survived")
