"""Main entry point for the bninfer package.

This module exposes the core classes and the four inference entry points of
the bninfer library: exact inference by enumeration and by variable
elimination, and approximate inference by prior and rejection sampling over
discrete Bayesian networks.
"""
from . import elimination, enumeration, networks, ordering, sampling
from .assignments import all_assignments
from .domain import Domain
from .elimination import variable_elimination_ask
from .enumeration import enumeration_ask
from .errors import (
    BudgetExceededError,
    EliminationError,
    InferenceError,
    InvalidEvidenceError,
    InvalidNetworkError,
    NormalizationError,
)
from .factor import Factor
from .network import CPT, BayesNet
from .sampling import prior_sample, rejection_sampling
from .variable import RandomVariable

__all__ = [
    'RandomVariable',
    'Domain',
    'Factor',
    'CPT',
    'BayesNet',
    'all_assignments',
    'enumeration_ask',
    'variable_elimination_ask',
    'prior_sample',
    'rejection_sampling',
    'InferenceError',
    'InvalidNetworkError',
    'InvalidEvidenceError',
    'NormalizationError',
    'EliminationError',
    'BudgetExceededError',
    'elimination',
    'enumeration',
    'networks',
    'ordering',
    'sampling',
]
