"""Exception types raised by the inference engines.

Malformed constructor arguments raise plain `ValueError`s at the point of
construction. Everything that can go wrong while answering a query raises a
subclass of `InferenceError`, so callers can tell a broken network apart from
contradictory evidence or an exhausted budget.
"""


class InferenceError(Exception):
    """Base class for all errors raised while building or querying a network."""


class InvalidNetworkError(InferenceError, ValueError):
    """The network is malformed (missing CPT entry, unknown parent, cycle)."""


class InvalidEvidenceError(InvalidNetworkError):
    """The query, evidence or an assignment does not fit the network."""


class NormalizationError(InferenceError, ArithmeticError):
    """The unnormalized distribution has zero (or non-finite) total mass."""


class EliminationError(InferenceError, RuntimeError):
    """Variable elimination finished with a factor not over the query alone.

    Attributes:
        variables: the variables of the offending final factor.
    """

    def __init__(self, message: str, variables=()):
        super().__init__(message)
        self.variables = tuple(variables)


class BudgetExceededError(InferenceError, RuntimeError):
    """An engine exceeded the step budget it was given."""
