"""
Error handling for edge-id assignment.

This module defines the exception classes raised while classifying a
control flow graph, searching hash parameters and building the fallback
tables. InvalidGraphInput and CapacityExceeded abort the run for the
current compilation unit; SearchBudgetExhausted is caught by the parameter
search and only degrades the result.
"""


class EdgeHashError(Exception):
    """Base class for all edgecov errors."""
    pass


class InvalidGraphInput(EdgeHashError):
    """
    Exception raised for a malformed control flow graph.

    Raised when an edge or predecessor list references an unknown block,
    when a block identifier is unusable, or when injected keys do not
    match the graph.
    """
    pass


class CapacityExceeded(EdgeHashError):
    """
    Exception raised when the target array runs out of free slots.

    Attributes:
        required: Number of slots the graph needs (or the slot index that
            could not be satisfied).
        available: Size of the target array.
    """

    def __init__(self, required, available, msg=None):
        if msg is None:
            msg = "%d slots required but the coverage map only has %d" % (
                required,
                available,
            )
        super().__init__(msg)
        self.required = required
        self.available = available


class SearchBudgetExhausted(EdgeHashError):
    """
    Exception raised when the parameter search hits its candidate budget.

    Not fatal: the search catches it and hands the best partition found so
    far to the fallback table builder.
    """

    def __init__(self, limit):
        super().__init__("parameter search budget of %d candidates exhausted" % limit)
        self.limit = limit


class InternalError(EdgeHashError):
    """
    Exception raised when a finished assignment fails verification.

    This indicates a bug in edgecov rather than a problem with the input
    graph.
    """
    pass
