from __future__ import annotations


class CareerGraphError(Exception):
    """Base class for errors surfaced by career-graph components."""


class ValidationError(CareerGraphError):
    """Required input missing or malformed."""


class NotFoundError(CareerGraphError):
    """A referenced entity does not exist in the graph."""


class UpstreamError(CareerGraphError):
    """The graph store or the conversational engine failed.

    The message is safe to log; callers should not show it to end users.
    """
