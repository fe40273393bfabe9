"""
Exceptions raised by the Cortex Graph client.

Transient remote failures (transport errors, HTTP status errors, bad JSON)
are not wrapped: they come straight from the request provider and propagate
unchanged once the retry budget is spent.
"""


class CortexGraphError(Exception):
    """Base class for client-side errors."""


class ConfigurationError(CortexGraphError):
    """
    A required collaborator or setting is missing or invalid.

    Raised at construction time, never retried.
    """


class QueryCancelledError(CortexGraphError):
    """
    The caller cancelled the operation.

    Attributes:
        url: Request target being queried when cancellation fired
        attempt: Attempt number (1-based) that was in flight or pending
    """

    def __init__(self, url: str = None, attempt: int = None):
        self.url = url
        self.attempt = attempt

        msg = "Cortex Graph query cancelled"
        if url:
            msg += f": {url}"
        if attempt:
            msg += f" (attempt {attempt})"

        super().__init__(msg)
