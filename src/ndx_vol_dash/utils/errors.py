"""Custom exceptions."""


class DataRetrievalError(Exception):
    """Raised when a provider fails to return usable data."""


class FetchFailed(DataRetrievalError):
    """Raised when a fetch attempt fails in transport or returns a malformed payload."""


class EmptySeries(ValueError):
    """Raised when metrics are requested for a series with no observations."""


class MalformedObservation(ValueError):
    """Raised for a row with non-finite prices or a high below its low."""
