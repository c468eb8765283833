"""Error kinds raised by the matching engine.

Scoring and clustering degrade to empty results instead of raising; only
lookups by an explicit identifier raise `NotFound`.
"""


class MatchingError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(MatchingError):
    status_code = 404


class InvalidInput(MatchingError):
    status_code = 400


class UpstreamUnavailable(MatchingError):
    """A store or enrichment collaborator failed."""
    status_code = 503
