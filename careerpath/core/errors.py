"""Errors raised inside job-source connectors. They never leave JobSource.search()."""


class SourceError(RuntimeError):
    """
    A job source could not produce results.

    Attributes:
        source: Source name (e.g. 'jsearch', 'adzuna')
        message: Error description
    """

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"[{source}] {message}")


class QuotaExceededError(SourceError):
    """The provider answered, but reported that the plan quota is used up."""
