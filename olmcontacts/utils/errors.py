"""Domain-specific exception types."""


class OlmContactsError(Exception):
    """Base class for every error raised by the extraction engine."""


class UserError(OlmContactsError):
    """Errors that are safe to show to the user as-is."""


class ArchiveError(UserError):
    """The archive could not be opened or is not a ZIP container."""


class EmptyArchiveError(UserError):
    """The archive holds no ``.xml`` message records."""

    def __init__(self, message: str = "No XML files found in .olm archive"):
        super().__init__(message)


class ExtractionCancelled(OlmContactsError):
    """The host cancelled the run between two records."""
