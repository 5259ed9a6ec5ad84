"""Error taxonomy for profile acquisition and extraction."""


class ProfileAnalyzerError(Exception):
    """Base class for fatal pipeline errors."""


class AcquisitionError(ProfileAnalyzerError):
    """Raw content could not be obtained (network, auth wall, missing or corrupt file)."""

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


class InsufficientDataError(ProfileAnalyzerError):
    """Content was acquired but nothing usable could be extracted from it."""

    NOTHING_TO_READ = "nothing_to_read"
    UNINTERPRETABLE = "uninterpretable"

    def __init__(self, message: str, reason: str = UNINTERPRETABLE, source: str = ""):
        super().__init__(message)
        self.reason = reason
        self.source = source


class ExtractionWarning(UserWarning):
    """A single field or entry extractor failed and fell back to an empty value.

    Logged and recorded in the extraction metadata, never raised out of the pipeline.
    """
