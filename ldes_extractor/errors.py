# -*- coding: utf-8 -*-
"""Exception types raised by the extractor."""


class ExtractorError(Exception):
    """Base class for all extractor errors."""
    pass


class ConfigurationError(ExtractorError, ValueError):
    """Extraction cannot be configured (e.g. no versionOfPath or timestampPath)."""
    pass


class ClassificationError(ExtractorError):
    """A member could not be classified against the extraction window.

    Raised per item; the streaming operator catches it and drops the member.
    """

    def __init__(self, message: str, member_id=None):
        super().__init__(message)
        self.member_id = member_id


class MetadataNotReadyError(ExtractorError, RuntimeError):
    """Metadata was requested before an extraction run completed."""
    pass
