"""
Error taxonomy for llmdocs.

Every error raised by the pipeline itself derives from LLMDocsError and from
ValueError, so callers that only expect ValueError keep working. I/O errors
(FileNotFoundError, PermissionError, OSError) are never wrapped: they
propagate unchanged from the file system.
"""

from typing import List


class LLMDocsError(Exception):
    """Base class for llmdocs errors."""


class FormatDetectionError(LLMDocsError, ValueError):
    """No registered format recognised the source and no hint was given."""

    def __init__(self, source_path: str, supported_formats: List[str]):
        self.source_path = source_path
        self.supported_formats = list(supported_formats)
        super().__init__(
            f"Unable to detect format for: {source_path}\n"
            f"Supported formats: {', '.join(self.supported_formats)}\n"
            f"Try specifying --format explicitly"
        )


class UnsupportedFormatError(LLMDocsError, ValueError):
    """A format was requested for which no adapter is registered."""

    def __init__(self, format_name: str, supported_formats: List[str]):
        self.format_name = format_name
        self.supported_formats = list(supported_formats)
        super().__init__(
            f"Unsupported format: {format_name} "
            f"(supported: {', '.join(self.supported_formats)})"
        )


class MalformedSourceError(LLMDocsError, ValueError):
    """The source exists but lacks something the conversion requires."""

    def __init__(self, source_path: str, requirement: str):
        self.source_path = source_path
        self.requirement = requirement
        super().__init__(f"Malformed source {source_path}: {requirement}")


class ConfigError(LLMDocsError, ValueError):
    """Invalid configuration (e.g. a category map with the wrong shape)."""
