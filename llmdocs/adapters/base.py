"""
Format adapter interface.

Every supported source format is one FormatAdapter subclass: a detection
probe that answers "can I read this path?" and a parse step that turns the
path into a DocumentNode tree. The detector dispatches over registered
adapters and never needs to know which formats exist.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union
import logging

from pydantic import BaseModel, Field

from llmdocs.errors import LLMDocsError
from llmdocs.schemas import DocumentNode

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ValidationResult(BaseModel):
    """Outcome of a dry-run parse."""
    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class FormatAdapter(ABC):
    """
    Base class for source format adapters.

    Subclasses set ``format`` (the name used by --format and by the
    detector) and ``name``, and implement detect/parse. Adapters are
    stateless and may be shared.
    """

    format: str = ""
    name: str = ""

    @abstractmethod
    def detect(self, source_path: PathLike) -> bool:
        """
        Cheap probe: extension check plus a bounded content sniff.

        Must never raise for missing or unreadable paths; return False.
        """

    @abstractmethod
    def parse(self, source_path: PathLike, **options) -> DocumentNode:
        """Parse the source into a document tree."""

    def validate(self, source_path: PathLike) -> ValidationResult:
        """
        Check that the source parses.

        Args:
            source_path: File or directory to check

        Returns:
            ValidationResult with parse errors, if any
        """
        path = Path(source_path)
        if not path.exists():
            return ValidationResult(valid=False, errors=[f"Source file not found: {path}"])

        try:
            self.parse(path)
        except (LLMDocsError, OSError) as e:
            logger.debug(f"{self.name} validation failed for {path}: {e}")
            return ValidationResult(valid=False, errors=[str(e)])

        return ValidationResult(valid=True)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(format={self.format!r})"


def get_extension(source_path: PathLike) -> str:
    """Lower-cased extension without the dot ('' when absent)."""
    return Path(source_path).suffix.lower().lstrip('.')


def read_head(source_path: PathLike, chars: int = 200) -> str:
    """
    Read the first characters of a text file for content sniffing.

    Returns an empty string if the file cannot be read or decoded.
    """
    try:
        with open(source_path, 'r', encoding='utf-8') as f:
            return f.read(chars)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot sniff {source_path}: {e}")
        return ""
