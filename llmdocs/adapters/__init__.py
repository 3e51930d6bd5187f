"""Format adapters: source files -> document tree."""

from .base import FormatAdapter, ValidationResult
from .heading_tree import HeadingTreeAdapter
from .spec_list import SpecListAdapter, spec_to_document

__all__ = [
    "FormatAdapter",
    "ValidationResult",
    "SpecListAdapter",
    "HeadingTreeAdapter",
    "spec_to_document",
]
