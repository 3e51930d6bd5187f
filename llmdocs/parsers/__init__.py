"""Source parsers: raw files -> source records consumed by the adapters."""

from .docc import clean_docc_content
from .markdown import MarkdownParser, parse_markdown_file, slugify
from .spec_yaml import SpecParser, parse_spec_file, unwrap_code_fence

__all__ = [
    "SpecParser",
    "parse_spec_file",
    "unwrap_code_fence",
    "MarkdownParser",
    "parse_markdown_file",
    "slugify",
    "clean_docc_content",
]
