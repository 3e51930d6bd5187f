"""Output formatters for llmdocs."""

from .llms_txt_formatter import LLMsTxtFormatter, format_block, format_date, render

__all__ = ["LLMsTxtFormatter", "format_block", "format_date", "render"]
