"""Utility functions for llmdocs."""

from .file_scanner import FileScanner, scan_markdown_files

__all__ = ["FileScanner", "scan_markdown_files"]
