"""Extraction helpers for llmdocs."""

from .language_detector import LanguageDetector, count_code_languages, infer_language

__all__ = [
    "LanguageDetector",
    "infer_language",
    "count_code_languages",
]
