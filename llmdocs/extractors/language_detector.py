"""
Language detection for documentation code blocks.

Two jobs live here:
- Inferring the language of an untagged snippet from substring markers
  (used by the specification-list adapter, whose examples carry no tag)
- Normalising fence tags to canonical names for per-language statistics

Inference is a best-effort heuristic. A wrong guess only mislabels the
fenced block in the output; it never changes what gets rendered.
"""

from collections import Counter
from typing import Dict, List, Optional, Tuple
import logging

from llmdocs.schemas import BlockKind, DocumentNode
from llmdocs.tree import walk

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "code"


class LanguageDetector:
    """
    Guess and normalise programming languages of code blocks.

    Marker rules are checked in order; the first language with a matching
    rule wins. A rule is a tuple of substrings that must all be present.
    """

    # (language, rules) - any rule matching selects the language
    LANGUAGE_MARKERS: List[Tuple[str, List[Tuple[str, ...]]]] = [
        ("javascript", [("const ",), ("let ",), ("async ",)]),
        ("swift", [("func ",), ("let ", ":")]),
        ("python", [("def ",), ("import ", "from ")]),
        ("kotlin", [("public class",), ("private val",)]),
        ("csharp", [("class ", "{"), ("using ",)]),
        ("dart", [("void ",), ("Future<",)]),
    ]

    # Language tag mappings (variations -> canonical name)
    LANGUAGE_MAPPINGS = {
        # Swift
        'swift': 'swift',

        # Python
        'python': 'python',
        'py': 'python',
        'python3': 'python',
        'py3': 'python',

        # TypeScript
        'typescript': 'typescript',
        'ts': 'typescript',

        # JavaScript
        'javascript': 'javascript',
        'js': 'javascript',

        # Kotlin
        'kotlin': 'kotlin',
        'kt': 'kotlin',

        # C#
        'csharp': 'csharp',
        'cs': 'csharp',
        'c#': 'csharp',

        # Dart
        'dart': 'dart',

        # Go
        'go': 'go',
        'golang': 'go',

        # Rust
        'rust': 'rust',
        'rs': 'rust',

        # Shell/Bash
        'bash': 'bash',
        'sh': 'bash',
        'shell': 'bash',
        'console': 'bash',

        # Data
        'sql': 'sql',
        'yaml': 'yaml',
        'yml': 'yaml',
        'json': 'json',
    }

    def infer(self, code: str) -> str:
        """
        Infer the language of a code snippet.

        Args:
            code: Snippet text

        Returns:
            Language tag, or "code" when no marker matches
        """
        for language, rules in self.LANGUAGE_MARKERS:
            if any(all(marker in code for marker in rule) for rule in rules):
                return language
        return DEFAULT_LANGUAGE

    def normalize_tag(self, tag: Optional[str]) -> Optional[str]:
        """
        Normalise a fence tag to canonical form.

        Args:
            tag: Raw language tag (e.g. "py", "TS")

        Returns:
            Canonical language name, or None if unknown
        """
        if not tag:
            return None
        return self.LANGUAGE_MAPPINGS.get(tag.strip().lower())

    def count_languages(self, root: DocumentNode) -> Dict[str, int]:
        """
        Count CODE blocks per language across a document tree.

        Unknown tags are counted under their raw value so nothing is hidden.

        Args:
            root: Document tree

        Returns:
            Mapping of language -> number of code blocks, most common first
        """
        counts = Counter()

        for node, _ in walk(root):
            for block in node.blocks:
                if block.kind != BlockKind.CODE:
                    continue
                language = block.language or "text"
                counts[self.normalize_tag(language) or language] += 1

        if counts:
            logger.debug("Code blocks by language:")
            for language, count in counts.most_common():
                logger.debug(f"  {language}: {count} blocks")

        return dict(counts.most_common())


_detector = LanguageDetector()


def infer_language(code: str) -> str:
    """
    Convenience function to infer a snippet's language.

    Example:
        >>> infer_language("func greet() {}")
        'swift'
        >>> infer_language("SELECT 1")
        'code'
    """
    return _detector.infer(code)


def count_code_languages(root: DocumentNode) -> Dict[str, int]:
    """Convenience function for LanguageDetector.count_languages."""
    return _detector.count_languages(root)
