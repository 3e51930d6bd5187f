"""
DocC markup cleaning.

Apple's DocC flavour of Markdown adds directives and cross-reference tags
that carry no prose. They are removed with a single text-to-text pass
before the Markdown is tokenized:

- @Metadata { ... } blocks: deleted
- @Options(...) { ... } blocks: deleted
- <doc:Reference> tags: replaced by their inner text
- <!-- ... --> comments: deleted
- 3+ consecutive newlines: collapsed to one blank line
"""

import re

METADATA_BLOCK_PATTERN = re.compile(r'@Metadata\s*\{[^}]*\}', re.DOTALL)
OPTIONS_BLOCK_PATTERN = re.compile(r'@Options\([^)]*\)\s*\{[^}]*\}', re.DOTALL)
DOC_REFERENCE_PATTERN = re.compile(r'<doc:([^>]+)>')
HTML_COMMENT_PATTERN = re.compile(r'<!--[\s\S]*?-->')
BLANK_RUN_PATTERN = re.compile(r'\n{3,}')


def clean_docc_content(content: str) -> str:
    """
    Strip DocC directives, cross-reference tags and comments.

    Args:
        content: Raw Markdown/DocC text

    Returns:
        Cleaned text, trimmed
    """
    cleaned = METADATA_BLOCK_PATTERN.sub('', content)
    cleaned = OPTIONS_BLOCK_PATTERN.sub('', cleaned)
    cleaned = DOC_REFERENCE_PATTERN.sub(r'\1', cleaned)
    cleaned = HTML_COMMENT_PATTERN.sub('', cleaned)
    cleaned = BLANK_RUN_PATTERN.sub('\n\n', cleaned)
    return cleaned.strip()
