"""
Markdown parser.

Parses Markdown/DocC files into a ParsedDocument: the document title, its
frontmatter and a tree of sections rebuilt from the flat heading stream.

Supports:
- ATX and setext headings (H1-H6)
- Fenced and indented code blocks with language tags
- Blockquotes, image-only paragraphs
- Lists, tables and raw HTML (kept verbatim as prose)
- YAML frontmatter
- DocC directives (stripped before tokenizing)

Tokenizing is delegated to markdown-it-py; this module only walks the
top-level block tokens.
"""

import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import logging

import yaml
from markdown_it import MarkdownIt
from markdown_it.token import Token

from llmdocs.parsers.docc import clean_docc_content
from llmdocs.schemas import ParsedContent, ParsedDocument, ParsedSection

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r'\A---\n(.*?)\n---\n?', re.DOTALL)
BLOCKQUOTE_MARKER_PATTERN = re.compile(r'^ {0,3}> ?')

# Container tokens whose whole subtree is consumed at once
CONTAINER_CLOSE = {
    'blockquote_open': 'blockquote_close',
    'bullet_list_open': 'bullet_list_close',
    'ordered_list_open': 'ordered_list_close',
    'table_open': 'table_close',
    'paragraph_open': 'paragraph_close',
    'heading_open': 'heading_close',
}


def slugify(text: str) -> str:
    """
    Convert heading text to a slug id.

    Example:
        >>> slugify("Basic Operators & Terms")
        'basic-operators-terms'
    """
    slug = text.lower()
    slug = re.sub(r'[^\w\s-]', '', slug)
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')


class MarkdownParser:
    """
    Parse a Markdown file into a ParsedDocument.

    Heading nesting is rebuilt with a stack of open sections: a heading of
    level L pops every open section of level >= L, becomes a child of the
    new stack top (or a top-level section when the stack is empty) and is
    pushed. Content between headings lands in the deepest open section.
    """

    def __init__(self, file_path: Path):
        """
        Initialize Markdown parser.

        Args:
            file_path: Path to the Markdown file
        """
        self.file_path = Path(file_path)
        self._md = MarkdownIt("commonmark").enable("table")

    def parse(self) -> ParsedDocument:
        """
        Read and parse the file.

        Returns:
            ParsedDocument with rebuilt section tree
        """
        content = self.file_path.read_text(encoding='utf-8')
        return self.parse_text(content)

    def parse_text(self, content: str) -> ParsedDocument:
        """Parse Markdown text (see parse)."""
        body, metadata = self._split_frontmatter(content)
        cleaned = clean_docc_content(body)
        lines = cleaned.split('\n')

        tokens = self._md.parse(cleaned)
        sections = self._build_sections(tokens, lines)

        document = ParsedDocument(
            path=str(self.file_path),
            title=self._extract_title(sections),
            sections=sections,
            metadata=metadata,
        )

        logger.debug(f"Parsed {self.file_path.name}: '{document.title}', {len(sections)} top-level sections")
        return document

    def _split_frontmatter(self, content: str) -> Tuple[str, Dict[str, str]]:
        match = FRONTMATTER_PATTERN.match(content)
        if not match:
            return content, {}

        try:
            raw = yaml.safe_load(match.group(1))
        except yaml.YAMLError as e:
            logger.warning(f"Ignoring unreadable frontmatter in {self.file_path}: {e}")
            raw = None

        metadata = {}
        if isinstance(raw, dict):
            metadata = {str(k): '' if v is None else str(v) for k, v in raw.items()}

        return content[match.end():], metadata

    def _extract_title(self, sections: List[ParsedSection]) -> str:
        # First H1 anywhere in document order, else the filename
        stack = list(reversed(sections))
        while stack:
            section = stack.pop()
            if section.level == 1:
                return section.title
            stack.extend(reversed(section.children))

        name = self.file_path.name
        for suffix in ('.markdown', '.md'):
            if name.endswith(suffix):
                return name[:-len(suffix)]
        return name

    def _build_sections(self, tokens: List[Token], lines: List[str]) -> List[ParsedSection]:
        root_sections: List[ParsedSection] = []
        stack: List[ParsedSection] = []

        i = 0
        while i < len(tokens):
            token = tokens[i]
            end = self._block_end(tokens, i)

            if token.type == 'heading_open':
                level = int(token.tag[1:])
                title = tokens[i + 1].content.strip() if i + 1 < end else ''
                section = ParsedSection(level=level, title=title, id=slugify(title))

                while stack and stack[-1].level >= level:
                    stack.pop()

                if stack:
                    stack[-1].children.append(section)
                else:
                    root_sections.append(section)

                stack.append(section)
            else:
                content = self._block_to_content(tokens[i:end + 1], lines)
                if content is not None:
                    if stack:
                        stack[-1].content.append(content)
                    else:
                        logger.debug(f"Dropping {content.type} block before first heading in {self.file_path.name}")

            i = end + 1

        return root_sections

    def _block_end(self, tokens: List[Token], start: int) -> int:
        """Index of the token closing the top-level block starting at `start`."""
        close_type = CONTAINER_CLOSE.get(tokens[start].type)
        if close_type is None:
            return start

        level = tokens[start].level
        for j in range(start + 1, len(tokens)):
            if tokens[j].type == close_type and tokens[j].level == level:
                return j
        return len(tokens) - 1

    def _block_to_content(self, block: List[Token], lines: List[str]) -> Optional[ParsedContent]:
        """
        Convert one top-level block to a content element.

        Returns None for whitespace-only blocks and horizontal rules.
        """
        token = block[0]

        if token.type == 'fence':
            info = token.info.strip()
            language = info.split()[0] if info else 'text'
            return ParsedContent(type='code', content=_strip_newline(token.content), language=language)

        if token.type == 'code_block':
            return ParsedContent(type='code', content=_strip_newline(token.content), language='text')

        if token.type == 'paragraph_open':
            inline = block[1]
            image_src = _image_only_source(inline)
            if image_src is not None:
                return ParsedContent(type='image', content=image_src)
            return _prose(inline.content)

        if token.type == 'blockquote_open':
            # Whole inner source, so fences and nested markup survive
            text = _unquote(_source_slice(token, lines)).strip()
            if not text:
                return None
            return ParsedContent(type='blockquote', content=text)

        if token.type == 'hr':
            return None

        if token.type == 'html_block':
            return _prose(token.content)

        return _prose(_source_slice(token, lines))


def _strip_newline(text: str) -> str:
    return text[:-1] if text.endswith('\n') else text


def _prose(text: str) -> Optional[ParsedContent]:
    text = text.strip()
    if not text:
        return None
    return ParsedContent(type='prose', content=text)


def _source_slice(token: Token, lines: List[str]) -> str:
    if not token.map:
        return token.content
    start, end = token.map
    return '\n'.join(lines[start:end])


def _unquote(text: str) -> str:
    """Strip one level of '>' markers (lazy continuation lines have none)."""
    return '\n'.join(BLOCKQUOTE_MARKER_PATTERN.sub('', line, count=1) for line in text.split('\n'))


def _image_only_source(inline: Token) -> Optional[str]:
    """Image src when a paragraph holds nothing but one image."""
    children = [
        child for child in (inline.children or [])
        if not (child.type in ('softbreak', 'hardbreak') or (child.type == 'text' and not child.content.strip()))
    ]
    if len(children) == 1 and children[0].type == 'image':
        return str(children[0].attrGet('src') or '')
    return None


def parse_markdown_file(file_path: Path) -> ParsedDocument:
    """Convenience function to parse one Markdown file."""
    return MarkdownParser(file_path).parse()
