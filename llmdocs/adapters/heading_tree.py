"""
Heading-tree adapter.

Converts parsed Markdown/DocC documents into the document tree.

Mapping:
- document      -> SECTION (single file) or ROOT (directory merge)
- H2 section    -> GROUP when treat_h2_as_group, else SECTION
- H3 section    -> ENTRY
- H4+ section   -> DETAIL
- H1 / other    -> SECTION
- code          -> CODE  (language = fence tag or "text")
- prose         -> PROSE
- blockquote    -> PROSE with style=blockquote
- image         -> DATA  with type=image
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional
import logging
import os

from llmdocs.adapters.base import FormatAdapter, PathLike, get_extension
from llmdocs.errors import MalformedSourceError
from llmdocs.parsers.markdown import parse_markdown_file
from llmdocs.schemas import (
    BlockKind,
    ContentBlock,
    DocumentNode,
    NodeKind,
    ParsedContent,
    ParsedDocument,
    ParsedSection,
    create_block,
    create_node,
)
from llmdocs.utils import FileScanner

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = {'md', 'markdown'}


class HeadingTreeAdapter(FormatAdapter):
    """Adapter for Markdown files and directories of Markdown (DocC catalogs)."""

    format = "markdown"
    name = "Heading Tree"

    def __init__(self, max_workers: Optional[int] = None):
        """
        Initialize heading-tree adapter.

        Args:
            max_workers: Thread pool size for directory parsing (default: CPU count)
        """
        self.max_workers = max_workers or os.cpu_count() or 4

    def detect(self, source_path: PathLike) -> bool:
        path = Path(source_path)

        if get_extension(path) in MARKDOWN_EXTENSIONS:
            return path.is_file()

        if path.is_dir():
            return FileScanner(path).has_files()

        return False

    def parse(
        self,
        source_path: PathLike,
        treat_h2_as_group: bool = True,
        **options
    ) -> DocumentNode:
        """
        Parse a Markdown file or directory into a document tree.

        A single file becomes a SECTION node whose H2 headings are GROUPs
        (unless treat_h2_as_group is False). A directory is merged into one
        ROOT with one SECTION per file, in sorted path order.

        Raises:
            FileNotFoundError: If the path does not exist
            MalformedSourceError: If a directory holds no Markdown files
        """
        path = Path(source_path)

        if path.is_dir():
            return self._parse_directory(path)

        if not path.exists():
            raise FileNotFoundError(f"Source not found: {path}")

        document = parse_markdown_file(path)
        return self.convert(document, treat_h2_as_group=treat_h2_as_group)

    def _parse_directory(self, directory: Path) -> DocumentNode:
        files = FileScanner(directory).scan()
        if not files:
            raise MalformedSourceError(str(directory), "no markdown files found")

        logger.info(f"Parsing {len(files)} markdown files from {directory}")

        # map() yields results in input order whatever the completion order
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(files))) as executor:
            documents = list(executor.map(parse_markdown_file, files))

        return self.merge_many(
            documents,
            directory.resolve().name or "Documentation",
            base_path=directory,
        )

    def convert(
        self,
        document: ParsedDocument,
        treat_h2_as_group: bool = False,
        kind: NodeKind = NodeKind.SECTION,
        identifier: Optional[str] = None
    ) -> DocumentNode:
        """
        Convert one parsed document to a node.

        Args:
            document: Parsed Markdown document
            treat_h2_as_group: Map H2 headings to GROUP instead of SECTION
            kind: Kind of the document node itself
            identifier: Node identifier (defaults to one derived from the file name)

        Returns:
            DocumentNode keyed by the file name
        """
        tags = {'format': self.format, 'path': document.path}
        if document.metadata:
            tags['frontmatter'] = dict(document.metadata)

        return create_node(
            kind,
            identifier or path_identifier(document.path),
            document.title,
            children=[self.convert_section(s, treat_h2_as_group) for s in document.sections],
            tags=tags,
        )

    def convert_section(self, section: ParsedSection, treat_h2_as_group: bool) -> DocumentNode:
        """Convert a section and its sub-sections recursively."""
        return create_node(
            section_kind(section.level, treat_h2_as_group),
            section.id,
            section.title,
            blocks=[convert_content(c) for c in section.content if c.content.strip()],
            children=[self.convert_section(child, treat_h2_as_group) for child in section.children],
            tags={'level': section.level},
        )

    def merge_many(
        self,
        documents: List[ParsedDocument],
        title: str,
        base_path: Optional[PathLike] = None
    ) -> DocumentNode:
        """
        Combine several documents under one synthetic ROOT.

        Each document becomes a SECTION child, in input order, with H2
        headings kept as plain sections. When base_path is given, child
        identifiers come from the file path relative to it, so files with
        the same name in different folders stay distinct.
        """
        children = [
            self.convert(
                doc,
                treat_h2_as_group=False,
                identifier=path_identifier(doc.path, base_path),
            )
            for doc in documents
        ]
        return create_node(
            NodeKind.ROOT,
            'root',
            title,
            children=children,
            tags={'format': self.format, 'count': len(documents)},
        )


def section_kind(level: int, treat_h2_as_group: bool) -> NodeKind:
    """Node kind for a heading level."""
    if level == 2:
        return NodeKind.GROUP if treat_h2_as_group else NodeKind.SECTION
    if level == 3:
        return NodeKind.ENTRY
    if level >= 4:
        return NodeKind.DETAIL
    return NodeKind.SECTION


def convert_content(content: ParsedContent) -> ContentBlock:
    """Convert one parsed content element to a block."""
    if content.type == 'code':
        return create_block(BlockKind.CODE, content.content, language=content.language or 'text')

    if content.type == 'blockquote':
        return create_block(BlockKind.PROSE, content.content, annotations={'style': 'blockquote'})

    if content.type == 'image':
        return create_block(BlockKind.DATA, content.content, annotations={'type': 'image'})

    return create_block(BlockKind.PROSE, content.content)


def path_identifier(path: str, base_path: Optional[PathLike] = None) -> str:
    """
    Identifier derived from a file path.

    The Markdown suffix is dropped, the name lowercased and whitespace runs
    replaced by "-". With base_path, the folders below it are kept and
    joined with "/".

    Example:
        >>> path_identifier("docs/The Basics.md")
        'the-basics'
        >>> path_identifier("Book/Guide/index.md", "Book")
        'guide/index'
    """
    file_path = Path(path)
    parts = [file_path.name]
    if base_path is not None:
        parts = list(file_path.relative_to(base_path).parts)

    name = parts[-1]
    for suffix in ('.markdown', '.md'):
        if name.endswith(suffix):
            name = name[:-len(suffix)]
            break
    parts[-1] = name

    return '/'.join('-'.join(part.lower().split()) for part in parts)
