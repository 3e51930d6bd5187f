"""
llms.txt formatter.

Renders a document tree into flat, hierarchically numbered text files for
LLM context windows: one full document plus one file per top-level GROUP.

Structure of a full file:

<SYSTEM>This is the complete developer documentation for {title}.</SYSTEM>

<!-- Format: openref, Generated: October 19, 2026 -->

# {title}

## 1. {first child}

### 1.1. {its first child}
...

Numbering is positional and recomputed on every render; node identifiers
never appear in headings.
"""

from datetime import date
from pathlib import Path
from typing import List, Sequence
import logging

from llmdocs.schemas import BlockKind, ContentBlock, DocumentNode, RenderOptions
from llmdocs.tree import top_level_groups

logger = logging.getLogger(__name__)

NEWLINE = '\n'
DOUBLE_NEWLINE = '\n\n'

MAX_HEADING_LEVEL = 4
STREAM_CHUNK_SIZE = 64 * 1024


class LLMsTxtFormatter:
    """
    Generate llms.txt files from a document tree.

    The node passed in is always treated as the document root: it is never
    headed or numbered, only its descendants are. Output:
    - <prefix>-full-llms.txt with the whole tree
    - <prefix>-<group id>-llms.txt for every direct GROUP child of the root
    """

    def __init__(self, root: DocumentNode, options: RenderOptions):
        """
        Initialize formatter.

        Args:
            root: Document tree to render
            options: Output directory, prefix, title, prompt, metadata flag
        """
        self.root = root
        self.options = options

    @property
    def title(self) -> str:
        return self.options.title or self.root.title

    def generate_all(self) -> List[Path]:
        """
        Write the full file and every group file.

        Returns:
            Written paths, full file first, then groups in root child order
        """
        output_dir = Path(self.options.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        written = [self._write_full(output_dir)]

        for group in top_level_groups(self.root):
            path = output_dir / f"{self.options.filename_prefix}-{safe_file_part(group.identifier)}-llms.txt"
            path.write_text(self.render_group(group), encoding='utf-8')
            logger.info(f"Wrote {path}")
            written.append(path)

        return written

    def render_full(self) -> str:
        """Render the full document (header + every descendant of the root)."""
        parts = [self._full_header()]
        parts.extend(self._format_children(self.root.children, []))
        return ''.join(parts)

    def render_group(self, group: DocumentNode) -> str:
        """
        Render one group file.

        The group's children are numbered from 1; the group itself is
        represented by the header only.
        """
        parts = [self._group_header(group)]
        parts.extend(self._format_children(group.children, []))
        return ''.join(parts)

    def _write_full(self, output_dir: Path) -> Path:
        path = output_dir / f"{self.options.filename_prefix}-full-llms.txt"
        content = self.render_full()

        if len(content) > self.options.stream_threshold:
            logger.debug(f"Streaming {len(content)} characters to {path}")
            _write_chunked(path, content)
        else:
            path.write_text(content, encoding='utf-8')

        logger.info(f"Wrote {path}")
        return path

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def _full_header(self) -> str:
        system_prompt = (
            self.options.system_prompt
            or f"This is the complete developer documentation for {self.title}."
        )
        parts = [f"<SYSTEM>{system_prompt}</SYSTEM>", DOUBLE_NEWLINE]

        if self.options.include_metadata:
            format_name = self.root.tags.get('format') or 'unknown'
            parts.extend([f"<!-- Format: {format_name}, Generated: {format_date(date.today())} -->", DOUBLE_NEWLINE])

        parts.extend([f"# {self.title}", DOUBLE_NEWLINE])
        return ''.join(parts)

    def _group_header(self, group: DocumentNode) -> str:
        parts = [
            f"<SYSTEM>This is the developer documentation for {self.title} - {group.title}.</SYSTEM>",
            DOUBLE_NEWLINE,
            f"# {self.title} {group.title} Documentation",
            DOUBLE_NEWLINE,
        ]
        if group.summary:
            parts.extend([group.summary, DOUBLE_NEWLINE])
        return ''.join(parts)

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------

    def _format_children(self, children: Sequence[DocumentNode], numbers: List[int]) -> List[str]:
        parts = []
        for position, child in enumerate(children, 1):
            parts.extend(self._format_node(child, numbers + [position]))
        return parts

    def _format_node(self, node: DocumentNode, numbers: List[int]) -> List[str]:
        heading = '#' * min(len(numbers) + 1, MAX_HEADING_LEVEL)
        number_path = '.'.join(str(n) for n in numbers)

        parts = [f"{heading} {number_path}. {node.title}", DOUBLE_NEWLINE]

        if node.summary:
            parts.extend([node.summary, DOUBLE_NEWLINE])

        for block in node.blocks:
            parts.append(format_block(block))

        parts.extend(self._format_children(node.children, numbers))
        return parts


def format_block(block: ContentBlock) -> str:
    """
    Render one content block.

    PROSE is emitted verbatim, CODE as a fenced block, DATA as a commented
    payload so schemas and responses stay apart from runnable code.
    """
    if block.kind == BlockKind.CODE:
        language = block.language or 'text'
        return f"```{language}{NEWLINE}{block.body}{NEWLINE}```{DOUBLE_NEWLINE}"

    if block.kind == BlockKind.DATA:
        data_type = block.annotations.get('type') or 'data'
        return f"{NEWLINE}// {data_type}{NEWLINE}/*{NEWLINE}{block.body}{NEWLINE}*/{NEWLINE}{NEWLINE}"

    return f"{block.body}{DOUBLE_NEWLINE}"


def format_date(day: date) -> str:
    """
    Format a date as 'Month D, YYYY'.

    Example:
        >>> format_date(date(2026, 10, 9))
        'October 9, 2026'
    """
    return f"{day:%B} {day.day}, {day.year}"


def safe_file_part(identifier: str) -> str:
    # Path separators would escape the output directory
    return identifier.replace('/', '-').replace('\\', '-')


def _write_chunked(path: Path, content: str, chunk_size: int = STREAM_CHUNK_SIZE) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        for start in range(0, len(content), chunk_size):
            f.write(content[start:start + chunk_size])


def render(root: DocumentNode, options: RenderOptions) -> List[Path]:
    """
    Convenience function to write all llms.txt files for a tree.

    Example:
        >>> paths = render(root, RenderOptions(output_dir=Path("output"), filename_prefix="swift"))
        >>> [p.name for p in paths]
        ['swift-full-llms.txt', 'swift-database-llms.txt']
    """
    return LLMsTxtFormatter(root, options).generate_all()
