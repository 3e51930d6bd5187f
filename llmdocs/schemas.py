"""
Pydantic schemas for the llmdocs conversion pipeline.

This module defines every data model that flows through the pipeline:
the format-agnostic document tree (the IR) produced by the adapters and
consumed by the formatter, the source records handed over by the format
parsers, and the render/generation settings and results.

Architecture:
- DocumentNode / ContentBlock: Immutable IR shared by all formats
- SpecInfo / Operation / Example / SpecData: Specification-list source records
- ParsedDocument / ParsedSection / ParsedContent: Heading-tree source records
- RenderOptions: Formatter configuration
- GenerationOutput: Summary of one end-to-end conversion
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from typing_extensions import TypedDict


# ============================================================================
# INTERMEDIATE REPRESENTATION (IR)
# ============================================================================

class NodeKind(str, Enum):
    """Structural role of a DocumentNode."""
    ROOT = "root"        # Whole document
    GROUP = "group"      # Major topical grouping (drives per-group output files)
    SECTION = "section"  # Generic nested heading
    ENTRY = "entry"      # Single documented operation or topic
    DETAIL = "detail"    # Leaf example or variant under an entry


class BlockKind(str, Enum):
    """Kind of renderable material inside a node."""
    PROSE = "prose"
    CODE = "code"
    DATA = "data"


class NodeTags(TypedDict, total=False):
    """
    Provenance metadata attached to a node.

    Informational only: the formatter never branches on these except for
    reading the root's ``format`` into the header comment.
    """
    format: str
    source_id: str
    title: str
    spec_url: Optional[str]
    path: str
    level: int
    count: int
    operation_id: str
    notes: str
    example_id: str
    is_spotlight: bool
    frontmatter: Dict[str, str]


class BlockAnnotations(TypedDict, total=False):
    """Labels attached to a content block (e.g. schema vs response)."""
    type: str
    style: str


class ContentBlock(BaseModel):
    """One atomic piece of renderable material inside a node."""
    model_config = ConfigDict(frozen=True)

    kind: BlockKind = Field(description="prose, code or data")
    body: str = Field(description="Literal text content")
    language: Optional[str] = Field(None, description="Fence tag, e.g. 'swift', 'sql', 'json'")
    annotations: BlockAnnotations = Field(
        default_factory=dict,
        description="Block labels, e.g. {'type': 'schema'} or {'style': 'blockquote'}"
    )


class DocumentNode(BaseModel):
    """
    One addressable unit of documentation at any nesting depth.

    Nodes are immutable once built: children and blocks are stored as tuples
    and the model is frozen, so a tree handed to the formatter cannot change
    underneath it. Child order is meaningful and determines output numbering.
    """
    model_config = ConfigDict(frozen=True)

    kind: NodeKind = Field(description="Structural role")
    identifier: str = Field(description="Stable key derived from source id or slug")
    title: str = Field(description="Human-readable heading text")
    summary: str = Field(default="", description="Prose rendered before the content blocks")
    blocks: Tuple[ContentBlock, ...] = Field(default=(), description="Ordered content blocks")
    children: Tuple["DocumentNode", ...] = Field(default=(), description="Ordered child nodes")
    tags: NodeTags = Field(default_factory=dict, description="Provenance metadata")


DocumentNode.model_rebuild()


def create_node(
    kind: NodeKind,
    identifier: str,
    title: str,
    summary: str = "",
    blocks: Optional[List[ContentBlock]] = None,
    children: Optional[List[DocumentNode]] = None,
    tags: Optional[Dict[str, Any]] = None,
) -> DocumentNode:
    """Build a DocumentNode with sensible defaults."""
    return DocumentNode(
        kind=kind,
        identifier=identifier,
        title=title,
        summary=summary,
        blocks=tuple(blocks or ()),
        children=tuple(children or ()),
        tags=tags or {},
    )


def create_block(
    kind: BlockKind,
    body: str,
    language: Optional[str] = None,
    annotations: Optional[Dict[str, str]] = None,
) -> ContentBlock:
    """Build a ContentBlock with sensible defaults."""
    return ContentBlock(
        kind=kind,
        body=body,
        language=language,
        annotations=annotations or {},
    )


# ============================================================================
# SPECIFICATION-LIST SOURCE RECORDS
# ============================================================================

class SpecInfo(BaseModel):
    """Specification metadata (the ``info`` block of a spec file)."""
    id: str = Field(description="Specification id, e.g. 'supabase_swift_v2'")
    title: str = Field(description="Specification title")
    description: str = Field(default="", description="Specification description")
    spec_url: Optional[str] = Field(None, description="Where the spec was published")
    slug_prefix: str = Field(default="/", description="URL prefix for operation slugs")
    libraries: List[Dict[str, str]] = Field(default_factory=list, description="Library descriptors")


class Example(BaseModel):
    """Code example attached to an operation."""
    id: str = Field(description="Example id")
    name: str = Field(description="Example display name")
    code: str = Field(default="", description="Example code")
    description: str = Field(default="", description="Example description")
    data_sql: str = Field(default="", description="SQL schema the example runs against")
    response: str = Field(default="", description="Example response payload")
    is_spotlight: bool = Field(default=False, description="Highlighted example")


class Operation(BaseModel):
    """A documented API operation with its examples."""
    id: str = Field(description="Operation id")
    title: str = Field(description="Operation title")
    description: str = Field(default="", description="Operation description")
    notes: str = Field(default="", description="Additional notes")
    examples: List[Example] = Field(default_factory=list, description="Examples in source order")


class SpecData(BaseModel):
    """
    Complete parsed specification.

    The id -> operation lookup is built once on construction so category
    resolution costs O(1) per id.
    """
    info: SpecInfo
    operations: List[Operation] = Field(default_factory=list)

    _operation_map: Dict[str, Operation] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        # Later duplicates shadow earlier ones
        for operation in self.operations:
            self._operation_map[operation.id] = operation

    @property
    def operation_map(self) -> Dict[str, Operation]:
        return self._operation_map

    @property
    def total_examples(self) -> int:
        return sum(len(op.examples) for op in self.operations)

    def get_operation(self, operation_id: str) -> Optional[Operation]:
        return self._operation_map.get(operation_id)

    def get_operations(self, operation_ids: List[str]) -> List[Operation]:
        """Resolve ids in order, skipping ids absent from the specification."""
        return [
            self._operation_map[op_id]
            for op_id in operation_ids
            if op_id in self._operation_map
        ]


# ============================================================================
# HEADING-TREE SOURCE RECORDS
# ============================================================================

class ParsedContent(BaseModel):
    """Content element between two headings."""
    type: Literal["prose", "code", "blockquote", "image"]
    content: str
    language: Optional[str] = None


class ParsedSection(BaseModel):
    """Heading with its content and nested sub-headings."""
    level: int = Field(ge=1, le=6, description="Heading level (1-6)")
    title: str
    id: str
    content: List[ParsedContent] = Field(default_factory=list)
    children: List["ParsedSection"] = Field(default_factory=list)


ParsedSection.model_rebuild()


class ParsedDocument(BaseModel):
    """Parsed Markdown document with its rebuilt heading tree."""
    path: str
    title: str
    sections: List[ParsedSection] = Field(default_factory=list)
    metadata: Dict[str, str] = Field(default_factory=dict, description="Frontmatter key/values")


# ============================================================================
# RENDERING / GENERATION
# ============================================================================

DEFAULT_STREAM_THRESHOLD = 10 * 1024 * 1024


class RenderOptions(BaseModel):
    """Formatter configuration."""
    output_dir: Path = Field(description="Destination directory (created if absent)")
    filename_prefix: str = Field(default="documentation", description="Output filename prefix")
    title: Optional[str] = Field(None, description="Document title (default: root title)")
    system_prompt: Optional[str] = Field(None, description="Contextual prompt for the <SYSTEM> line")
    include_metadata: bool = Field(default=True, description="Emit the Format/Generated comment")
    stream_threshold: int = Field(
        default=DEFAULT_STREAM_THRESHOLD,
        ge=0,
        description="Full documents larger than this many characters are written in chunks"
    )


class GenerationOutput(BaseModel):
    """Summary of one source -> text conversion."""
    source: str = Field(description="Source path")
    format: str = Field(description="Detected or requested format")
    title: str = Field(description="Document title")
    output_files: List[str] = Field(default_factory=list, description="Written files, full file first")
    total_nodes: int = Field(description="Nodes in the document tree (root included)")
    total_groups: int = Field(default=0, description="Top-level groups (modular files)")
    languages: Dict[str, int] = Field(default_factory=dict, description="Code blocks per language")
    timestamp: str = Field(description="ISO timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "source": "specs/supabase_swift_v2.yml",
                "format": "openref",
                "title": "Supabase Swift Client Library",
                "output_files": [
                    "output/supabase_swift_v2-full-llms.txt",
                    "output/supabase_swift_v2-database-llms.txt"
                ],
                "total_nodes": 214,
                "total_groups": 1,
                "languages": {"swift": 187, "text": 3},
                "timestamp": "2025-01-15T10:30:00"
            }
        }
    )
