"""
llmdocs - LLM-optimized documentation generator.

Converts documentation sources into flat, hierarchically numbered llms.txt
files. Every source format is first turned into one format-agnostic
document tree, which a single formatter renders.

Main Components:
- Parsers: YAML specification and Markdown/DocC readers
- Adapters: Source records -> document tree, one per format
- Detector: Picks the adapter for a source path
- Formatters: Document tree -> llms.txt files
- Generator: Orchestrates detection, parsing and rendering

Usage:
    from llmdocs import DocumentationGenerator

    generator = DocumentationGenerator(
        source="specs/supabase_swift_v2.yml",
        output_dir="output",
        category_map={"Database": ["select", "insert"]}
    )
    result = generator.generate()
"""

__version__ = "0.1.0"

from .schemas import (
    # Document tree
    NodeKind,
    BlockKind,
    DocumentNode,
    ContentBlock,
    create_node,
    create_block,

    # Source records
    SpecInfo,
    Operation,
    Example,
    SpecData,
    ParsedDocument,
    ParsedSection,
    ParsedContent,

    # Rendering
    RenderOptions,
    GenerationOutput,
)

from .errors import (
    LLMDocsError,
    FormatDetectionError,
    UnsupportedFormatError,
    MalformedSourceError,
    ConfigError,
)

from .adapters import FormatAdapter, SpecListAdapter, HeadingTreeAdapter
from .detector import FormatDetector, detect_format, get_detector
from .formatters import LLMsTxtFormatter, render
from .generator import DocumentationGenerator, generate_documentation

__all__ = [
    "__version__",

    # Document tree
    "NodeKind",
    "BlockKind",
    "DocumentNode",
    "ContentBlock",
    "create_node",
    "create_block",

    # Source records
    "SpecInfo",
    "Operation",
    "Example",
    "SpecData",
    "ParsedDocument",
    "ParsedSection",
    "ParsedContent",

    # Rendering
    "RenderOptions",
    "GenerationOutput",

    # Errors
    "LLMDocsError",
    "FormatDetectionError",
    "UnsupportedFormatError",
    "MalformedSourceError",
    "ConfigError",

    # Pipeline
    "FormatAdapter",
    "SpecListAdapter",
    "HeadingTreeAdapter",
    "FormatDetector",
    "detect_format",
    "get_detector",
    "LLMsTxtFormatter",
    "render",
    "DocumentationGenerator",
    "generate_documentation",
]
