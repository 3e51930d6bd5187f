"""
llmdocs generator - end-to-end orchestration.

Ties the pipeline together for one source:
1. Detect the source format
2. Parse it into a document tree with the matching adapter
3. Render the llms.txt files
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union
import logging

from llmdocs.adapters import SpecListAdapter
from llmdocs.detector import FormatDetector, get_detector
from llmdocs.errors import UnsupportedFormatError
from llmdocs.extractors import count_code_languages
from llmdocs.formatters import LLMsTxtFormatter
from llmdocs.formatters.llms_txt_formatter import safe_file_part
from llmdocs.schemas import DocumentNode, GenerationOutput, RenderOptions
from llmdocs.tree import count_nodes, top_level_groups

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "documentation"


class DocumentationGenerator:
    """
    Convert one documentation source into llms.txt files.

    The category map only applies to specification sources; heading-tree
    sources take their groups from H2 headings instead.
    """

    def __init__(
        self,
        source: Union[str, Path],
        output_dir: Union[str, Path],
        format_hint: Optional[str] = "auto",
        category_map: Optional[Dict[str, List[str]]] = None,
        filename_prefix: Optional[str] = None,
        title: Optional[str] = None,
        system_prompt: Optional[str] = None,
        include_metadata: bool = True,
        treat_h2_as_group: bool = True,
        detector: Optional[FormatDetector] = None
    ):
        """
        Initialize generator.

        Args:
            source: Source file or directory
            output_dir: Directory for the generated files
            format_hint: Format name, or "auto" to detect
            category_map: Optional category -> operation ids (spec sources)
            filename_prefix: Output prefix (default: spec id, else "documentation")
            title: Document title (default: source title)
            system_prompt: Custom <SYSTEM> prompt for the full file
            include_metadata: Emit the Format/Generated comment
            treat_h2_as_group: Map H2 headings of a single Markdown file to groups
            detector: Format detector (default: global detector)
        """
        self.source = Path(source)
        self.output_dir = Path(output_dir)
        self.format_hint = format_hint
        self.category_map = category_map
        self.filename_prefix = filename_prefix
        self.title = title
        self.system_prompt = system_prompt
        self.include_metadata = include_metadata
        self.treat_h2_as_group = treat_h2_as_group
        self.detector = detector or get_detector()

    def generate(self) -> GenerationOutput:
        """
        Run detection, parsing and rendering.

        Returns:
            GenerationOutput with written paths and tree statistics

        Raises:
            FormatDetectionError: If the format cannot be detected
            UnsupportedFormatError: If no adapter handles the requested format
            MalformedSourceError: If the source lacks required structure
        """
        format_name = self.detector.detect(self.source, self.format_hint)
        logger.info(f"Generating llms.txt from {self.source} (format: {format_name})")

        root = self.build_tree(format_name)

        options = RenderOptions(
            output_dir=self.output_dir,
            filename_prefix=self._resolve_prefix(root),
            title=self.title,
            system_prompt=self.system_prompt,
            include_metadata=self.include_metadata,
        )
        output_files = LLMsTxtFormatter(root, options).generate_all()

        output = GenerationOutput(
            source=str(self.source),
            format=format_name,
            title=self.title or root.title,
            output_files=[str(path) for path in output_files],
            total_nodes=count_nodes(root),
            total_groups=len(top_level_groups(root)),
            languages=count_code_languages(root),
            timestamp=datetime.now().isoformat(),
        )

        logger.info(
            f"Generated {len(output.output_files)} files "
            f"({output.total_nodes} nodes, {output.total_groups} groups)"
        )
        return output

    def build_tree(self, format_name: str) -> DocumentNode:
        """
        Parse the source with the adapter registered for a format.

        Raises:
            UnsupportedFormatError: If no adapter is registered for format_name
        """
        adapter = self.detector.get_adapter(format_name)
        if adapter is None:
            raise UnsupportedFormatError(format_name, self.detector.available_formats)

        if self.category_map and not isinstance(adapter, SpecListAdapter):
            logger.warning(f"Category map ignored for {format_name} sources")

        # Adapters ignore options that do not apply to them
        return adapter.parse(
            self.source,
            category_map=self.category_map,
            treat_h2_as_group=self.treat_h2_as_group,
        )

    def _resolve_prefix(self, root: DocumentNode) -> str:
        if self.filename_prefix:
            return self.filename_prefix
        if root.tags.get("format") == SpecListAdapter.format:
            return safe_file_part(root.identifier)
        return DEFAULT_PREFIX


def generate_documentation(
    source: Union[str, Path],
    output_dir: Union[str, Path],
    format_hint: Optional[str] = "auto",
    category_map: Optional[Dict[str, List[str]]] = None,
    **kwargs
) -> GenerationOutput:
    """
    Convenience function to run the whole pipeline for one source.

    Example:
        >>> result = generate_documentation(
        ...     "specs/supabase_swift_v2.yml",
        ...     "output",
        ...     category_map={"Database": ["select", "insert"]}
        ... )
        >>> result.output_files
        ['output/supabase_swift_v2-full-llms.txt', 'output/supabase_swift_v2-Database-llms.txt']
    """
    generator = DocumentationGenerator(
        source=source,
        output_dir=output_dir,
        format_hint=format_hint,
        category_map=category_map,
        **kwargs
    )
    return generator.generate()
