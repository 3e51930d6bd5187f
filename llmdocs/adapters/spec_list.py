"""
Specification-list adapter.

Converts a flat specification (info + operations, each with examples) into
the document tree.

Mapping:
- SpecData  -> ROOT   (keyed by info.id, summary = info.description)
- category  -> GROUP  (only when a category map is given)
- Operation -> ENTRY  (blocks: description, notes)
- Example   -> DETAIL (blocks: description, code, schema, response)
"""

from pathlib import Path
from typing import Dict, List, Optional
import logging

from llmdocs.adapters.base import FormatAdapter, PathLike, get_extension, read_head
from llmdocs.extractors import infer_language
from llmdocs.parsers.spec_yaml import SpecParser
from llmdocs.schemas import (
    BlockKind,
    ContentBlock,
    DocumentNode,
    Example,
    NodeKind,
    Operation,
    SpecData,
    create_block,
    create_node,
)

logger = logging.getLogger(__name__)

SPEC_EXTENSIONS = {'yml', 'yaml'}

# Any of these in the first bytes marks a specification file
SPEC_MARKERS = ('info:', 'functions:', 'id:')


class SpecListAdapter(FormatAdapter):
    """Adapter for YAML specification files (OpenRef style)."""

    format = "openref"
    name = "Specification List"

    def detect(self, source_path: PathLike) -> bool:
        if get_extension(source_path) not in SPEC_EXTENSIONS:
            return False

        if not Path(source_path).is_file():
            return False

        head = read_head(source_path, 200)
        return any(marker in head for marker in SPEC_MARKERS)

    def parse(
        self,
        source_path: PathLike,
        category_map: Optional[Dict[str, List[str]]] = None,
        **options
    ) -> DocumentNode:
        """
        Parse a specification file into a document tree.

        Args:
            source_path: Path to the YAML specification
            category_map: Optional ordered mapping of category -> operation ids

        Returns:
            ROOT DocumentNode
        """
        spec = SpecParser(Path(source_path)).parse()
        return self.convert(spec, category_map)

    def convert(
        self,
        spec: SpecData,
        category_map: Optional[Dict[str, List[str]]] = None
    ) -> DocumentNode:
        """
        Convert parsed specification data to a document tree.

        Without a category map the ROOT's children are one ENTRY per
        operation in source order. With a non-empty map they are one GROUP
        per category, in map order.

        Args:
            spec: Parsed specification
            category_map: Optional ordered mapping of category -> operation ids

        Returns:
            ROOT DocumentNode
        """
        if category_map:
            children = self._convert_with_categories(spec, category_map)
        else:
            children = [self.convert_operation(op) for op in spec.operations]

        return create_node(
            NodeKind.ROOT,
            spec.info.id,
            spec.info.title,
            summary=spec.info.description,
            children=children,
            tags={
                'format': self.format,
                'source_id': spec.info.id,
                'title': spec.info.title,
                'spec_url': spec.info.spec_url,
            },
        )

    def _convert_with_categories(
        self,
        spec: SpecData,
        category_map: Dict[str, List[str]]
    ) -> List[DocumentNode]:
        groups = []

        for category, operation_ids in category_map.items():
            missing = [op_id for op_id in operation_ids if spec.get_operation(op_id) is None]
            if missing:
                logger.debug(f"Category '{category}': skipping unknown operations {', '.join(missing)}")

            operations = spec.get_operations(operation_ids)
            if not operations:
                logger.debug(f"Category '{category}' resolved to no operations, omitted")
                continue

            groups.append(create_node(
                NodeKind.GROUP,
                category,
                category,
                children=[self.convert_operation(op) for op in operations],
            ))

        return groups

    def convert_operation(self, operation: Operation) -> DocumentNode:
        """Convert one operation to an ENTRY node with one DETAIL per example."""
        blocks: List[ContentBlock] = []
        if operation.description:
            blocks.append(create_block(BlockKind.PROSE, operation.description))
        if operation.notes:
            blocks.append(create_block(BlockKind.PROSE, operation.notes))

        return create_node(
            NodeKind.ENTRY,
            operation.id,
            operation.title,
            blocks=blocks,
            children=[self.convert_example(example) for example in operation.examples],
            tags={'operation_id': operation.id, 'notes': operation.notes},
        )

    def convert_example(self, example: Example) -> DocumentNode:
        """Convert one example to a DETAIL node."""
        blocks: List[ContentBlock] = []

        if example.description:
            blocks.append(create_block(BlockKind.PROSE, example.description))

        if example.code:
            blocks.append(create_block(BlockKind.CODE, example.code, language=infer_language(example.code)))

        if example.data_sql:
            blocks.append(create_block(
                BlockKind.DATA, example.data_sql, language='sql', annotations={'type': 'schema'}
            ))

        if example.response:
            blocks.append(create_block(
                BlockKind.DATA, example.response, language='json', annotations={'type': 'response'}
            ))

        return create_node(
            NodeKind.DETAIL,
            example.id,
            example.name,
            blocks=blocks,
            tags={'example_id': example.id, 'is_spotlight': example.is_spotlight},
        )


def spec_to_document(
    spec: SpecData,
    category_map: Optional[Dict[str, List[str]]] = None
) -> DocumentNode:
    """
    Convenience function to convert specification data to a document tree.

    Example:
        >>> root = spec_to_document(spec, {"Database": ["select", "insert"]})
        >>> [group.title for group in root.children]
        ['Database']
    """
    return SpecListAdapter().convert(spec, category_map)
