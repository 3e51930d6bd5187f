"""
YAML specification parser.

Reads a specification file made of an ``info`` block and a flat list of
operations (``functions``), each carrying its own list of examples, and
returns a validated SpecData record.

Expected shape:

    info:
      id: reference/supabase-swift
      title: Supabase Swift Client Library
      description: ...
      specUrl: https://...
    functions:
      - id: select
        title: Fetch data
        description: ...
        notes: ...
        examples:
          - id: getting-your-data
            name: Getting your data
            code: |
              ```swift
              let countries = try await supabase.from("countries").select()
              ```
            data:
              sql: create table countries (...)
            response: ...
            isSpotlight: true
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

import yaml
from pydantic import ValidationError

from llmdocs.errors import MalformedSourceError
from llmdocs.schemas import Example, Operation, SpecData, SpecInfo

logger = logging.getLogger(__name__)

# A snippet wholly wrapped in one Markdown fence
WRAPPING_FENCE_PATTERN = re.compile(r'^```[^\n]*\n(.*?)\n?```$', re.DOTALL)


class SpecParser:
    """
    Parse a YAML specification file into SpecData.

    Field names follow the camelCase keys of the source (specUrl, slugPrefix,
    isSpotlight, dataSql) and are mapped onto the snake_case schema.
    """

    def __init__(self, source_path: Path):
        """
        Initialize specification parser.

        Args:
            source_path: Path to the YAML specification
        """
        self.source_path = Path(source_path)

    def parse(self) -> SpecData:
        """
        Read and validate the specification.

        Returns:
            SpecData with operations in source order

        Raises:
            FileNotFoundError: If the file does not exist
            MalformedSourceError: If YAML is invalid or required fields are missing
        """
        content = self.source_path.read_text(encoding='utf-8')
        return self.parse_text(content)

    def parse_text(self, content: str) -> SpecData:
        """Parse specification text (see parse)."""
        try:
            raw = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise MalformedSourceError(str(self.source_path), f"invalid YAML ({e})") from e

        if not isinstance(raw, dict):
            raise MalformedSourceError(str(self.source_path), "expected a mapping at the top level")

        info = self._parse_info(raw.get('info'))

        raw_operations = raw.get('functions', raw.get('operations')) or []
        if not isinstance(raw_operations, list):
            raise MalformedSourceError(str(self.source_path), "'functions' must be a list")

        operations = [
            self._parse_operation(raw_op, index)
            for index, raw_op in enumerate(raw_operations)
        ]

        try:
            spec = SpecData(info=info, operations=operations)
        except ValidationError as e:
            raise MalformedSourceError(str(self.source_path), str(e)) from e

        logger.info(
            f"Parsed spec '{spec.info.id}': {len(spec.operations)} operations, "
            f"{spec.total_examples} examples"
        )
        return spec

    def _parse_info(self, raw_info: Any) -> SpecInfo:
        if not isinstance(raw_info, dict):
            raise MalformedSourceError(str(self.source_path), "missing 'info' section")

        for key in ('id', 'title'):
            if not raw_info.get(key):
                raise MalformedSourceError(str(self.source_path), f"missing required field 'info.{key}'")

        libraries = [
            {str(k): str(v) for k, v in library.items()}
            for library in raw_info.get('libraries') or []
            if isinstance(library, dict)
        ]

        return SpecInfo(
            id=str(raw_info['id']),
            title=str(raw_info['title']),
            description=_text(raw_info.get('description')),
            spec_url=_optional_text(raw_info.get('specUrl')),
            slug_prefix=_text(raw_info.get('slugPrefix')) or '/',
            libraries=libraries,
        )

    def _parse_operation(self, raw_op: Any, index: int) -> Operation:
        if not isinstance(raw_op, dict) or not raw_op.get('id'):
            raise MalformedSourceError(
                str(self.source_path),
                f"operation #{index + 1} is missing required field 'id'"
            )

        op_id = str(raw_op['id'])
        raw_examples = raw_op.get('examples') or []
        if not isinstance(raw_examples, list):
            raise MalformedSourceError(str(self.source_path), f"examples of '{op_id}' must be a list")

        examples: List[Example] = []
        for ex_index, raw_ex in enumerate(raw_examples):
            if not isinstance(raw_ex, dict):
                raise MalformedSourceError(
                    str(self.source_path),
                    f"example #{ex_index + 1} of '{op_id}' must be a mapping"
                )
            examples.append(self._parse_example(raw_ex, op_id, ex_index))

        return Operation(
            id=op_id,
            title=_text(raw_op.get('title')) or op_id,
            description=_text(raw_op.get('description')),
            notes=_text(raw_op.get('notes')),
            examples=examples,
        )

    def _parse_example(self, raw_ex: Dict[str, Any], op_id: str, index: int) -> Example:
        ex_id = _text(raw_ex.get('id')) or f"{op_id}-example-{index + 1}"

        data = raw_ex.get('data')
        data_sql = _text(data.get('sql')) if isinstance(data, dict) else ''
        if not data_sql:
            data_sql = _text(raw_ex.get('dataSql'))

        return Example(
            id=ex_id,
            name=_text(raw_ex.get('name')) or ex_id,
            code=unwrap_code_fence(_text(raw_ex.get('code'))),
            description=_text(raw_ex.get('description')),
            data_sql=data_sql,
            response=_text(raw_ex.get('response')),
            is_spotlight=bool(raw_ex.get('isSpotlight', False)),
        )


def unwrap_code_fence(code: str) -> str:
    """
    Remove a Markdown fence that wraps the whole snippet.

    Snippets with several fences, or none, are returned unchanged.
    """
    match = WRAPPING_FENCE_PATTERN.match(code)
    if not match:
        return code
    inner = match.group(1)
    if '\n```' in inner:
        return code
    return inner


def _text(value: Any) -> str:
    if value is None:
        return ''
    return str(value).strip()


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text or None


def parse_spec_file(source_path: Path) -> SpecData:
    """
    Convenience function to parse a specification file.

    Example:
        >>> spec = parse_spec_file(Path("specs/supabase_swift_v2.yml"))
        >>> print(spec.info.title, len(spec.operations))
    """
    return SpecParser(source_path).parse()
