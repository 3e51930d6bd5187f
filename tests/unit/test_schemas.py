"""
Tests for the document tree models and source records.
"""

import pytest
from pydantic import ValidationError

from llmdocs.schemas import (
    BlockKind,
    ContentBlock,
    DocumentNode,
    Example,
    NodeKind,
    Operation,
    ParsedSection,
    RenderOptions,
    SpecData,
    SpecInfo,
    create_block,
    create_node,
)


class TestCreateNode:
    def test_defaults(self):
        node = create_node(NodeKind.ENTRY, "select", "Fetch data")
        assert node.summary == ""
        assert node.blocks == ()
        assert node.children == ()
        assert node.tags == {}

    def test_children_and_blocks_are_tuples(self):
        child = create_node(NodeKind.DETAIL, "ex", "Example")
        block = create_block(BlockKind.PROSE, "text")
        node = create_node(NodeKind.ENTRY, "op", "Op", blocks=[block], children=[child])
        assert isinstance(node.children, tuple)
        assert isinstance(node.blocks, tuple)
        assert node.children[0] is child

    def test_node_is_frozen(self):
        node = create_node(NodeKind.ROOT, "root", "Docs")
        with pytest.raises(ValidationError):
            node.title = "Other"

    def test_block_is_frozen(self):
        block = create_block(BlockKind.CODE, "x = 1", language="python")
        with pytest.raises(ValidationError):
            block.body = "y = 2"

    def test_child_order_preserved(self):
        children = [create_node(NodeKind.ENTRY, str(i), f"Entry {i}") for i in range(5)]
        node = create_node(NodeKind.ROOT, "root", "Docs", children=children)
        assert [c.identifier for c in node.children] == ["0", "1", "2", "3", "4"]

    def test_tags_keep_known_keys(self):
        node = create_node(NodeKind.ROOT, "demo", "Demo", tags={"format": "openref", "count": 2})
        assert node.tags["format"] == "openref"
        assert node.tags["count"] == 2


class TestCreateBlock:
    def test_defaults(self):
        block = create_block(BlockKind.PROSE, "Hello")
        assert block.language is None
        assert block.annotations == {}

    def test_annotations(self):
        block = create_block(BlockKind.DATA, "{}", language="json", annotations={"type": "response"})
        assert block.annotations["type"] == "response"
        assert block.kind == BlockKind.DATA

    def test_direct_construction(self):
        block = ContentBlock(kind="code", body="let x = 1", language="swift")
        assert block.kind == BlockKind.CODE


class TestDocumentNodeKinds:
    def test_kind_values(self):
        assert [kind.value for kind in NodeKind] == ["root", "group", "section", "entry", "detail"]

    def test_nested_construction_from_dicts(self):
        node = DocumentNode(
            kind="root",
            identifier="root",
            title="Docs",
            children=[{"kind": "entry", "identifier": "a", "title": "A"}],
        )
        assert node.children[0].kind == NodeKind.ENTRY


class TestSpecData:
    def _spec(self, operations):
        return SpecData(info=SpecInfo(id="demo", title="Demo"), operations=operations)

    def test_operation_lookup(self):
        spec = self._spec([Operation(id="select", title="Select"), Operation(id="insert", title="Insert")])
        assert spec.get_operation("insert").title == "Insert"
        assert spec.get_operation("missing") is None
        assert set(spec.operation_map) == {"select", "insert"}

    def test_get_operations_skips_unknown_ids(self):
        spec = self._spec([Operation(id="select", title="Select"), Operation(id="insert", title="Insert")])
        operations = spec.get_operations(["insert", "nope", "select"])
        assert [op.id for op in operations] == ["insert", "select"]

    def test_later_duplicate_wins_lookup(self):
        spec = self._spec([Operation(id="select", title="First"), Operation(id="select", title="Second")])
        assert spec.get_operation("select").title == "Second"
        assert len(spec.operations) == 2

    def test_total_examples(self):
        spec = self._spec([
            Operation(id="a", title="A", examples=[Example(id="1", name="One"), Example(id="2", name="Two")]),
            Operation(id="b", title="B", examples=[Example(id="3", name="Three")]),
        ])
        assert spec.total_examples == 3

    def test_info_defaults(self):
        info = SpecInfo(id="demo", title="Demo")
        assert info.description == ""
        assert info.spec_url is None
        assert info.slug_prefix == "/"


class TestParsedSection:
    def test_level_bounds(self):
        with pytest.raises(ValidationError):
            ParsedSection(level=7, title="Too deep", id="too-deep")
        with pytest.raises(ValidationError):
            ParsedSection(level=0, title="Too shallow", id="too-shallow")

    def test_children_are_mutable(self):
        parent = ParsedSection(level=1, title="Parent", id="parent")
        parent.children.append(ParsedSection(level=2, title="Child", id="child"))
        assert parent.children[0].title == "Child"


class TestRenderOptions:
    def test_defaults(self, tmp_path):
        options = RenderOptions(output_dir=tmp_path)
        assert options.filename_prefix == "documentation"
        assert options.include_metadata is True
        assert options.stream_threshold == 10 * 1024 * 1024

    def test_negative_threshold_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            RenderOptions(output_dir=tmp_path, stream_threshold=-1)
