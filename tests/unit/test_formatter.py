"""
Tests for the llms.txt formatter.
"""

import re
from datetime import date

import pytest

from llmdocs.formatters import LLMsTxtFormatter, format_block, format_date, render
from llmdocs.schemas import BlockKind, NodeKind, RenderOptions, create_block, create_node


@pytest.fixture
def tree():
    detail = create_node(
        NodeKind.DETAIL,
        "basic",
        "Basic",
        blocks=[
            create_block(BlockKind.DATA, "create table t();", language="sql", annotations={"type": "schema"}),
            create_block(BlockKind.DATA, "{}", language="json", annotations={"type": "response"}),
        ],
    )
    entry = create_node(
        NodeKind.ENTRY,
        "select",
        "Fetch data",
        blocks=[
            create_block(BlockKind.PROSE, "Perform a query."),
            create_block(BlockKind.CODE, "let x = 1", language="swift"),
        ],
        children=[detail],
    )
    group = create_node(NodeKind.GROUP, "db", "Database", summary="Database operations.", children=[entry])
    loose = create_node(NodeKind.ENTRY, "auth", "Auth")
    return create_node(
        NodeKind.ROOT,
        "demo",
        "Demo SDK",
        summary="Root summary.",
        children=[group, loose],
        tags={"format": "openref"},
    )


FULL_BODY = (
    "## 1. Database\n\n"
    "Database operations.\n\n"
    "### 1.1. Fetch data\n\n"
    "Perform a query.\n\n"
    "```swift\nlet x = 1\n```\n\n"
    "#### 1.1.1. Basic\n\n"
    "\n// schema\n/*\ncreate table t();\n*/\n\n"
    "\n// response\n/*\n{}\n*/\n\n"
    "## 2. Auth\n\n"
)


def _options(tmp_path, **kwargs):
    kwargs.setdefault("include_metadata", False)
    return RenderOptions(output_dir=tmp_path, **kwargs)


class TestRenderFull:
    def test_exact_output(self, tree, tmp_path):
        text = LLMsTxtFormatter(tree, _options(tmp_path)).render_full()
        assert text == (
            "<SYSTEM>This is the complete developer documentation for Demo SDK.</SYSTEM>\n\n"
            "# Demo SDK\n\n"
            + FULL_BODY
        )

    def test_root_never_headed(self, tree, tmp_path):
        text = LLMsTxtFormatter(tree, _options(tmp_path)).render_full()
        assert "Root summary." not in text
        assert "## 0" not in text

    def test_metadata_line(self, tree, tmp_path):
        text = LLMsTxtFormatter(tree, _options(tmp_path, include_metadata=True)).render_full()
        lines = text.split("\n")
        assert re.fullmatch(r"<!-- Format: openref, Generated: [A-Z][a-z]+ \d{1,2}, \d{4} -->", lines[2])
        assert lines[4] == "# Demo SDK"

    def test_unknown_format(self, tmp_path):
        root = create_node(NodeKind.ROOT, "root", "Docs")
        text = LLMsTxtFormatter(root, _options(tmp_path, include_metadata=True)).render_full()
        assert "<!-- Format: unknown, Generated: " in text

    def test_title_and_prompt_options(self, tree, tmp_path):
        options = _options(tmp_path, title="Custom", system_prompt="Be brief.")
        text = LLMsTxtFormatter(tree, options).render_full()
        assert text.startswith("<SYSTEM>Be brief.</SYSTEM>\n\n# Custom\n\n")

    def test_heading_level_caps_at_four(self, tmp_path):
        node = create_node(NodeKind.DETAIL, "e", "e")
        for name in ["d", "c", "b", "a"]:
            node = create_node(NodeKind.SECTION, name, name, children=[node])
        root = create_node(NodeKind.ROOT, "root", "Docs", children=[node])

        text = LLMsTxtFormatter(root, _options(tmp_path)).render_full()

        headings = [line for line in text.split("\n") if line.startswith("##")]
        assert headings == [
            "## 1. a",
            "### 1.1. b",
            "#### 1.1.1. c",
            "#### 1.1.1.1. d",
            "#### 1.1.1.1.1. e",
        ]

    def test_numbering_is_positional(self, tmp_path):
        children = [
            create_node(NodeKind.ENTRY, "z", "Zeta", children=[
                create_node(NodeKind.DETAIL, "z1", "Z one"),
                create_node(NodeKind.DETAIL, "z2", "Z two"),
            ]),
            create_node(NodeKind.ENTRY, "a", "Alpha"),
        ]
        root = create_node(NodeKind.ROOT, "root", "Docs", children=children)

        text = LLMsTxtFormatter(root, _options(tmp_path)).render_full()

        assert "## 1. Zeta\n\n### 1.1. Z one\n\n### 1.2. Z two\n\n## 2. Alpha\n\n" in text

    def test_non_root_top_node_treated_as_root(self, tmp_path):
        section = create_node(
            NodeKind.SECTION,
            "guide",
            "Guide",
            children=[create_node(NodeKind.GROUP, "install", "Install")],
        )
        text = LLMsTxtFormatter(section, _options(tmp_path)).render_full()
        assert text.endswith("# Guide\n\n## 1. Install\n\n")


class TestRenderGroup:
    def test_exact_output(self, tree, tmp_path):
        group = tree.children[0]
        text = LLMsTxtFormatter(tree, _options(tmp_path)).render_group(group)
        assert text == (
            "<SYSTEM>This is the developer documentation for Demo SDK - Database.</SYSTEM>\n\n"
            "# Demo SDK Database Documentation\n\n"
            "Database operations.\n\n"
            "## 1. Fetch data\n\n"
            "Perform a query.\n\n"
            "```swift\nlet x = 1\n```\n\n"
            "### 1.1. Basic\n\n"
            "\n// schema\n/*\ncreate table t();\n*/\n\n"
            "\n// response\n/*\n{}\n*/\n\n"
        )

    def test_group_without_summary(self, tmp_path):
        group = create_node(NodeKind.GROUP, "g", "G", children=[create_node(NodeKind.ENTRY, "e", "E")])
        root = create_node(NodeKind.ROOT, "root", "Docs", children=[group])
        text = LLMsTxtFormatter(root, _options(tmp_path)).render_group(group)
        assert text == (
            "<SYSTEM>This is the developer documentation for Docs - G.</SYSTEM>\n\n"
            "# Docs G Documentation\n\n"
            "## 1. E\n\n"
        )


class TestFormatBlock:
    def test_prose_verbatim(self):
        body = "  Indented *markdown*\nsecond line  "
        assert format_block(create_block(BlockKind.PROSE, body)) == body + "\n\n"

    def test_code_default_language(self):
        assert format_block(create_block(BlockKind.CODE, "x")) == "```text\nx\n```\n\n"

    def test_code_body_verbatim(self):
        body = "if x {\n\tprint(x)\n}\n"
        assert format_block(create_block(BlockKind.CODE, body, language="swift")) == (
            "```swift\n" + body + "\n```\n\n"
        )

    def test_data_default_type(self):
        assert format_block(create_block(BlockKind.DATA, "payload")) == "\n// data\n/*\npayload\n*/\n\n"


class TestFormatDate:
    def test_month_day_year(self):
        assert format_date(date(2026, 10, 9)) == "October 9, 2026"
        assert format_date(date(2025, 1, 15)) == "January 15, 2025"


class TestGenerateAll:
    def test_writes_full_and_group_files(self, tree, tmp_path):
        out = tmp_path / "nested" / "out"
        paths = LLMsTxtFormatter(tree, _options(out, filename_prefix="demo")).generate_all()

        assert [p.name for p in paths] == ["demo-full-llms.txt", "demo-db-llms.txt"]
        assert paths[0].read_text(encoding="utf-8").endswith(FULL_BODY)
        assert paths[1].read_text(encoding="utf-8").startswith("<SYSTEM>This is the developer documentation")

    def test_no_groups_only_full_file(self, tmp_path):
        root = create_node(NodeKind.ROOT, "root", "Docs", children=[create_node(NodeKind.ENTRY, "a", "A")])
        paths = render(root, _options(tmp_path))

        assert [p.name for p in paths] == ["documentation-full-llms.txt"]
        assert sorted(p.name for p in tmp_path.iterdir()) == ["documentation-full-llms.txt"]

    def test_group_identifier_with_separator(self, tmp_path):
        group = create_node(NodeKind.GROUP, "auth/admin", "Admin", children=[create_node(NodeKind.ENTRY, "a", "A")])
        root = create_node(NodeKind.ROOT, "root", "Docs", children=[group])

        paths = render(root, _options(tmp_path))

        assert paths[1] == tmp_path / "documentation-auth-admin-llms.txt"
        assert paths[1].exists()

    def test_streaming_equivalence(self, tree, tmp_path):
        big = create_block(BlockKind.PROSE, "ü" * 200_000)
        root = tree.model_copy(update={
            "children": tree.children + (create_node(NodeKind.ENTRY, "big", "Big", blocks=[big]),)
        })

        buffered = render(root, _options(tmp_path / "buffered", include_metadata=True))
        streamed = render(root, _options(tmp_path / "streamed", include_metadata=True, stream_threshold=0))

        assert buffered[0].read_bytes() == streamed[0].read_bytes()
        assert len(streamed[0].read_bytes()) > 400_000
