"""
Shared fixtures for the llmdocs test suite.
"""

from pathlib import Path

import pytest

DEMO_SPEC = """\
info:
  id: demo
  title: Demo SDK
  description: Demo client library.
functions:
  - id: select
    examples:
      - id: basic
        name: Basic select
        code: let x = 1
"""

FULL_SPEC = """\
info:
  id: reference/demo
  title: Demo SDK
  description: Demo client library.
  specUrl: https://example.com/demo.yml
functions:
  - id: select
    title: Fetch data
    description: Perform a SELECT query.
    notes: Results are paginated.
    examples:
      - id: getting-your-data
        name: Getting your data
        description: Fetch every row.
        code: |
          ```swift
          let rows = try await client.from("countries").select()
          ```
        data:
          sql: create table countries (id int8 primary key);
        response: '{"data": []}'
        isSpotlight: true
  - id: insert
    title: Create data
    examples:
      - name: Insert a row
        code: "func insert() {}"
  - id: delete
    title: Delete data
"""


@pytest.fixture
def demo_spec(tmp_path: Path) -> Path:
    """Minimal spec: one operation with one example."""
    path = tmp_path / "spec.yml"
    path.write_text(DEMO_SPEC, encoding="utf-8")
    return path


@pytest.fixture
def full_spec(tmp_path: Path) -> Path:
    """Spec exercising every example field."""
    path = tmp_path / "full.yaml"
    path.write_text(FULL_SPEC, encoding="utf-8")
    return path


@pytest.fixture
def docc_catalog(tmp_path: Path) -> Path:
    """Directory of Markdown chapters, including a nested one."""
    catalog = tmp_path / "Book.docc"
    (catalog / "LanguageGuide").mkdir(parents=True)
    (catalog / "b-basics.md").write_text(
        "# The Basics\n\n## Constants\n\nUse `let`.\n", encoding="utf-8"
    )
    (catalog / "a-welcome.md").write_text(
        "# Welcome\n\nHello.\n\n<!-- draft -->\n", encoding="utf-8"
    )
    (catalog / "LanguageGuide" / "closures.md").write_text(
        "# Closures\n\n@Metadata {\n  @Available(Swift, introduced: 5.0)\n}\n\nSee <doc:Functions>.\n",
        encoding="utf-8",
    )
    (catalog / "notes.txt").write_text("not markdown", encoding="utf-8")
    return catalog
