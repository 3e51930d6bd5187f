"""
Integration tests for the CLI.
"""

import json

import pytest
from typer.testing import CliRunner

from llmdocs import __version__
from llmdocs.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for name in ["LLMDOCS_OUTPUT_DIR", "LLMDOCS_FILENAME_PREFIX", "LLMDOCS_INCLUDE_METADATA", "LLMDOCS_LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestGenerate:
    def test_spec(self, demo_spec, tmp_path):
        out = tmp_path / "out"

        result = runner.invoke(app, ["generate", str(demo_spec), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert (out / "demo-full-llms.txt").exists()
        assert "Generation Complete" in result.output

    def test_default_output_dir(self, demo_spec, tmp_path):
        result = runner.invoke(app, ["generate", str(demo_spec)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "output" / "demo-full-llms.txt").exists()

    def test_categories_and_options(self, demo_spec, tmp_path):
        categories = tmp_path / "categories.json"
        categories.write_text(json.dumps({"db": ["select"]}), encoding="utf-8")
        out = tmp_path / "out"

        result = runner.invoke(app, [
            "generate", str(demo_spec),
            "--output", str(out),
            "--categories", str(categories),
            "--prefix", "sdk",
            "--title", "Demo",
            "--no-metadata",
        ])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.iterdir()) == ["sdk-db-llms.txt", "sdk-full-llms.txt"]
        full = (out / "sdk-full-llms.txt").read_text(encoding="utf-8")
        assert "<!--" not in full
        assert "# Demo\n\n## 1. db\n\n" in full

    def test_h2_as_section(self, tmp_path):
        source = tmp_path / "guide.md"
        source.write_text("## Install\n\nRun it.\n", encoding="utf-8")
        out = tmp_path / "out"

        result = runner.invoke(app, ["generate", str(source), "-o", str(out), "--h2-as-section"])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.iterdir()) == ["documentation-full-llms.txt"]

    def test_h1_file_nests_h2_without_group_files(self, tmp_path):
        source = tmp_path / "guide.md"
        source.write_text("# Guide\n\n## Basics\n\nA.\n\n## Advanced\n\nB.\n", encoding="utf-8")
        out = tmp_path / "out"

        result = runner.invoke(app, ["generate", str(source), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.iterdir()) == ["documentation-full-llms.txt"]

    def test_h2_as_section_help_mentions_h1(self):
        result = runner.invoke(app, ["generate", "--help"])

        assert result.exit_code == 0
        assert "H1" in result.output

    def test_prefix_from_environment(self, demo_spec, tmp_path, monkeypatch):
        monkeypatch.setenv("LLMDOCS_FILENAME_PREFIX", "envprefix")
        out = tmp_path / "out"

        result = runner.invoke(app, ["generate", str(demo_spec), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert (out / "envprefix-full-llms.txt").exists()

    def test_missing_source(self, tmp_path):
        result = runner.invoke(app, ["generate", str(tmp_path / "missing.yml")])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_bad_category_file(self, demo_spec, tmp_path):
        categories = tmp_path / "categories.json"
        categories.write_text("[1, 2]", encoding="utf-8")

        result = runner.invoke(app, ["generate", str(demo_spec), "-c", str(categories)])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unsupported_format(self, demo_spec):
        result = runner.invoke(app, ["generate", str(demo_spec), "--format", "asciidoc"])

        assert result.exit_code == 1
        assert "Unsupported format" in result.output


class TestDetect:
    def test_spec(self, demo_spec):
        result = runner.invoke(app, ["detect", str(demo_spec)])
        assert result.exit_code == 0
        assert result.output.strip() == "openref"

    def test_docc_directory(self, docc_catalog):
        result = runner.invoke(app, ["detect", str(docc_catalog)])
        assert result.exit_code == 0
        assert result.output.strip() == "markdown"

    def test_hint(self, demo_spec):
        result = runner.invoke(app, ["detect", str(demo_spec), "--format", "markdown"])
        assert result.output.strip() == "markdown"

    def test_undetectable(self, tmp_path):
        source = tmp_path / "notes.txt"
        source.write_text("hello", encoding="utf-8")

        result = runner.invoke(app, ["detect", str(source)])

        assert result.exit_code == 1
        assert "Unable to detect format" in result.output


class TestFormatsAndVersion:
    def test_formats(self):
        result = runner.invoke(app, ["formats"])
        assert result.exit_code == 0
        assert "openref" in result.output
        assert "markdown" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output
