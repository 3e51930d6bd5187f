"""
llmdocs CLI - LLM-optimized documentation generator.

Converts documentation sources into llms.txt files:
1. OpenRef-style YAML specifications (flat operation/example lists)
2. Markdown / DocC files or directories (heading trees)
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from llmdocs import __version__
from llmdocs.config import load_category_map, load_settings
from llmdocs.detector import get_detector
from llmdocs.errors import LLMDocsError
from llmdocs.generator import DocumentationGenerator

app = typer.Typer(
    name="llmdocs",
    help="Generate LLM-optimized documentation (llms.txt)",
    add_completion=False,
)

console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.command()
def generate(
    source: Path = typer.Argument(..., help="YAML spec, Markdown file, or directory of Markdown files"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (default: $LLMDOCS_OUTPUT_DIR or ./output)",
    ),
    format_name: str = typer.Option(
        "auto",
        "--format",
        "-f",
        help="Source format: auto, openref or markdown (default: auto)",
    ),
    categories: Optional[Path] = typer.Option(
        None,
        "--categories",
        "-c",
        help="JSON file mapping category names to operation ids (openref only)",
    ),
    prefix: Optional[str] = typer.Option(
        None,
        "--prefix",
        "-p",
        help="Output filename prefix (default: spec id, or 'documentation')",
    ),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Document title (default: source title)"),
    system_prompt: Optional[str] = typer.Option(None, "--system-prompt", help="Custom <SYSTEM> prompt"),
    no_metadata: bool = typer.Option(False, "--no-metadata", help="Omit the Format/Generated comment"),
    h2_as_section: bool = typer.Option(
        False,
        "--h2-as-section",
        help=(
            "Keep H2 headings of a single Markdown file as sections instead of groups. "
            "Only affects group files when the file has no H1: H2s under an H1 are "
            "nested in it and never produce group files"
        ),
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Generate llms.txt files from a documentation source.

    Writes <prefix>-full-llms.txt plus one <prefix>-<group>-llms.txt per
    top-level group.

    Example (spec with categories):
        llmdocs generate specs/supabase_swift_v2.yml \\
            --categories config/categories.json \\
            --output output

    Example (DocC catalog):
        llmdocs generate TSPL.docc --title "The Swift Programming Language"
    """
    try:
        settings = load_settings()
        _configure_logging("DEBUG" if verbose else settings.log_level)

        output_dir = output or settings.output_dir

        console.print("\n[bold cyan]📚 llms.txt Generation[/bold cyan]")
        console.print(f"Source: [cyan]{source}[/cyan]")
        console.print(f"Output: [cyan]{output_dir}[/cyan]")

        category_map = None
        if categories:
            category_map = load_category_map(categories)
            console.print(f"Categories: [green]{len(category_map)}[/green] from {categories}")

        generator = DocumentationGenerator(
            source=source,
            output_dir=output_dir,
            format_hint=format_name,
            category_map=category_map,
            filename_prefix=prefix or settings.filename_prefix,
            title=title,
            system_prompt=system_prompt,
            include_metadata=settings.include_metadata and not no_metadata,
            treat_h2_as_group=not h2_as_section,
        )

        with console.status("[bold green]Processing..."):
            result = generator.generate()

    except (LLMDocsError, OSError) as e:
        console.print(f"\n[red]❌ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print("\n[bold green]✅ Generation Complete![/bold green]\n")

    summary_table = Table(show_header=True, header_style="bold cyan")
    summary_table.add_column("Metric")
    summary_table.add_column("Value", justify="right")

    summary_table.add_row("Title", result.title)
    summary_table.add_row("Format", result.format)
    summary_table.add_row("Total Nodes", str(result.total_nodes))
    summary_table.add_row("Groups", str(result.total_groups))

    for language, count in result.languages.items():
        summary_table.add_row(f"  {language} blocks", str(count))

    console.print(summary_table)

    console.print("\n[bold]📁 Files:[/bold]")
    for path in result.output_files:
        console.print(f"   • [cyan]{path}[/cyan]")


@app.command()
def detect(
    source: Path = typer.Argument(..., help="Source file or directory"),
    format_name: str = typer.Option("auto", "--format", "-f", help="Format hint (default: auto)"),
):
    """Print the detected format of a source."""
    try:
        detected = get_detector().detect(source, format_name)
    except LLMDocsError as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(detected)


@app.command()
def formats():
    """List the registered source formats."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Format")
    table.add_column("Adapter")

    for adapter in get_detector().adapters:
        table.add_row(adapter.format, adapter.name)

    console.print(table)


@app.command()
def version():
    """Print the llmdocs version."""
    console.print(f"llmdocs {__version__}")


if __name__ == "__main__":
    app()
