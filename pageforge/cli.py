"""CLI entry point for pageforge."""

from __future__ import annotations

import importlib
import importlib.util
import json
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich import print as rprint
from rich.syntax import Syntax
from rich.table import Table

from pageforge.config import PageforgeConfig, load_config
from pageforge.config.loader import DEFAULT_CONFIG_TEMPLATE
from pageforge.errors import HandlerFailure
from pageforge.log import configure_logging
from pageforge.page import Page
from pageforge.sources import collect_pages
from pageforge.transformer import Transformer

app = typer.Typer(
    name="pageforge",
    help="Page transformation pipeline for static-content generation.",
)

config_app = typer.Typer(help="Manage pageforge configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: PageforgeConfig | None = None


def _get_config() -> PageforgeConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to pageforge.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    _config = load_config(config)
    configure_logging(_config.log_level, _config.log_format)


def _load_pipeline(spec: str) -> Transformer:
    """Resolve 'module:attr' or 'path/to/file.py:attr' to a Transformer.

    The attribute may be a Transformer or a zero-argument callable returning one.
    """
    target, sep, attr = spec.partition(":")
    if not sep or not target or not attr:
        raise ValueError(f"Invalid pipeline '{spec}': expected 'module:attribute'")

    if target.endswith(".py"):
        path = Path(target)
        if not path.is_file():
            raise ValueError(f"Pipeline file not found: {path}")
        module_spec = importlib.util.spec_from_file_location(path.stem, path)
        if module_spec is None or module_spec.loader is None:
            raise ValueError(f"Cannot import pipeline file: {path}")
        module = importlib.util.module_from_spec(module_spec)
        module_spec.loader.exec_module(module)
    else:
        module = importlib.import_module(target)

    obj = getattr(module, attr, None)
    if obj is None:
        raise ValueError(f"'{target}' has no attribute '{attr}'")
    if not isinstance(obj, Transformer) and callable(obj):
        obj = obj()
    if not isinstance(obj, Transformer):
        raise ValueError(f"'{spec}' is not a Transformer (got {type(obj).__name__})")
    return obj


def _page_summary(page: Page) -> dict[str, Any]:
    return {
        "src": page.src,
        "layout": page.layout,
        "ignore": page.ignore,
        "metadata": sorted(page.metadata),
        "data": sorted(page.data),
        "queries": {name: len(pages) for name, pages in page.queries.items()},
    }


def _display_pages(pages: list[Page]) -> None:
    table = Table(title=f"Pages ({len(pages)})")
    table.add_column("Source", style="cyan")
    table.add_column("Layout", style="green")
    table.add_column("Ignore", justify="center")
    table.add_column("Metadata", style="yellow")
    table.add_column("Data")
    table.add_column("Queries", style="magenta")
    for page in pages:
        summary = _page_summary(page)
        table.add_row(
            page.src,
            page.layout or "-",
            "yes" if page.ignore else "",
            ", ".join(summary["metadata"]) or "-",
            ", ".join(summary["data"]) or "-",
            ", ".join(f"{k} ({v})" for k, v in summary["queries"].items()) or "-",
        )
    rprint(table)


@app.command()
def inspect(
    source: str = typer.Argument(..., help="Directory containing page files"),
    pattern: Annotated[
        str | None, typer.Option("--pattern", "-p", help="Glob selecting page files")
    ] = None,
    pipeline: Annotated[
        str | None,
        typer.Option("--pipeline", help="Transformer to run, as module:attr or file.py:attr"),
    ] = None,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="table | json")
    ] = "table",
) -> None:
    """Collect pages from SOURCE, optionally run a pipeline, and list the result."""
    cfg = _get_config()
    if output_format not in ("table", "json"):
        rprint(f"[red]Error:[/red] unknown format '{output_format}'")
        raise typer.Exit(1)

    try:
        pages = collect_pages(source, pattern or cfg.page_pattern)
    except (OSError, ValueError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if pipeline:
        try:
            transformer = _load_pipeline(pipeline)
        except (ImportError, ValueError) as e:
            rprint(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        try:
            pages = transformer.run(pages)
        except HandlerFailure as e:
            rprint(f"[red]Pipeline failed:[/red] {e.value!r}")
            raise typer.Exit(1)
        except Exception as e:
            rprint(f"[red]Pipeline failed:[/red] {type(e).__name__}: {e}")
            raise typer.Exit(1)

    if output_format == "json":
        typer.echo(json.dumps([_page_summary(p) for p in pages], indent=2))
        return
    if not pages:
        rprint("[yellow]No pages found.[/yellow]")
        raise typer.Exit(0)
    _display_pages(pages)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default pageforge.yaml in current directory."""
    target = Path("pageforge.yaml")
    if target.exists() and not force:
        rprint("[yellow]pageforge.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
