"""CLI interface for ptdsite."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pygments.util import ClassNotFound
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.tree import Tree

from ptdsite.config import SiteConfig, load_config, merge_cli_overrides
from ptdsite.content.frontmatter import parse_document
from ptdsite.content.manager import ContentManager
from ptdsite.errors import ContentLoadError, ReloadNotAllowedError
from ptdsite.markdown import MarkdownRenderer, stylesheet

app = typer.Typer(
    name="ptdsite",
    help="Inspect the site's content index and render Markdown.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from ptdsite import __version__

        console.print(f"ptdsite {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .ptdsite.toml file."),
    ] = None,
    content_dir: Annotated[
        Optional[Path],
        typer.Option("--content-dir", "-d", help="Content root (pages/, blog/, docs/)."),
    ] = None,
    dev: Annotated[
        bool,
        typer.Option("--dev", help="Run in development mode (show unpublished posts)."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug output."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """ptdsite - content index and Markdown rendering."""
    _setup_logging(verbose)
    config = merge_cli_overrides(
        load_config(config_path),
        content_dir=content_dir,
        environment="development" if dev else None,
    )
    ctx.obj = config


def _manager(ctx: typer.Context) -> ContentManager:
    config: SiteConfig = ctx.obj
    try:
        return ContentManager.from_config(config)
    except ContentLoadError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc


def _print_stats(manager: ContentManager, as_json: bool) -> None:
    stats = manager.get_stats()
    if as_json:
        console.print_json(stats.model_dump_json())
        return
    table = Table(title=f"Content in {manager.content_dir}")
    table.add_column("Collection")
    table.add_column("Count", justify="right")
    table.add_row("Pages", str(stats.page_count))
    table.add_row("Blog posts", str(stats.blog_post_count))
    table.add_row("Documentation", str(stats.documentation_count))
    console.print(table)
    console.print(f"Last updated {stats.last_updated.isoformat(timespec='seconds')}")


@app.command()
def stats(
    ctx: typer.Context,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON.")] = False,
) -> None:
    """Show how many records each collection holds."""
    _print_stats(_manager(ctx), as_json)


@app.command()
def posts(
    ctx: typer.Context,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", min=0, help="Show at most this many posts."),
    ] = None,
) -> None:
    """List blog posts, newest first."""
    manager = _manager(ctx)
    table = Table()
    table.add_column("Date")
    table.add_column("Path")
    table.add_column("Title")
    table.add_column("Published")
    for post in manager.get_blog_posts(limit):
        table.add_row(
            post.date.isoformat(),
            post.date_slug,
            post.title,
            "yes" if post.published else "[yellow]no[/yellow]",
        )
    console.print(table)


@app.command()
def docs(ctx: typer.Context) -> None:
    """Show the documentation index by category."""
    index = _manager(ctx).get_documentation_index()
    tree = Tree("docs")
    for category, entries in index.items():
        branch = tree.add(f"[bold]{category}[/bold]")
        for entry in entries:
            label = f"{entry.title} [dim]({entry.slug})[/dim]"
            if entry.description:
                label += f" - {entry.description}"
            branch.add(label)
    console.print(tree)


@app.command()
def page(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Page slug, e.g. 'about'.")],
) -> None:
    """Print a page's HTML body."""
    found = _manager(ctx).get_page(slug)
    if found is None:
        err_console.print(f"[red]Error:[/red] no page named '{slug}'")
        raise typer.Exit(1)
    typer.echo(found.body)


@app.command()
def render(
    file: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file."),
    ],
) -> None:
    """Render a Markdown file (frontmatter stripped) to HTML on stdout."""
    doc = parse_document(file.read_text(encoding="utf-8"), source=str(file))
    typer.echo(MarkdownRenderer().render(doc.body))


@app.command()
def styles(
    style: Annotated[str, typer.Option("--style", help="Pygments style name.")] = "default",
) -> None:
    """Print the CSS for highlighted code blocks."""
    try:
        typer.echo(stylesheet(style))
    except ClassNotFound as exc:
        err_console.print(f"[red]Error:[/red] unknown style '{style}'")
        raise typer.Exit(1) from exc


@app.command()
def reload(ctx: typer.Context) -> None:
    """Rebuild the index from disk (development mode only)."""
    manager = _manager(ctx)
    try:
        manager.request_reload()
    except (ReloadNotAllowedError, ContentLoadError) as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc
    console.print("[green]Content reloaded[/green]")
    _print_stats(manager, as_json=False)


if __name__ == "__main__":
    app()
