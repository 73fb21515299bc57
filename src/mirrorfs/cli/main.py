"""Main CLI entry point for mirrorfs.

Provides read-only browsing of a local directory or cloud prefix through a
MirrorCache.
"""

import logging
import sys
from typing import Optional

import click
import orjson
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from mirrorfs.cache import MirrorCache, enumerate_directory, walk
from mirrorfs.config import MirrorConfig, build_cache
from mirrorfs.storage import MirrorError

# Global console for Rich output
console = Console()


def open_cache(ctx: click.Context) -> MirrorCache:
    """Build a read-only cache from the configuration stored on the context."""
    config: MirrorConfig = ctx.obj["config"]
    return build_cache(config)


def fail(message: str) -> None:
    console.print(f"[red]✗[/red] {escape(message)}", style="red")
    sys.exit(1)


@click.group()
@click.option(
    "--root",
    "-C",
    type=str,
    help="Directory or cloud URL to mirror (default: MIRRORFS_ROOT or current directory)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default: MIRRORFS_LOG_LEVEL or WARNING)",
)
@click.pass_context
def cli(ctx, root: Optional[str], log_level: Optional[str]):
    """mirrorfs CLI - browse a file tree through a lazy in-memory mirror.

    The root comes from --root/-C, then the MIRRORFS_ROOT environment
    variable, then the current directory.
    """
    config = MirrorConfig.from_env()
    if root:
        config.root = root
    if log_level:
        config.log_level = log_level.upper()
    # The CLI never mutates the backing store
    config.read_only = True

    logging.basicConfig(level=config.log_level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command("stat")
@click.argument("path", default="/")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text")
@click.pass_context
def stat_command(ctx, path, as_json):
    """Show whether PATH is a file or a directory."""
    cache = open_cache(ctx)
    try:
        entry = cache.get(path)
    except (MirrorError, ValueError) as e:
        fail(f"Error: {e}")

    if entry is None:
        fail(f"Not found: {path}")

    kind = "file" if entry.is_file() else "directory"
    if as_json:
        click.echo(orjson.dumps({"path": str(entry.path()), "kind": kind}).decode())
    else:
        console.print(f"{escape(str(entry.path()))}: {kind}")


@cli.command("ls")
@click.argument("path", default="/")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def ls_command(ctx, path, as_json):
    """List the children of directory PATH."""
    cache = open_cache(ctx)
    try:
        children = enumerate_directory(cache, path)
    except NotADirectoryError:
        fail(f"Not a directory: {path}")
    except (MirrorError, ValueError) as e:
        fail(f"Error: {e}")

    if children is None:
        fail(f"Not found: {path}")

    if as_json:
        rows = [
            {
                "name": child.path().name,
                "path": str(child.path()),
                "kind": "file" if child.is_file() else "directory",
            }
            for child in children
        ]
        click.echo(orjson.dumps(rows, option=orjson.OPT_INDENT_2).decode())
        return

    if not children:
        console.print("[yellow]Empty directory[/yellow]")
        return

    table = Table(title=escape(str(path)))
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    for child in children:
        name = child.path().name + ("/" if child.is_directory() else "")
        table.add_row(escape(name), "file" if child.is_file() else "directory")
    console.print(table)


@cli.command("cat")
@click.argument("path")
@click.pass_context
def cat_command(ctx, path):
    """Write the contents of file PATH to stdout."""
    cache = open_cache(ctx)
    try:
        entry = cache.get(path)
        if entry is None:
            fail(f"Not found: {path}")
        if entry.is_directory():
            fail(f"Is a directory: {path}")
        contents = entry.contents(cache)
    except (MirrorError, ValueError) as e:
        fail(f"Error: {e}")

    if contents is None:
        fail(f"Not found: {path}")
    click.echo(contents, nl=False)


@cli.command("tree")
@click.argument("path", default="/")
@click.option("--depth", "-d", type=int, default=None, help="Maximum depth to show")
@click.pass_context
def tree_command(ctx, path, depth):
    """Show the directory tree below PATH."""
    cache = open_cache(ctx)
    nodes = {}
    root_node = None
    try:
        for level, entry in walk(cache, path, max_depth=depth):
            name = entry.path().name
            label = escape(name or str(entry.path()))
            if entry.is_directory():
                suffix = "/" if name else ""
                label = f"[bold blue]{label}{suffix}[/bold blue]"
            if root_node is None:
                root_node = Tree(label)
                node = root_node
            else:
                node = nodes[level - 1].add(label)
            nodes[level] = node
    except (MirrorError, ValueError) as e:
        fail(f"Error: {e}")

    if root_node is None:
        fail(f"Not found: {path}")
    console.print(root_node)


if __name__ == "__main__":
    cli()
