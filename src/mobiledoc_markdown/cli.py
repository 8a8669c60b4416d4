"""Command-line interface for mobiledoc-markdown."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from mobiledoc_markdown import __version__
from mobiledoc_markdown.config import get_settings
from mobiledoc_markdown.core.renderer import RendererFactory, handler_for_policy
from mobiledoc_markdown.errors import MobiledocRenderError

app = typer.Typer(
    name="mobiledoc-md",
    help="Render Mobiledoc JSON documents to Markdown.",
    add_completion=False,
)
console = Console()

INPUT_SUFFIX = ".json"


def version_callback(value: bool) -> None:
    """Eager `--version` callback."""
    if value:
        console.print(f"mobiledoc-markdown v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich; DEBUG when verbose."""
    level = "DEBUG" if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def generate_output_path(input_path: Path, output_dir: Optional[Path] = None) -> Path:
    """Generate the Markdown output path for a Mobiledoc file."""
    output_name = f"{input_path.stem}{get_settings().output_suffix}"

    if output_dir:
        return output_dir / output_name
    return input_path.parent / output_name


def process_file(
    factory: RendererFactory,
    input_path: Path,
    output_path: Optional[Path],
    verbose: bool,
    to_stdout: bool = False,
) -> bool:
    """Render a single file. Returns True on success."""
    if not input_path.exists():
        console.print(f"[red]Error:[/red] {input_path} does not exist")
        return False

    if input_path.suffix.lower() != INPUT_SUFFIX:
        console.print(f"[yellow]Skipping[/yellow] {input_path.name}: not a {INPUT_SUFFIX} file")
        return False

    if output_path is None and not to_stdout:
        output_path = generate_output_path(input_path)

    if verbose:
        console.print(f"[blue]Rendering:[/blue] {input_path}")
        if output_path is not None:
            console.print(f"[blue]Output:[/blue] {output_path}")

    try:
        rendered = factory.render_file(input_path, output_path)
    except Exception as e:
        console.print(f"[red]Error rendering {input_path.name}:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        return False

    try:
        if to_stdout:
            typer.echo(rendered.result, nl=False)
        else:
            console.print(f"[green]Success:[/green] {output_path}")
    finally:
        rendered.teardown()

    return True


def process_folder(
    factory: RendererFactory,
    folder_path: Path,
    verbose: bool,
    recursive: bool = True,
) -> tuple[int, int]:
    """Render each `.json` document under *folder_path* next to its source.

    Returns:
        (rendered, failed) file counts
    """
    if not folder_path.is_dir():
        console.print(f"[red]Error:[/red] {folder_path} is not a folder")
        return 0, 0

    pattern = f"*{INPUT_SUFFIX}"
    files = sorted(folder_path.rglob(pattern) if recursive else folder_path.glob(pattern))

    if not files:
        console.print(f"[yellow]No {INPUT_SUFFIX} files found in {folder_path}[/yellow]")
        return 0, 0

    console.print(f"[blue]Rendering {len(files)} Mobiledoc document(s)[/blue]")

    outcomes: list[bool] = []
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Rendering", total=len(files))
        for json_path in files:
            progress.update(task, description=json_path.name)
            outcomes.append(process_file(factory, json_path, None, verbose))
            progress.advance(task)

    rendered = sum(outcomes)
    return rendered, len(outcomes) - rendered


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="Mobiledoc .json file or folder to render",
        exists=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Markdown file to write (file mode only)",
    ),
    stdout: bool = typer.Option(
        False,
        "--stdout",
        help="Print the Markdown instead of writing a file (single file only)",
    ),
    unknown_cards: Optional[str] = typer.Option(
        None,
        "--unknown-cards",
        help="What to do with cards that have no plugin: error or skip",
    ),
    unknown_atoms: Optional[str] = typer.Option(
        None,
        "--unknown-atoms",
        help="What to do with atoms that have no plugin: error, skip or value",
    ),
    recursive: bool = typer.Option(
        True,
        "--recursive/--no-recursive",
        help="Descend into subfolders in folder mode",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log each file and debug details",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Render Mobiledoc documents (0.2.0 and 0.3.0) to Markdown.

    Examples:

        mobiledoc-md post.json

        mobiledoc-md post.json -o post.md

        mobiledoc-md post.json --stdout

        mobiledoc-md /path/to/folder --unknown-cards skip

        mobiledoc-md post.json --unknown-atoms value  # atoms render as their text
    """
    settings = get_settings()
    configure_logging(verbose)

    try:
        factory = RendererFactory(
            unknown_card_handler=handler_for_policy(
                unknown_cards or settings.unknown_cards, "card"
            ),
            unknown_atom_handler=handler_for_policy(
                unknown_atoms or settings.unknown_atoms, "atom"
            ),
        )
    except MobiledocRenderError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if path.is_file():
        success = process_file(factory, path, output, verbose, to_stdout=stdout)
        raise typer.Exit(0 if success else 1)

    if output is not None or stdout:
        console.print(
            "[yellow]Warning:[/yellow] folder mode writes each .md beside its .json; "
            "--output and --stdout do not apply"
        )

    success, fail = process_folder(factory, path, verbose, recursive=recursive)
    console.print(f"\n[bold]Complete:[/bold] {success} succeeded, {fail} failed")
    raise typer.Exit(0 if fail == 0 else 1)


if __name__ == "__main__":
    app()
