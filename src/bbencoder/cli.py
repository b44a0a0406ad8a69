"""Command-line interface for BB Encoder."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from bbencoder import __version__
from bbencoder.config import get_settings
from bbencoder.core.converter import ConversionError, DocumentConverter
from bbencoder.formats import SUPPORTED_EXTENSIONS
from bbencoder.formatting.encoder import EncoderOptions

OUTPUT_SUFFIX = ".bbcode.txt"

app = typer.Typer(
    name="bbencoder",
    help="Convert styled text documents to BBCode markup.",
    add_completion=False,
)
# Status output goes to stderr so stdout carries only markup
console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"BB Encoder v{__version__}")
        raise typer.Exit()


def generate_output_path(input_path: Path, output_dir: Optional[Path] = None) -> Path:
    """Generate output path by appending .bbcode.txt to the file name.

    The source extension stays in the name so that notes.md and
    notes.html in one folder do not write to the same file.
    """
    output_name = f"{input_path.name}{OUTPUT_SUFFIX}"

    if output_dir:
        return output_dir / output_name
    return input_path.parent / output_name


def build_options(
    code: Optional[bool],
    tabs: Optional[bool],
    strike_full_word: Optional[bool],
    tab_width: Optional[int],
) -> EncoderOptions:
    """Merge command-line flags over the configured defaults."""
    defaults = get_settings().encoder_options()
    return EncoderOptions(
        enclose_in_code_tags=defaults.enclose_in_code_tags if code is None else code,
        replace_tabs_with_spaces=(
            defaults.replace_tabs_with_spaces if tabs is None else tabs
        ),
        use_strike_full_word=(
            defaults.use_strike_full_word
            if strike_full_word is None
            else strike_full_word
        ),
        tab_width=defaults.tab_width if tab_width is None else tab_width,
    )


def process_file(
    converter: DocumentConverter,
    input_path: Path,
    output_path: Optional[Path],
    verbose: bool,
) -> bool:
    """Convert a single file. Prints markup when output_path is None.

    Returns True on success.
    """
    if verbose:
        console.print(f"[blue]Reading:[/blue] {input_path}")

    try:
        document = converter.read_document(input_path)
        if verbose:
            title = document.metadata.get("title")
            if title:
                console.print(f"[blue]Title:[/blue] {escape(title)}")
            console.print(f"[blue]Characters:[/blue] {len(document)}")

        markup = converter.convert_document(document)
        if output_path is not None:
            converter.write_markup(markup, output_path)
    except ConversionError as e:
        console.print(f"[red]Error:[/red] {e}")
        if verbose:
            console.print_exception()
        return False

    if output_path is None:
        typer.echo(markup)
    else:
        console.print(f"[green]Written:[/green] {output_path}")
    return True


def process_folder(
    converter: DocumentConverter,
    folder_path: Path,
    output_dir: Optional[Path],
    verbose: bool,
    recursive: bool = True,
) -> tuple[int, int]:
    """Convert all supported files in a folder. Returns (success_count, fail_count)."""
    files: list[Path] = []
    for ext in SUPPORTED_EXTENSIONS:
        if recursive:
            files.extend(folder_path.rglob(f"*{ext}"))
        else:
            files.extend(folder_path.glob(f"*{ext}"))

    # Skip our own output files
    files = sorted(f for f in files if not f.name.endswith(OUTPUT_SUFFIX))

    if not files:
        console.print(
            f"[yellow]No supported files found in {folder_path}[/yellow]\n"
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
        return 0, 0

    console.print(f"[blue]Found {len(files)} file(s) to convert[/blue]")

    success_count = 0
    fail_count = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Converting files...", total=len(files))

        for file_path in files:
            progress.update(task, description=f"Converting {file_path.name}...")
            output_path = generate_output_path(file_path, output_dir)
            if process_file(converter, file_path, output_path, verbose):
                success_count += 1
            else:
                fail_count += 1
            progress.advance(task)

    return success_count, fail_count


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="File or folder to convert",
        exists=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file, or output directory (default: print to stdout)",
    ),
    code: Optional[bool] = typer.Option(
        None,
        "--code/--no-code",
        help="Enclose the output in BBCode code tags",
    ),
    tabs: Optional[bool] = typer.Option(
        None,
        "--tabs/--no-tabs",
        help="Replace tab characters with spaces",
    ),
    strike_full_word: Optional[bool] = typer.Option(
        None,
        "--strike-full-word/--no-strike-full-word",
        help="Extend strikethrough to cover whole words",
    ),
    tab_width: Optional[int] = typer.Option(
        None,
        "--tab-width",
        min=1,
        max=16,
        help="Spaces per tab when --tabs is on (default: 4)",
    ),
    recursive: bool = typer.Option(
        True,
        "--recursive/--no-recursive",
        help="Include subfolders in folder mode",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
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
    Convert styled documents (.docx, .html, .md, .rtf, .txt) to BBCode.

    Examples:

        python bbencode.py notes.docx

        python bbencode.py page.html -o page.bbcode.txt

        python bbencode.py snippet.md --code --tabs

        python bbencode.py /path/to/folder  # Writes <name>.<ext>.bbcode.txt files
    """
    options = build_options(code, tabs, strike_full_word, tab_width)
    converter = DocumentConverter(options)

    if verbose:
        console.print(
            f"[blue]Options:[/blue] code={options.enclose_in_code_tags} "
            f"tabs={options.replace_tabs_with_spaces} "
            f"strike_full_word={options.use_strike_full_word} "
            f"tab_width={options.tab_width}"
        )

    if path.is_file():
        # Single file mode
        output_path = output
        if output is not None and output.is_dir():
            output_path = generate_output_path(path, output)
        success = process_file(converter, path, output_path, verbose)
        raise typer.Exit(0 if success else 1)

    # Folder mode
    if output is not None and not output.is_dir():
        console.print(
            "[yellow]Warning:[/yellow] --output must be a directory in folder mode. "
            "Files will be saved alongside originals."
        )
        output = None

    success, fail = process_folder(converter, path, output, verbose, recursive)
    console.print(f"\n[bold]Complete:[/bold] {success} succeeded, {fail} failed")
    raise typer.Exit(0 if fail == 0 else 1)


if __name__ == "__main__":
    app()
