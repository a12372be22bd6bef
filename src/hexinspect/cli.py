from dataclasses import asdict
from pathlib import Path

import orjson
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hexinspect.errors import FileStateError, ShortBufferError
from hexinspect.files import FileRegistry
from hexinspect.report import inspect_range, views_to_arrow, views_to_jsonl
from hexinspect.settings import AppSettings, default_settings_path, load_settings, save_settings
from hexinspect.views import CHAR_ENCODINGS, SCALAR_KINDS, TEXT_FIELDS, ScalarView, TextView

app = typer.Typer(help="Inspect raw bytes as numbers and text, in both byte orders.")
settings_app = typer.Typer(help="Show or change persisted settings.")
console = Console()
DUMP_FORMATS = {"jsonl", "arrow"}

app.add_typer(settings_app, name="settings")

CONFIG_OPTION = typer.Option(
    None, "--config", help="Settings file (defaults to $HEXINSPECT_CONFIG or ~/.config)."
)


def _require_file(path: Path) -> Path:
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    return path


def _load_settings(config: Path | None) -> AppSettings:
    try:
        return load_settings(config)
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid settings: {exc}") from exc


def _print_json(payload: object) -> None:
    console.print(
        orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode(),
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


def _show(text: str) -> str:
    # keep control characters visible in the terminal
    return escape(repr(text)[1:-1])


def _scalar_table(view: ScalarView, offset: int) -> Table:
    table = Table(title=f"Offset {offset} (0x{offset:X})")
    table.add_column("Type")
    table.add_column("Little endian", justify="right")
    table.add_column("Big endian", justify="right")
    for kind in SCALAR_KINDS:
        table.add_row(kind, view.value(kind, "little"), view.value(kind, "big"))
    for encoding in CHAR_ENCODINGS:
        table.add_row(
            f"char {encoding}",
            _show(view.char(encoding, "little")),
            _show(view.char(encoding, "big")),
        )
    return table


def _load_window(registry: FileRegistry, path: Path, offset: int) -> int:
    index = registry.open_file(path)
    try:
        registry.read_file(index, offset)
    except FileStateError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return index


@app.command()
def inspect(
    input: Path = typer.Argument(..., help="File to inspect."),
    offset: int = typer.Option(0, "--offset", "-s", help="Byte offset of the cursor."),
    as_json: bool = typer.Option(False, "--json", help="Emit the raw field mapping as JSON."),
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Show every numeric and single-character reading at an offset."""
    settings = _load_settings(config)
    with FileRegistry(window_size=settings.window_size) as registry:
        index = _load_window(registry, _require_file(input), offset)
        try:
            view = registry.get_data_in_position(index, offset)
        except FileStateError as exc:
            raise typer.BadParameter(str(exc)) from exc
        except ShortBufferError as exc:
            console.print(f"[bold red]Cannot decode at offset {offset}:[/] {exc}")
            raise typer.Exit(code=1) from exc

    if as_json:
        _print_json(view.to_dict())
    else:
        console.print(_scalar_table(view, offset))


@app.command()
def text(
    input: Path = typer.Argument(..., help="File to preview."),
    offset: int = typer.Option(0, "--offset", "-s", help="Start of the buffered window."),
    as_json: bool = typer.Option(False, "--json", help="Emit the raw field mapping as JSON."),
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Render the buffered window under every text encoding."""
    settings = _load_settings(config)
    with FileRegistry(window_size=settings.window_size) as registry:
        index = _load_window(registry, _require_file(input), offset)
        view: TextView = registry.get_text_data_in_position(index)

    if as_json:
        _print_json(view.to_dict())
        return
    for name in TEXT_FIELDS:
        console.print(f"[bold]{name}[/]")
        console.print(_show(getattr(view, name)))


@app.command()
def dump(
    input: Path = typer.Argument(..., help="File to scan."),
    output: Path = typer.Option(..., "--output", "-o", help="Where to write the export."),
    start: int = typer.Option(0, "--start", help="First offset to decode."),
    count: int | None = typer.Option(None, "--count", "-c", help="Number of offsets to decode."),
    format: str = typer.Option("jsonl", "--format", "-f", help="Output format: jsonl | arrow."),
) -> None:
    """Decode scalar readings at consecutive offsets and export them."""
    fmt = format.lower()
    if fmt not in DUMP_FORMATS:
        raise typer.BadParameter(f"Unsupported format '{format}'. Choose from {DUMP_FORMATS}.")
    data = _require_file(input).read_bytes()
    console.print(f"[bold green]Read[/] {len(data)} bytes from {input}")

    rows = inspect_range(data, start=start, count=count)
    written = views_to_arrow(rows, output) if fmt == "arrow" else views_to_jsonl(rows, output)
    console.print(f"[bold green]Wrote[/] {written} rows to {output}")


@settings_app.command("show")
def settings_show(config: Path | None = CONFIG_OPTION) -> None:
    """Print the effective settings."""
    path = config or default_settings_path()
    settings = _load_settings(path)
    console.print(f"[bold]Settings file:[/] {path}")
    _print_json(asdict(settings))


@settings_app.command("set")
def settings_set(
    key: str = typer.Argument(..., help="Setting name, e.g. dark_mode."),
    value: str = typer.Argument(..., help="New value (YAML scalar syntax)."),
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Change one setting and persist it."""
    path = config or default_settings_path()
    try:
        updated: AppSettings = load_settings(path).updated(key, value)
    except KeyError as exc:
        raise typer.BadParameter(f"Unknown setting '{key}'") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if not save_settings(updated, path):
        console.print(f"[bold red]Could not write settings[/] to {path}")
        raise typer.Exit(code=1)
    console.print(f"[bold green]Saved settings[/] to {path}")


if __name__ == "__main__":
    app()
