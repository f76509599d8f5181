"""piishield CLI entry point.

Provides the `piishield` command with subcommands:
  - redact: Redact PII from a JSON document or a text file
  - scan: Report where PII lives in a JSON document (exit 1 if any)
  - mask: Mask a single value for display
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from piishield import __version__
from piishield.config.loader import ConfigValidationError, load_config
from piishield.config.schema import PIIShieldConfig
from piishield.inspect.classifier import contains_pii
from piishield.sanitize.engine import redact_pii, sanitize_text
from piishield.sanitize.masking import mask_for_display
from piishield.sanitize.models import PIICategory

app = typer.Typer(
    name="piishield",
    help="Rule-based PII redaction for logs and structured payloads.",
    no_args_is_help=True,
)

_console = Console(stderr=True)

_ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="Path to piishield.yaml. Without this, the builtin rules are used.",
    ),
]


def _version_callback(value: bool) -> None:
    if value:
        _console.print(f"piishield {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """piishield — keep PII out of your logs."""


def _load_config_or_exit(path: Path | None) -> PIIShieldConfig | None:
    if path is None:
        return None
    try:
        return load_config(path)
    except (FileNotFoundError, ConfigValidationError) as e:
        _console.print(f"[bold red]Error:[/bold red] {e}", highlight=False)
        raise typer.Exit(code=1) from e


def _read_input(path: Path) -> str:
    if not path.exists():
        _console.print(f"[bold red]Error:[/bold red] File not found: {path}", highlight=False)
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8", errors="replace")


def _parse_json(text: str) -> tuple[bool, Any]:
    """Return (True, data) for JSON input, (False, None) otherwise."""
    try:
        return True, json.loads(text)
    except json.JSONDecodeError:
        return False, None


# ---------------------------------------------------------------------------
# redact command
# ---------------------------------------------------------------------------


@app.command()
def redact(
    target: Annotated[
        Path,
        typer.Argument(help="JSON document or text file to redact."),
    ],
    config: _ConfigOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Write the redacted result here instead of stdout.",
        ),
    ] = None,
) -> None:
    """Redact PII from a file.

    JSON input is redacted structurally (sensitive field names and
    PII-shaped strings); any other file is treated as free text.

    Examples:
      piishield redact events.json                   # print redacted JSON
      piishield redact app.log -o app.clean.log      # redact free text
    """
    cfg = _load_config_or_exit(config)
    text = _read_input(target)

    is_json, data = _parse_json(text)
    if is_json:
        result = json.dumps(redact_pii(data, cfg), indent=2, ensure_ascii=False)
    else:
        result = sanitize_text(text, cfg).sanitized_text

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result if result.endswith("\n") else result + "\n", encoding="utf-8")
        _console.print(f"Redacted output written to {output}", highlight=False)
    else:
        typer.echo(result)


# ---------------------------------------------------------------------------
# scan command
# ---------------------------------------------------------------------------


@app.command()
def scan(
    target: Annotated[
        Path,
        typer.Argument(help="JSON document (or text file) to check for PII."),
    ],
    config: _ConfigOption = None,
    output_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output the detection result as JSON instead of a table.",
        ),
    ] = False,
) -> None:
    """Report every field that contains PII.

    Exits with code 1 when PII is found, so it can gate CI pipelines.

    Examples:
      piishield scan payload.json
      piishield scan payload.json --json > findings.json
    """
    cfg = _load_config_or_exit(config)
    text = _read_input(target)
    is_json, data = _parse_json(text)
    result = contains_pii(data if is_json else text, cfg)

    if output_json:
        typer.echo(json.dumps({
            "has_pii": result.has_pii,
            "fields": result.fields,
            "findings": [
                {
                    "path": f.path,
                    "category": f.category.value if f.category else None,
                    "source": f.source,
                }
                for f in result.findings
            ],
        }, indent=2))
    else:
        out = Console()
        if not result.has_pii:
            out.print(f"[#00ff88]✓ No PII found in {escape(str(target))}[/#00ff88]", highlight=False)
        else:
            table = Table(title=f"PII in {escape(str(target))}")
            table.add_column("Field")
            table.add_column("Category")
            table.add_column("Source")
            for f in result.findings:
                table.add_row(
                    escape(f.path) if f.path else "<root>",
                    f.category.value if f.category else "-",
                    f.source,
                )
            out.print(table)

    if result.has_pii:
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# mask command
# ---------------------------------------------------------------------------


@app.command()
def mask(
    value: Annotated[str, typer.Argument(help="The value to mask.")],
    category: Annotated[
        PIICategory,
        typer.Option(
            "--type",
            "-t",
            help="Kind of value: email, phone, card or name.",
            case_sensitive=False,
        ),
    ] = PIICategory.EMAIL,
) -> None:
    """Mask a single value for display.

    Examples:
      piishield mask john.doe@example.com            # j***@example.com
      piishield mask 555-123-4567 --type phone       # ***-***-4567
    """
    typer.echo(mask_for_display(value, category))
