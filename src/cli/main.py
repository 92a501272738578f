"""CLI principal (Typer).

Comandos:
- `regscope`                 sesión interactiva (Enter en vacío para salir)
- `regscope lookup TARGET`   consulta única, salida Rich o `--json`
- `regscope doctor run`      diagnóstico del entorno

La CLI solo arma dependencias y pinta; el bucle y el parser viven en `core`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_outcome_json, outcome_to_json
from adapters.whois_command import WhoisCommandGateway
from cli import doctor
from cli.ui_components import message, print_banner, print_outcome
from core.config import AppSettings
from core.domain.language import Language
from core.domain.models import QueryOutcome
from core.logging_setup import configure_logging
from core.services.query_loop import LoopHooks, QueryLoop, resolve_query

app = typer.Typer(
    add_completion=False,
    help="Look up WHOIS registration data (country, creation/update/expiry dates) for URLs and hostnames.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


@dataclass
class SessionOptions:
    settings: AppSettings
    language: Language
    show_banner: bool = True


def _load_settings(overrides: dict[str, object]) -> AppSettings:
    # Init kwargs take precedence over env vars and .env files.
    try:
        return AppSettings(**overrides)
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red]\n{escape(str(exc))}")
        raise typer.Exit(code=2) from exc


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    spanish: bool = typer.Option(False, "--spanish", help="Interfaz en español."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the welcome banner."),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0,
        help="WHOIS timeout in seconds (0 waits indefinitely).",
    ),
    whois_command: str | None = typer.Option(
        None,
        "--whois-command",
        help="Lookup command; the hostname is appended as the last argument.",
    ),
) -> None:
    """Start the interactive session when no command is given."""

    overrides: dict[str, object] = {}
    if timeout is not None:
        overrides["lookup_timeout_seconds"] = timeout
    if whois_command is not None:
        overrides["whois_command"] = whois_command
    settings = _load_settings(overrides)
    # log_level is already validated by AppSettings.
    configure_logging(settings.log_level)

    ctx.obj = SessionOptions(
        settings=settings,
        language=Language.from_flag(spanish, settings.default_language),
        show_banner=not no_banner,
    )

    if ctx.invoked_subcommand is None:
        interactive(ctx.obj)


def interactive(options: SessionOptions) -> None:
    """Bucle de consultas: una URL por iteración hasta recibir una línea vacía."""

    language = options.language
    show_raw = options.settings.show_raw_record

    if options.show_banner:
        print_banner(_console, language)
    _console.print(f"[bold]{message(language, 'welcome')}[/bold]")
    _console.print(message(language, "instructions") + "\n")

    def read_input() -> str | None:
        try:
            return _console.input(f"{message(language, 'prompt')}: ")
        except EOFError:
            return None

    def on_lookup(hostname: str) -> None:
        _console.print(message(language, "querying", hostname=escape(hostname)) + "\n")

    def on_outcome(outcome: QueryOutcome) -> None:
        print_outcome(_console, outcome, language, show_raw=show_raw)
        # Invalid input goes straight back to the prompt.
        if outcome.hostname is not None:
            _console.print("\n" + message(language, "another") + "\n", markup=False)

    def on_finished() -> None:
        _console.print(message(language, "exiting"))

    loop = QueryLoop(
        WhoisCommandGateway(options.settings),
        read_input,
        LoopHooks(lookup_started=on_lookup, outcome=on_outcome, finished=on_finished),
    )
    try:
        processed = loop.run()
    except KeyboardInterrupt:
        _console.print("\n" + message(language, "exiting"))
        raise typer.Exit(code=130)
    logger.info("Session finished after {} queries", processed)


@app.command()
def lookup(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="URL or hostname to look up."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write the JSON result to this file."),
    no_raw: bool = typer.Option(False, "--no-raw", help="Omit the raw WHOIS record."),
) -> None:
    """Look up a single URL or hostname and exit (1 if the query fails)."""

    options: SessionOptions = ctx.obj
    if not target.strip():
        raise typer.BadParameter("target must not be empty", param_hint="TARGET")

    show_raw = options.settings.show_raw_record and not no_raw
    outcome = resolve_query(target, WhoisCommandGateway(options.settings))

    if output is not None:
        export_outcome_json(outcome=outcome, output_path=output, include_raw=show_raw)
        logger.info("Wrote {}", output)

    if as_json:
        typer.echo(outcome_to_json(outcome, include_raw=show_raw))
    else:
        print_outcome(_console, outcome, options.language, show_raw=show_raw)

    if not outcome.ok:
        raise typer.Exit(code=1)


def run() -> None:
    app()
