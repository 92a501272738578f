"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil

import typer
from rich.console import Console
from rich.table import Table

from adapters.whois_command import WhoisCommandGateway
from core.config import AppSettings, get_user_env_file
from core.domain.models import LookupFailure
from core.services.hostname import normalize_hostname
from core.services.record_parser import parse_record

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_command(settings: AppSettings) -> tuple[bool, str]:
    command = WhoisCommandGateway(settings).command
    if not command:
        return False, "REGSCOPE_WHOIS_COMMAND is empty"
    path = shutil.which(command[0])
    if path is None:
        return False, f"{command[0]!r} not found in PATH"
    return True, path


def _check_probe(settings: AppSettings, target: str) -> tuple[bool, str]:
    """Run one real lookup and report how many fields the parser recognized."""

    hostname = normalize_hostname(target)
    if hostname is None:
        return False, f"invalid probe target {target!r}"
    response = WhoisCommandGateway(settings).lookup(hostname)
    if isinstance(response, LookupFailure):
        return False, f"{response.kind.value}: {response.reason}"
    parsed = parse_record(response)
    recognized = sum(
        value is not None
        for value in (parsed.registrant_country, parsed.creation_date, parsed.updated_date, parsed.expiry_date)
    )
    return True, f"{hostname}: {len(response.splitlines())} lines, {recognized}/4 fields recognized"


@app.command()
def run(
    ctx: typer.Context,
    probe: str | None = typer.Option(
        None,
        "--probe",
        help="Also run a live lookup for this domain (e.g. example.com).",
    ),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    # Inherit CLI overrides (--timeout, --whois-command) when run under the main app.
    settings = getattr(ctx.obj, "settings", None) or AppSettings()

    table = Table(title="regscope doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_cmd, detail_cmd = _check_command(settings)
    table.add_row("WHOIS command", "OK" if ok_cmd else "FAIL", detail_cmd)

    if settings.lookup_timeout is None:
        table.add_row("Lookup timeout", "WARN", "disabled: a hung whois blocks the session")
    else:
        table.add_row("Lookup timeout", "OK", f"{settings.lookup_timeout:g}s")
    table.add_row("Language", "OK", settings.default_language.label())

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    ok_probe = True
    if probe:
        ok_probe, detail_probe = _check_probe(settings, probe)
        table.add_row("Live lookup", "OK" if ok_probe else "FAIL", detail_probe)

    _console.print(table)

    if not ok_cmd:
        _console.print(
            "\n[yellow]Note:[/yellow] install the `whois` package (e.g. `apt install whois`) "
            "or point REGSCOPE_WHOIS_COMMAND at a compatible client."
        )
    if not (ok_cmd and ok_probe):
        raise typer.Exit(code=1)
