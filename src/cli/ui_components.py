"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar el bucle de consultas con detalles visuales.
- La sesión interactiva y `regscope lookup` pintan el mismo resultado.
"""

from __future__ import annotations

from datetime import date

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from core.domain.language import Language
from core.domain.models import ParsedRecord, QueryOutcome

NOT_AVAILABLE = "N/A"

_MESSAGES: dict[Language, dict[str, str]] = {
    Language.ENGLISH: {
        "subtitle": "WHOIS registration lookup",
        "welcome": "Welcome to the WHOIS lookup system.",
        "instructions": "Enter a URL or hostname (or press Enter on an empty line to quit):",
        "prompt": "URL",
        "querying": "Querying WHOIS for [yellow]{hostname}[/yellow]...",
        "invalid": "Invalid URL. Please try again.",
        "another": "Do you want to look up another URL?\nIf so, type it below. Otherwise press Enter on an empty line to quit.",
        "exiting": "Exiting...",
        "title": "WHOIS - Full record",
        "country": "Registrant country",
        "created": "Creation date",
        "updated": "Last updated",
        "expires": "Expiry date",
    },
    Language.SPANISH: {
        "subtitle": "Consultas de registro WHOIS",
        "welcome": "Bienvenido al sistema de consultas WHOIS.",
        "instructions": "Por favor, ingresa la URL (o presiona Enter en vacío para salir):",
        "prompt": "URL",
        "querying": "Consultando WHOIS para [yellow]{hostname}[/yellow]...",
        "invalid": "URL inválida. Por favor intenta nuevamente.",
        "another": "¿Deseas consultar otra URL?\nSi es así, escríbela a continuación. De lo contrario, presiona Enter en vacío para salir.",
        "exiting": "Saliendo del programa...",
        "title": "WHOIS - Información completa",
        "country": "País registrante",
        "created": "Fecha de creación",
        "updated": "Fecha de actualización",
        "expires": "Fecha de expiración",
    },
}


def message(language: Language, key: str, **values: str) -> str:
    template = _MESSAGES[language][key]
    return template.format(**values) if values else template


def format_date(value: date | None) -> str:
    return value.isoformat() if value else NOT_AVAILABLE


def print_banner(console: Console, language: Language = Language.ENGLISH) -> None:
    """Imprime el banner de bienvenida.

    Se puede desactivar con `--no-banner` (pipes, grabaciones de terminal).
    """

    title = Text("REGSCOPE", style="bold cyan")
    subtitle = Text(message(language, "subtitle"), style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_record_table(parsed: ParsedRecord, language: Language = Language.ENGLISH) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Field", style="bold green", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row(message(language, "country") + ":", parsed.registrant_country or NOT_AVAILABLE)
    table.add_row(message(language, "created") + ":", format_date(parsed.creation_date))
    table.add_row(message(language, "updated") + ":", format_date(parsed.updated_date))
    table.add_row(message(language, "expires") + ":", format_date(parsed.expiry_date))
    return table


def build_record_panel(
    outcome: QueryOutcome,
    language: Language = Language.ENGLISH,
    *,
    show_raw: bool = True,
) -> Panel:
    """Panel con el registro crudo (cian) y los campos extraídos (verde)."""

    assert outcome.parsed is not None
    parts: list[object] = []
    if show_raw and outcome.raw:
        parts.append(Text(outcome.raw.rstrip("\n"), style="cyan"))
        parts.append(Rule(style="blue"))
    parts.append(build_record_table(outcome.parsed, language))

    title = Text(message(language, "title"), style="bold blue")
    if outcome.hostname:
        title.append(f" · {outcome.hostname}", style="yellow")
    return Panel(Group(*parts), title=title, border_style="blue")


def print_outcome(
    console: Console,
    outcome: QueryOutcome,
    language: Language = Language.ENGLISH,
    *,
    show_raw: bool = True,
) -> None:
    if outcome.failure is not None:
        if outcome.hostname is None:
            console.print(message(language, "invalid"), style="red", markup=False)
        else:
            console.print(outcome.failure.reason, style="red", markup=False, highlight=False)
        return
    console.print(build_record_panel(outcome, language, show_raw=show_raw))
