"""Parser heurístico de registros WHOIS en texto libre.

Cada registro (Verisign, registradores, ccTLDs) usa etiquetas y formatos de
fecha distintos. En vez de un parser por registro, evaluamos cada línea
contra una tabla ordenada de etiquetas (`FIELD_MATCHERS`) y una tabla de
formatos de fecha (`DATE_LAYOUTS`). Añadir una etiqueta o formato es editar
una tabla.

Reglas:
- Las líneas se recortan y se evalúan en orden; la última coincidencia gana
  (algunos registros repiten bloques por cada sección de registrador).
- Las fechas se validan contra el calendario al final; una fecha imposible
  deja el campo vacío.
- `parse_record` nunca lanza excepciones.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Sequence

from core.domain.models import ParsedRecord, RawRecord


@dataclass(frozen=True)
class DateLayout:
    pattern: re.Pattern[str]
    separator: str


DATE_LAYOUTS: Sequence[DateLayout] = (
    DateLayout(re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII), "-"),
    DateLayout(re.compile(r"\d{4}/\d{2}/\d{2}", re.ASCII), "/"),
)


def extract_date(line: str) -> str | None:
    """Return the first recognizable date in `line` as `YYYY-MM-DD`.

    Only numeric year-first layouts are recognized; anything else
    (e.g. `15-sep-1997`) yields None.
    """

    for layout in DATE_LAYOUTS:
        match = layout.pattern.search(line)
        if match:
            return match.group(0).replace(layout.separator, "-")
    return None


def to_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def extract_label_value(line: str) -> str | None:
    """Value after the first `:` of a `Label: value` line, or None if empty."""

    _, sep, value = line.partition(":")
    if not sep:
        return None
    value = value.strip()
    return value or None


def _contains(*labels: str) -> Callable[[str], bool]:
    lowered = tuple(label.lower() for label in labels)
    return lambda line: any(label in line for label in lowered)


def _starts_with(label: str) -> Callable[[str], bool]:
    lowered = label.lower()
    return lambda line: line.startswith(lowered)


@dataclass(frozen=True)
class FieldMatcher:
    """One row of the label table.

    `predicates` receive the lowercased line; `extract` receives the trimmed
    original line so values keep their case.
    """

    field: str
    predicates: tuple[Callable[[str], bool], ...]
    extract: Callable[[str], str | None]

    def matches(self, lowered_line: str) -> bool:
        return any(predicate(lowered_line) for predicate in self.predicates)


FIELD_MATCHERS: Sequence[FieldMatcher] = (
    FieldMatcher(
        field="registrant_country",
        predicates=(_contains("registrant country:"), _starts_with("country:")),
        extract=extract_label_value,
    ),
    FieldMatcher(
        field="creation_date",
        predicates=(_contains("created on:", "creation date:", "registered on:"),),
        extract=extract_date,
    ),
    FieldMatcher(
        field="updated_date",
        predicates=(_contains("updated on:", "last updated on:", "updated date:"),),
        extract=extract_date,
    ),
    FieldMatcher(
        field="expiry_date",
        predicates=(_contains("expiration date:", "expires on:", "expiry date:"),),
        extract=extract_date,
    ),
)

_DATE_FIELDS = ("creation_date", "updated_date", "expiry_date")


def scan_fields(
    raw: RawRecord,
    matchers: Sequence[FieldMatcher] = FIELD_MATCHERS,
) -> dict[str, str]:
    """Raw string value per field, last match wins."""

    found: dict[str, str] = {}
    for raw_line in raw.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        lowered = line.lower()
        for matcher in matchers:
            if not matcher.matches(lowered):
                continue
            value = matcher.extract(line)
            if value:
                found[matcher.field] = value
    return found


def parse_record(raw: RawRecord) -> ParsedRecord:
    """Extract country and creation/update/expiry dates from a WHOIS record."""

    found = scan_fields(raw)
    values: dict[str, object] = {"registrant_country": found.get("registrant_country")}
    for name in _DATE_FIELDS:
        values[name] = to_date(found.get(name))
    return ParsedRecord(**values)
