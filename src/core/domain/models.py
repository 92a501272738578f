"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- El invariante de `QueryOutcome` (éxito XOR fallo) se valida al construir,
  no en cada consumidor.
- Serializar un resultado a JSON (`--json`) es un `model_dump` directo.

Nota:
- Estos modelos describen *qué* es un registro WHOIS, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

# Hostname canónico: minúsculas, sin esquema ni prefijo `www.`.
NormalizedHostname = str

# Texto crudo devuelto por la herramienta de consulta.
RawRecord = str


class FailureKind(str, Enum):
    """Why a query did not produce a record."""

    INVALID_HOSTNAME = "invalid_hostname"
    INVOCATION = "invocation"
    EMPTY_RESPONSE = "empty_response"
    TIMEOUT = "timeout"


class LookupFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: FailureKind = Field(
        ...,
        description="Categoría del fallo (validación, invocación, respuesta vacía, timeout).",
    )
    reason: str = Field(
        ...,
        min_length=1,
        description="Mensaje legible para el operador.",
    )


class ParsedRecord(BaseModel):
    """Campos extraídos de un registro WHOIS.

    Todos son opcionales de forma independiente: que falte una etiqueta en el
    texto crudo es un resultado esperado, no un error.
    """

    model_config = ConfigDict(frozen=True)

    registrant_country: str | None = Field(
        default=None,
        description="País del registrante, tal cual aparece en el registro.",
    )
    creation_date: date | None = Field(
        default=None,
        description="Fecha de creación del dominio.",
    )
    updated_date: date | None = Field(
        default=None,
        description="Fecha de la última actualización.",
    )
    expiry_date: date | None = Field(
        default=None,
        description="Fecha de expiración.",
    )

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.registrant_country,
                self.creation_date,
                self.updated_date,
                self.expiry_date,
            )
        )


class QueryOutcome(BaseModel):
    """Resultado de una iteración de consulta.

    Variante etiquetada: o bien (`raw`, `parsed`) o bien `failure`.
    Nunca ambos, nunca ninguno.
    """

    model_config = ConfigDict(frozen=True)

    query: str = Field(
        ...,
        description="Texto introducido por el operador.",
    )
    hostname: NormalizedHostname | None = Field(
        default=None,
        description="Hostname normalizado (ausente si la entrada no era válida).",
    )
    raw: RawRecord | None = Field(
        default=None,
        description="Salida cruda de la consulta WHOIS.",
    )
    parsed: ParsedRecord | None = Field(
        default=None,
        description="Campos extraídos de `raw`.",
    )
    failure: LookupFailure | None = Field(
        default=None,
        description="Motivo del fallo, si la consulta no produjo registro.",
    )

    @model_validator(mode="after")
    def _check_variant(self) -> "QueryOutcome":
        has_record = self.raw is not None and self.parsed is not None
        has_partial_record = (self.raw is None) != (self.parsed is None)
        if has_partial_record:
            raise ValueError("raw and parsed must be set together")
        if has_record == (self.failure is not None):
            raise ValueError("exactly one of (raw, parsed) or failure must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(
        cls,
        *,
        query: str,
        hostname: NormalizedHostname,
        raw: RawRecord,
        parsed: ParsedRecord,
    ) -> "QueryOutcome":
        return cls(query=query, hostname=hostname, raw=raw, parsed=parsed)

    @classmethod
    def failed(
        cls,
        *,
        query: str,
        failure: LookupFailure,
        hostname: NormalizedHostname | None = None,
    ) -> "QueryOutcome":
        return cls(query=query, hostname=hostname, failure=failure)
