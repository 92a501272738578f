"""Contrato del gateway de consultas WHOIS.

Por qué Protocol:
- El Core no sabe si la consulta es un subprocess, un socket o un stub de test.
- Un fake en los tests cumple el contrato sin heredar de nada.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import LookupFailure, NormalizedHostname, RawRecord


@runtime_checkable
class LookupGateway(Protocol):
    """Contrato mínimo para una fuente de registros WHOIS.

    Reglas de diseño:
    - `lookup` es síncrono: la sesión nunca tiene dos consultas en vuelo.
    - Los fallos esperables se devuelven como `LookupFailure`, no se lanzan.
    - Puede bloquear tanto como tarde la fuente externa.
    """

    def lookup(self, hostname: NormalizedHostname) -> RawRecord | LookupFailure:
        """Devuelve el texto crudo del registro o el motivo del fallo."""

        ...
