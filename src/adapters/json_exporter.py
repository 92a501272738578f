"""Exportación JSON de un resultado de consulta.

Por qué JSON:
- Permite encadenar `regscope lookup --json` con jq u otras herramientas.
- Las fechas salen como `YYYY-MM-DD`, igual que en la terminal.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import QueryOutcome


def outcome_to_json(outcome: QueryOutcome, *, include_raw: bool = True) -> str:
    """Serializa `QueryOutcome` a JSON UTF-8 con formato estable."""

    exclude = None if include_raw else {"raw"}
    payload = outcome.model_dump(mode="json", exclude=exclude)
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_outcome_json(*, outcome: QueryOutcome, output_path: Path, include_raw: bool = True) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(outcome_to_json(outcome, include_raw=include_raw) + "\n", encoding="utf-8")
    return output_path
