"""Gateway WHOIS basado en el binario del sistema.

Por qué un subprocess y no una librería:
- El binario `whois` ya resuelve el servidor correcto por TLD y sigue las
  referencias a registradores; reimplementarlo no aporta nada aquí.
- El comando es configurable (`REGSCOPE_WHOIS_COMMAND`), p.ej.
  `whois -h whois.verisign-grs.com`.

Nunca se usa shell: el hostname va como argumento separado.
"""

from __future__ import annotations

import shlex
import subprocess
import time

from loguru import logger

from core.config import AppSettings
from core.domain.models import FailureKind, LookupFailure, NormalizedHostname, RawRecord
from core.interfaces.lookup import LookupGateway


def _first_line(text: str | None) -> str:
    for line in (text or "").splitlines():
        if line.strip():
            return line.strip()
    return ""


class WhoisCommandGateway(LookupGateway):
    """Ejecuta `<whois_command> <hostname>` y devuelve su stdout."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    @property
    def command(self) -> list[str]:
        return shlex.split(self._settings.whois_command)

    def lookup(self, hostname: NormalizedHostname) -> RawRecord | LookupFailure:
        command = self.command
        if not command:
            return LookupFailure(kind=FailureKind.INVOCATION, reason="No WHOIS command configured.")
        args = [*command, hostname]
        timeout = self._settings.lookup_timeout
        logger.debug("Running {} (timeout={})", args, timeout)

        started = time.monotonic()
        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
                check=False,
            )
        except FileNotFoundError:
            return LookupFailure(
                kind=FailureKind.INVOCATION,
                reason=f"WHOIS command not found: {args[0]!r}. Is `whois` installed?",
            )
        except subprocess.TimeoutExpired:
            return LookupFailure(
                kind=FailureKind.TIMEOUT,
                reason=f"WHOIS lookup for {hostname} timed out after {timeout:g} seconds.",
            )
        except (OSError, subprocess.SubprocessError) as exc:
            return LookupFailure(
                kind=FailureKind.INVOCATION,
                reason=f"Error running WHOIS: {exc}",
            )

        logger.debug(
            "{} exited with {} after {:.2f}s",
            args[0],
            completed.returncode,
            time.monotonic() - started,
        )

        if completed.returncode != 0:
            detail = _first_line(completed.stderr) or _first_line(completed.stdout)
            reason = f"Error running WHOIS: exit status {completed.returncode}"
            if detail:
                reason = f"{reason}: {detail}"
            return LookupFailure(kind=FailureKind.INVOCATION, reason=reason)

        stdout = completed.stdout or ""
        if not stdout.strip():
            return LookupFailure(
                kind=FailureKind.EMPTY_RESPONSE,
                reason="WHOIS returned no data.",
            )
        return stdout
