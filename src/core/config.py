"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El adaptador WHOIS y la sesión interactiva leen la misma configuración.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "regscope"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "regscope"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "regscope"
    return Path.home() / ".config" / "regscope"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="REGSCOPE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    whois_command: str = Field(
        default="whois",
        min_length=1,
        description="Comando de consulta; el hostname se añade como último argumento.",
    )
    lookup_timeout_seconds: float = Field(
        default=60.0,
        ge=0,
        description="Timeout de la consulta WHOIS (segundos). 0 = esperar indefinidamente.",
    )
    default_language: Language = Field(
        default=Language.ENGLISH,
        description="Idioma por defecto de la sesión interactiva (en/es).",
    )
    show_raw_record: bool = Field(
        default=True,
        description="Mostrar el registro WHOIS crudo antes de los campos extraídos.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de log de loguru (nombre o número).",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level.isdigit() or level in _LOG_LEVELS:
            return level
        raise ValueError(f"unknown log level {value!r}; expected one of {', '.join(_LOG_LEVELS)}")

    @property
    def lookup_timeout(self) -> float | None:
        """Timeout efectivo para `subprocess.run` (None = sin límite)."""

        return self.lookup_timeout_seconds or None
