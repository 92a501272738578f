"""UI language options for regscope.

The interactive session can talk to the operator in English or Spanish.
Keeping the enum in the domain layer lets the CLI, the settings and the
presentation helpers share it without importing each other.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for user-facing output."""

    ENGLISH = "en"
    SPANISH = "es"

    @classmethod
    def from_flag(cls, spanish: bool, fallback: "Language | None" = None) -> "Language":
        """Resolve the session language from the `--spanish` flag.

        The flag only forces Spanish; without it the configured default wins.
        """

        if spanish:
            return cls.SPANISH
        return fallback or cls.ENGLISH

    def label(self) -> str:
        return "Español" if self is Language.SPANISH else "English"
