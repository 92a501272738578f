"""Hostname normalization.

Turns whatever the operator typed (bare domain, `www.` domain, full URL with
path/credentials/port) into the registrable hostname the lookup expects.
Invalid input is signaled with `None`; callers branch on it explicitly.
"""

from __future__ import annotations

import ipaddress
import re
from urllib.parse import urlsplit

from core.domain.models import NormalizedHostname

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

# Code points a URL host can never contain (WHATWG "forbidden host code points").
_FORBIDDEN_HOST_CHARS = frozenset("\x00\t\n\r #%/:<>?@[\\]^|")

_WWW_PREFIX = "www."


def _is_valid_host(host: str) -> bool:
    if not host:
        return False
    for char in host:
        if char in _FORBIDDEN_HOST_CHARS or ord(char) < 0x20 or ord(char) == 0x7F:
            return False
    # A trailing dot is a valid FQDN; empty labels elsewhere are not.
    labels = host[:-1].split(".") if host.endswith(".") else host.split(".")
    return all(labels)


def normalize_hostname(text: str) -> NormalizedHostname | None:
    """Return the canonical hostname for `text`, or None.

    None covers both blank input (the session's stop signal) and input that
    does not parse as a URL with a host.
    """

    candidate = text.strip()
    if not candidate:
        return None

    # http(s) URLs read a backslash as a path separator.
    candidate = candidate.replace("\\", "/")

    if not _SCHEME_RE.match(candidate):
        candidate = "http://" + candidate

    try:
        parts = urlsplit(candidate)
        # Accessing the port validates it (non-numeric or out of range raises).
        parts.port
    except ValueError:
        return None

    host = parts.hostname
    if host is None:
        return None

    # Bracketed host must be an IPv6 literal.
    if "[" in parts.netloc:
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            return None
        return host.lower()

    if not _is_valid_host(host):
        return None

    host = host.lower()
    if host.startswith(_WWW_PREFIX):
        host = host[len(_WWW_PREFIX):]
        if not host:
            return None
    return host
