from __future__ import annotations

import pytest

from core.domain.models import LookupFailure

VERISIGN_RECORD = """\
   Domain Name: GOOGLE.COM
   Registry Domain ID: 2138514_DOMAIN_COM-VRSN
   Registrar WHOIS Server: whois.markmonitor.com
   Registrar URL: http://www.markmonitor.com
   Updated Date: 2019-09-09T15:39:04Z
   Creation Date: 1997-09-15T04:00:00Z
   Registry Expiry Date: 2028-09-14T04:00:00Z
   Registrar: MarkMonitor Inc.
   Domain Status: clientDeleteProhibited https://icann.org/epp#clientDeleteProhibited
   Name Server: NS1.GOOGLE.COM
>>> Last update of whois database: 2024-05-01T10:00:00Z <<<

Domain Name: google.com
Updated Date: 2022-09-20T09:55:09+0000
Creation Date: 1997-09-15T07:00:00+0000
Registrar Registration Expiration Date: 2028-09-13T07:00:00+0000
Registrant Organization: Google LLC
Registrant State/Province: CA
Registrant Country: US
"""


class FakeGateway:
    """Scripted lookup gateway: hostname -> raw text or LookupFailure."""

    def __init__(self, responses: dict[str, str | LookupFailure] | None = None, default: str | LookupFailure = ""):
        self.responses = responses or {}
        self.default = default
        self.calls: list[str] = []

    def lookup(self, hostname: str) -> str | LookupFailure:
        self.calls.append(hostname)
        return self.responses.get(hostname, self.default)


@pytest.fixture
def verisign_record() -> str:
    return VERISIGN_RECORD


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway(default=VERISIGN_RECORD)
