import json

import pytest
from conftest import FakeGateway
from typer.testing import CliRunner

from cli import main as cli_main
from core.domain.models import FailureKind, LookupFailure

runner = CliRunner()


@pytest.fixture
def gateway(monkeypatch, verisign_record):
    fake = FakeGateway(
        {"broken.example": LookupFailure(kind=FailureKind.INVOCATION, reason="Error running WHOIS: exit status 1")},
        default=verisign_record,
    )
    monkeypatch.setattr(cli_main, "WhoisCommandGateway", lambda settings: fake)
    return fake


def test_interactive_session(gateway):
    result = runner.invoke(cli_main.app, ["--no-banner"], input="https://www.Google.com/\nnot a url\n\n")
    assert result.exit_code == 0, result.output
    assert gateway.calls == ["google.com"]
    assert "Querying WHOIS for google.com" in result.output
    assert "Registrant country:" in result.output
    assert "1997-09-15" in result.output
    assert "2028-09-13" in result.output
    assert "Invalid URL. Please try again." in result.output
    assert result.output.rstrip().endswith("Exiting...")


def test_interactive_session_ends_on_eof(gateway):
    result = runner.invoke(cli_main.app, ["--no-banner"], input="")
    assert result.exit_code == 0
    assert "Exiting..." in result.output
    assert gateway.calls == []


def test_interactive_failure_keeps_looping(gateway):
    result = runner.invoke(cli_main.app, ["--no-banner"], input="broken.example\ngoogle.com\n\n")
    assert result.exit_code == 0
    assert "exit status 1" in result.output
    assert gateway.calls == ["broken.example", "google.com"]


def test_spanish_session(gateway):
    result = runner.invoke(cli_main.app, ["--spanish", "--no-banner"], input="\n")
    assert result.exit_code == 0
    assert "Bienvenido al sistema de consultas WHOIS." in result.output
    assert "Saliendo del programa..." in result.output


def test_missing_fields_show_placeholder(monkeypatch):
    monkeypatch.setattr(cli_main, "WhoisCommandGateway", lambda settings: FakeGateway(default="Domain Name: X\n"))
    result = runner.invoke(cli_main.app, ["lookup", "x.example", "--no-raw"])
    assert result.exit_code == 0
    assert result.output.count("N/A") == 4


def test_lookup_json(gateway):
    result = runner.invoke(cli_main.app, ["lookup", "https://www.google.com/maps", "--json", "--no-raw"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["hostname"] == "google.com"
    assert payload["failure"] is None
    assert "raw" not in payload
    assert payload["parsed"] == {
        "registrant_country": "US",
        "creation_date": "1997-09-15",
        "updated_date": "2022-09-20",
        "expiry_date": "2028-09-13",
    }


def test_lookup_writes_output_file(gateway, tmp_path):
    target = tmp_path / "out" / "google.json"
    result = runner.invoke(cli_main.app, ["lookup", "google.com", "--output", str(target)])
    assert result.exit_code == 0, result.output
    payload = json.loads(target.read_text(encoding="utf-8"))
    assert payload["raw"].startswith("   Domain Name: GOOGLE.COM")


def test_lookup_failure_exit_code(gateway):
    result = runner.invoke(cli_main.app, ["lookup", "broken.example"])
    assert result.exit_code == 1
    assert "exit status 1" in result.output


def test_lookup_invalid_target(gateway):
    result = runner.invoke(cli_main.app, ["lookup", "not a url"])
    assert result.exit_code == 1
    assert "Invalid URL" in result.output
    assert gateway.calls == []


def test_lookup_blank_target_is_usage_error(gateway):
    result = runner.invoke(cli_main.app, ["lookup", "   "])
    assert result.exit_code == 2


def test_invalid_log_level_is_usage_error(monkeypatch, gateway):
    monkeypatch.setenv("REGSCOPE_LOG_LEVEL", "LOUD")
    result = runner.invoke(cli_main.app, ["lookup", "google.com"])
    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_doctor_reports_missing_command():
    result = runner.invoke(
        cli_main.app,
        ["--whois-command", "regscope-no-such-whois-binary", "doctor", "run"],
    )
    assert result.exit_code == 1
    assert "FAIL" in result.output


class InterruptingGateway(FakeGateway):
    def lookup(self, hostname):
        super().lookup(hostname)
        raise KeyboardInterrupt


def test_ctrl_c_exits_with_130(monkeypatch):
    interrupting = InterruptingGateway()
    monkeypatch.setattr(cli_main, "WhoisCommandGateway", lambda settings: interrupting)
    result = runner.invoke(cli_main.app, ["--no-banner"], input="example.com\ngoogle.com\n\n")
    assert result.exit_code == 130
    assert "Exiting..." in result.output
    assert interrupting.calls == ["example.com"]


def test_timeout_option_reaches_gateway(monkeypatch, verisign_record):
    received = []

    def build(settings):
        received.append(settings)
        return FakeGateway(default=verisign_record)

    monkeypatch.setattr(cli_main, "WhoisCommandGateway", build)
    result = runner.invoke(cli_main.app, ["--timeout", "0", "lookup", "google.com", "--json"])
    assert result.exit_code == 0, result.output
    assert received[0].lookup_timeout_seconds == 0
    assert received[0].lookup_timeout is None


def test_whois_command_option_reaches_gateway(monkeypatch, verisign_record):
    received = []

    def build(settings):
        received.append(settings)
        return FakeGateway(default=verisign_record)

    monkeypatch.setattr(cli_main, "WhoisCommandGateway", build)
    result = runner.invoke(cli_main.app, ["--whois-command", "whois -h whois.verisign-grs.com", "lookup", "google.com"])
    assert result.exit_code == 0, result.output
    assert received[0].whois_command == "whois -h whois.verisign-grs.com"
