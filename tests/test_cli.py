"""Tests for the piishield CLI.

Uses typer's CliRunner for isolated testing without subprocesses.
"""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from piishield import __version__
from piishield.cli import app

runner = CliRunner()
FIXTURES = Path(__file__).parent / "fixtures"


class TestRedactCLI:
    def test_json_redacted_to_stdout(self) -> None:
        result = runner.invoke(app, ["redact", str(FIXTURES / "ride_event.json")])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["rideId"] == "ride_123"
        assert data["rider"]["email"] == "[REDACTED_EMAIL]"
        assert data["rider"]["phoneNumber"] == "[REDACTED_PHONENUMBER]"
        assert data["rider"]["profile"]["displayName"] == "[REDACTED_DISPLAYNAME]"
        assert data["payments"][0] == {"cardNumber": "[REDACTED_CARDNUMBER]", "amount": 18.5}
        assert data["payments"][1]["note"] == "refund sent to [REDACTED_EMAIL]"
        assert data["timestamp"] == "2025-01-01T00:00:00Z"

    def test_text_file(self) -> None:
        result = runner.invoke(app, ["redact", str(FIXTURES / "support.log")])
        assert result.exit_code == 0
        assert "jane@example.com" not in result.stdout
        assert "555-987-6543" not in result.stdout
        assert "[REDACTED_CARD]" in result.stdout
        assert "ticket opened" in result.stdout

    def test_output_file(self, tmp_path: Path) -> None:
        out = tmp_path / "clean.json"
        result = runner.invoke(
            app,
            ["redact", str(FIXTURES / "ride_event.json"), "--output", str(out)],
        )
        assert result.exit_code == 0
        data = json.loads(out.read_text())
        assert data["rider"]["email"] == "[REDACTED_EMAIL]"

    def test_config_applied(self, tmp_path: Path) -> None:
        doc = tmp_path / "doc.json"
        doc.write_text(json.dumps({"loyaltyNumber": "L-1", "status": "ok"}))
        result = runner.invoke(
            app,
            ["redact", str(doc), "--config", str(FIXTURES / "full_config.yaml")],
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "loyaltyNumber": "[REDACTED_LOYALTYNUMBER]",
            "status": "ok",
        }

    def test_invalid_config_exits_1(self) -> None:
        result = runner.invoke(
            app,
            [
                "redact",
                str(FIXTURES / "ride_event.json"),
                "--config",
                str(FIXTURES / "invalid_config.yaml"),
            ],
        )
        assert result.exit_code == 1

    def test_missing_file_exits_1(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["redact", str(tmp_path / "missing.json")])
        assert result.exit_code == 1


class TestScanCLI:
    def test_pii_found_exits_1(self) -> None:
        result = runner.invoke(app, ["scan", str(FIXTURES / "ride_event.json"), "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["has_pii"] is True
        assert "rider.email" in data["fields"]
        assert "payments[1].note: email" in data["fields"]
        # Paths and categories only, never the raw values.
        assert "john@example.com" not in result.stdout

    def test_clean_exits_0(self) -> None:
        result = runner.invoke(app, ["scan", str(FIXTURES / "clean_event.json"), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"has_pii": False, "fields": [], "findings": []}

    def test_table_output(self) -> None:
        result = runner.invoke(app, ["scan", str(FIXTURES / "ride_event.json")])
        assert result.exit_code == 1
        assert "rider.email" in result.stdout

    def test_table_clean(self) -> None:
        result = runner.invoke(app, ["scan", str(FIXTURES / "clean_event.json")])
        assert result.exit_code == 0
        assert "No PII found" in result.stdout


class TestMaskCLI:
    def test_email_default(self) -> None:
        result = runner.invoke(app, ["mask", "john.doe@example.com"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "j***@example.com"

    def test_phone(self) -> None:
        result = runner.invoke(app, ["mask", "555-123-4567", "--type", "phone"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "***-***-4567"

    def test_card(self) -> None:
        result = runner.invoke(app, ["mask", "4111111111111111", "-t", "card"])
        assert result.stdout.strip() == "****-****-****-1111"


class TestVersion:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
