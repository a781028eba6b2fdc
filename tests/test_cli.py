"""
Tests for the chow command-line interface.

Tests cover:
- Exit codes per risk level and error type
- Output formats
- Form state commands
- Ticket commands against a fake tracker client
"""
import io
import json

import pytest

from chowpilot import cli
from chowpilot.cli import ExitCode, main
from chowpilot.exceptions import TicketingRequestError
from chowpilot.ticketing import TicketingSettings, TicketingSettingsStore

from helpers import case_payload


class FakeLinearClient:
    """Stands in for LinearClient; records created issues."""

    teams = [{"id": "team-1", "name": "Billing"}]
    projects = [{"id": "proj-1", "name": "CHOWs"}]
    created = []

    def __init__(self, settings, api_url=None, timeout=None, session=None):
        self.settings = settings

    def list_teams(self, api_key=None):
        if not self.settings.api_key.startswith("lin_api_"):
            raise TicketingRequestError(message="Authentication required")
        return self.teams

    def list_projects(self, team_id=None):
        return self.projects

    def list_team_members(self, team_id=None):
        return [{"id": "u-1", "name": "jane", "displayName": "Jane"}]

    def list_workflow_states(self, team_id=None):
        return [{"id": "s-1", "name": "Todo", "type": "unstarted"}]

    def create_issue(self, title, description, priority=None, assignee_id=None, state_id=None):
        self.created.append({"title": title, "description": description, "priority": priority})
        return {"id": "i-1", "identifier": "BIL-42", "url": "https://linear.app/x/issue/BIL-42"}


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch):
    monkeypatch.setenv("CHOW_STATE_DIR", str(tmp_path / "state"))
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    monkeypatch.setattr(cli, "LinearClient", FakeLinearClient)
    FakeLinearClient.created = []
    return tmp_path


@pytest.fixture
def write_case(tmp_path):
    def _write(**overrides):
        path = tmp_path / "case.json"
        path.write_text(json.dumps(case_payload(**overrides)), encoding="utf-8")
        return str(path)
    return _write


def connect(tmp_path):
    TicketingSettingsStore(tmp_path / "state" / "linear-settings.json").save(TicketingSettings(
        api_key="lin_api_abcdef123456", team_id="team-1", team_name="Billing",
    ))


# =============================================================================
# evaluate
# =============================================================================

class TestEvaluateCommand:
    """Tests for chow evaluate."""

    def test_high_risk_exit_code(self, write_case, capsys):
        code = main(["evaluate", "--case", write_case(), "--today", "2025-06-15"])
        out = capsys.readouterr().out
        assert code == ExitCode.HIGH_RISK
        assert "Risk: HIGH" in out
        assert "This CHOW is in the PAST" in out

    def test_medium_risk_exit_code(self, write_case):
        code = main(["evaluate", "--case", write_case(contractSigned="yes"), "--today", "2025-06-15"])
        assert code == ExitCode.MEDIUM_RISK

    def test_low_risk_exit_code(self, write_case):
        path = write_case(outstandingAR="no", futureBookedShifts="no")
        assert main(["evaluate", "--case", path, "--today", "2025-06-15"]) == ExitCode.OK

    def test_markdown(self, write_case, capsys):
        main(["evaluate", "--case", write_case(), "--today", "2025-06-15", "--format", "markdown"])
        assert capsys.readouterr().out.startswith("## CHOW Details\n")

    def test_json(self, write_case, capsys):
        main(["evaluate", "--case", write_case(), "--today", "2025-06-15", "--format", "json"])
        data = json.loads(capsys.readouterr().out)
        assert data["risk"]["level"] == "high"

    def test_stage(self, write_case, capsys):
        main(["evaluate", "--case", write_case(), "--today", "2025-06-15", "--stage", "stage2"])
        assert capsys.readouterr().out.startswith("## Stage 2: Outreach\n")

    def test_guidance(self, write_case, capsys):
        main(["evaluate", "--case", write_case(), "--today", "2025-06-15", "--guidance"])
        assert "High confidence: This is a standard response" in capsys.readouterr().out

    def test_unknown_stage(self, write_case, capsys):
        code = main(["evaluate", "--case", write_case(), "--stage", "stage7"])
        assert code == ExitCode.INPUT_INVALID
        assert "CHOW_UNKNOWN_STAGE" in capsys.readouterr().err

    def test_invalid_case(self, write_case, capsys):
        code = main(["evaluate", "--case", write_case(saleType="merger")])
        err = capsys.readouterr().err
        assert code == ExitCode.INPUT_INVALID
        assert "saleType" in err

    def test_missing_file(self, tmp_path):
        assert main(["evaluate", "--case", str(tmp_path / "nope.yaml")]) == ExitCode.INPUT_INVALID

    def test_json_from_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(case_payload())))
        code = main(["evaluate", "--case", "-", "--today", "2025-06-15"])
        assert code == ExitCode.HIGH_RISK
        assert "Risk: HIGH" in capsys.readouterr().out

    def test_yaml_from_stdin(self, monkeypatch):
        content = "acquisitionDate: 2025-06-01\nsaleType: stock\ncontractSigned: yes\noutstandingAR: yes\nfutureBookedShifts: no\n"
        monkeypatch.setattr("sys.stdin", io.StringIO(content))
        assert main(["evaluate", "--case", "-", "--today", "2025-06-15"]) == ExitCode.OK

    def test_unparseable_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("{broken"))
        assert main(["evaluate", "--case", "-"]) == ExitCode.INPUT_INVALID

    def test_no_command(self, capsys):
        assert main([]) == 1


# =============================================================================
# timing and state
# =============================================================================

class TestTimingCommand:
    """Tests for chow timing."""

    def test_past(self, capsys):
        assert main(["timing", "--date", "2025-06-15", "--today", "2025-06-15"]) == ExitCode.OK
        assert capsys.readouterr().out.strip() == "This CHOW is in the PAST"

    def test_future(self, capsys):
        main(["timing", "--date", "2025-06-16", "--today", "2025-06-15"])
        assert capsys.readouterr().out.strip() == "This CHOW is in the FUTURE"

    def test_bad_date(self):
        with pytest.raises(SystemExit):
            main(["timing", "--date", "soon"])


class TestStateCommands:
    """Tests for restore and clear-state."""

    def test_save_restore_clear(self, write_case, capsys):
        main(["evaluate", "--case", write_case(), "--today", "2025-06-15", "--save-state"])
        capsys.readouterr()

        assert main(["restore"]) == ExitCode.OK
        restored = json.loads(capsys.readouterr().out)
        assert restored == case_payload()

        main(["clear-state"])
        assert "Form state cleared" in capsys.readouterr().out
        main(["restore"])
        assert "No saved form state" in capsys.readouterr().out


# =============================================================================
# ticket
# =============================================================================

class TestTicketCommands:
    """Tests for chow ticket."""

    def test_connect_lists_teams_without_team(self, capsys, cli_env):
        code = main(["ticket", "connect", "--api-key", "lin_api_abcdef123456"])
        assert code == ExitCode.OK
        assert "team-1" in capsys.readouterr().out
        store = TicketingSettingsStore(cli_env / "state" / "linear-settings.json")
        assert store.load().api_key == "lin_api_abcdef123456"
        assert not store.load().is_connected

    def test_connect_with_team_and_project(self, cli_env):
        code = main([
            "ticket", "connect", "--api-key", "lin_api_abcdef123456",
            "--team", "team-1", "--project", "proj-1",
        ])
        assert code == ExitCode.OK
        saved = TicketingSettingsStore(cli_env / "state" / "linear-settings.json").load()
        assert saved.is_connected
        assert saved.project_name == "CHOWs"

    def test_connect_unknown_team(self):
        code = main(["ticket", "connect", "--api-key", "lin_api_abcdef123456", "--team", "team-9"])
        assert code == ExitCode.INPUT_INVALID

    def test_connect_rejected_key(self, capsys):
        code = main(["ticket", "connect", "--api-key", "bad-key", "--team", "team-1"])
        assert code == ExitCode.TICKETING_ERROR
        assert "Authentication required" in capsys.readouterr().err

    def test_status(self, capsys, cli_env):
        main(["ticket", "status"])
        assert "Not connected" in capsys.readouterr().out

        connect(cli_env)
        main(["ticket", "status"])
        out = capsys.readouterr().out
        assert "Connected: Billing" in out
        assert "lin_api_****3456" in out
        assert "abcdef" not in out

    def test_options_requires_connection(self):
        assert main(["ticket", "options"]) == ExitCode.TICKETING_ERROR

    def test_options(self, capsys, cli_env):
        connect(cli_env)
        assert main(["ticket", "options"]) == ExitCode.OK
        out = capsys.readouterr().out
        assert "Jane" in out
        assert "Todo (unstarted)" in out

    def test_create_full_plan(self, write_case, capsys, cli_env):
        connect(cli_env)
        code = main(["ticket", "create", "--case", write_case(), "--today", "2025-06-15", "--priority", "2"])
        assert code == ExitCode.OK
        assert "BIL-42" in capsys.readouterr().out
        issue = FakeLinearClient.created[0]
        assert issue["title"] == "CHOW: Sunrise Care LLC → Harbor Health Partners"
        assert issue["description"].startswith("## CHOW Details")
        assert issue["priority"] == 2

    def test_create_stage(self, write_case, cli_env):
        connect(cli_env)
        main(["ticket", "create", "--case", write_case(), "--stage", "stage3", "--title", "Move accounts"])
        issue = FakeLinearClient.created[0]
        assert issue["title"] == "Move accounts"
        assert issue["description"].startswith("## Stage 3: Post-Outreach")

    def test_disconnect(self, capsys, cli_env):
        connect(cli_env)
        assert main(["ticket", "disconnect"]) == ExitCode.OK
        main(["ticket", "status"])
        assert "Not connected" in capsys.readouterr().out
