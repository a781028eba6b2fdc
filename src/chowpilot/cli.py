#!/usr/bin/env python3
"""
ChowPilot CLI - CHOW Action Plan Runner

Command-line interface for running change-of-ownership cases through the
decision engine and publishing the resulting plan to the issue tracker.

Usage:
    chow evaluate --case case.yaml
    chow evaluate --case case.json --format markdown --stage stage2
    chow evaluate --case - < case.yaml
    chow timing --date 2025-01-10
    chow restore
    chow clear-state
    chow ticket connect --api-key lin_api_... --team TEAM_ID
    chow ticket status
    chow ticket options
    chow ticket create --case case.yaml --priority 2
    chow ticket disconnect

Exit Codes:
    0   OK              - Command succeeded (evaluate: LOW risk)
    2   MEDIUM_RISK     - evaluate: MEDIUM risk
    3   HIGH_RISK       - evaluate: HIGH risk
    10  INPUT_INVALID   - Invalid case input or stage
    11  STATE_ERROR     - Saved state unreadable or unwritable
    12  TICKETING_ERROR - Issue tracker not connected or request failed
    20  INTERNAL_ERROR  - Unexpected internal error
"""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from .config import Settings
from .engine import CONFIDENCE_GUIDANCE, evaluate, get_timing, resolve_stage, stage_document
from .exceptions import (
    CaseLoadError,
    ChowPilotError,
    InvalidCaseInputError,
    StateStoreError,
    TicketingError,
    UnknownStageError,
)
from .loader import load_case_file, load_case_string
from .logs import configure_logging
from .models import AlertType, CaseInput, EvaluationResult, RiskLevel
from .persistence import FormStateStore
from .ticketing import (
    LinearClient,
    TicketingSettingsStore,
    default_issue_title,
    looks_like_api_key,
)


# ============================================================================
# EXIT CODES
# ============================================================================

class ExitCode:
    """Deterministic exit codes for pipeline integration."""
    OK = 0
    MEDIUM_RISK = 2
    HIGH_RISK = 3
    INPUT_INVALID = 10
    STATE_ERROR = 11
    TICKETING_ERROR = 12
    INTERNAL_ERROR = 20


def risk_to_exit_code(level: RiskLevel) -> int:
    """Map risk level to exit code."""
    if level == RiskLevel.HIGH:
        return ExitCode.HIGH_RISK
    elif level == RiskLevel.MEDIUM:
        return ExitCode.MEDIUM_RISK
    return ExitCode.OK


def error_to_exit_code(error: ChowPilotError) -> int:
    if isinstance(error, (InvalidCaseInputError, CaseLoadError, UnknownStageError)):
        return ExitCode.INPUT_INVALID
    if isinstance(error, StateStoreError):
        return ExitCode.STATE_ERROR
    if isinstance(error, TicketingError):
        return ExitCode.TICKETING_ERROR
    return ExitCode.INTERNAL_ERROR


# ============================================================================
# TERMINAL OUTPUT
# ============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        cls.HEADER = ''
        cls.BLUE = ''
        cls.CYAN = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.RED = ''
        cls.BOLD = ''
        cls.END = ''


RISK_COLORS = {
    RiskLevel.LOW: lambda: Colors.GREEN,
    RiskLevel.MEDIUM: lambda: Colors.YELLOW,
    RiskLevel.HIGH: lambda: Colors.RED,
}


def print_header(text: str):
    print(f"\n{Colors.BOLD}{Colors.CYAN}{'='*60}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{text}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{'='*60}{Colors.END}")


def print_success(text: str):
    print(f"{Colors.GREEN}[OK] {text}{Colors.END}")


def print_error(text: str):
    print(f"{Colors.RED}[ERROR] {text}{Colors.END}", file=sys.stderr)


def print_warning(text: str):
    print(f"{Colors.YELLOW}[WARN] {text}{Colors.END}")


def print_info(text: str):
    print(f"{Colors.BLUE}[INFO] {text}{Colors.END}")


def print_kv(key: str, value: str, indent: int = 0):
    spaces = "  " * indent
    print(f"{spaces}{Colors.BOLD}{key}:{Colors.END} {value}")


def print_chow_error(error: ChowPilotError):
    print_error(str(error))
    errors = error.details.get("errors")
    if not isinstance(errors, list):
        return
    for item in errors:
        loc = ".".join(str(part) for part in item.get("loc", ()))
        print(f"  {Colors.YELLOW}[!]{Colors.END} {loc}: {item.get('msg')}", file=sys.stderr)


def print_plan(result: EvaluationResult, show_guidance: bool = False):
    """Human-readable action plan."""
    level = result.risk.level
    print_header(f"CHOW Action Plan - {result.case.case_ref}")
    print_kv("Scenario", result.scenario)
    print_kv("Timing", f"This CHOW is in the {get_timing(result.case.acquisition_date, result.today).value.upper()}")
    print(f"{Colors.BOLD}Risk:{Colors.END} {RISK_COLORS[level]()}{level.value.upper()}{Colors.END}")
    for reason in result.risk.reasons:
        print(f"  - {reason}")

    print(f"\n{Colors.BOLD}Key Focus{Colors.END}")
    print(result.key_focus)

    print(f"\n{Colors.BOLD}Priority Actions{Colors.END}")
    for i, action in enumerate(result.priority_actions, start=1):
        print(f"  {i}. {action.text} [{action.confidence.value}]")
        if show_guidance:
            print(f"     {CONFIDENCE_GUIDANCE[action.confidence]}")

    for stage, tasks in result.checklist.stages():
        if not tasks:
            continue
        print(f"\n{Colors.BOLD}{stage.heading}{Colors.END}")
        for task in tasks:
            box = "[x]" if task.completed else "[ ]"
            line = f"  {box} {task.text}"
            if task.note:
                line += f" ({task.note})"
            if task.label:
                line += f" #{task.label.value}"
            print(line)

    if result.alerts:
        print(f"\n{Colors.BOLD}Special Considerations{Colors.END}")
        for alert in result.alerts:
            color = Colors.RED if alert.type == AlertType.CRITICAL else Colors.YELLOW
            print(f"  {color}{alert.type.value.upper()}:{Colors.END} {alert.text}")


# ============================================================================
# COMMANDS
# ============================================================================

def read_case(source: str) -> CaseInput:
    """Load a case from a file path, or from stdin when source is '-'."""
    if source == "-":
        content = sys.stdin.read()
        fmt = "json" if content.lstrip().startswith("{") else "yaml"
        return load_case_string(content, format=fmt)
    return load_case_file(source)


def cmd_evaluate(args, settings: Settings) -> int:
    """Evaluate a case file and print the plan."""
    case = read_case(args.case)
    result = evaluate(case, today=args.today, escalation_contacts=settings.escalation_contacts)

    if args.save_state:
        FormStateStore(settings.form_state_path).save(case)

    if args.stage:
        stage = resolve_stage(args.stage)
        document = stage_document(result.stage_documents, stage.value)
        if args.format == "json":
            print(json.dumps({"stage": stage.value, "document": document}, indent=2))
        else:
            print(document, end="")
    elif args.format == "json":
        print(json.dumps(result.to_dict(), indent=2))
    elif args.format == "markdown":
        print(result.full_document, end="")
    else:
        print_plan(result, show_guidance=args.guidance)

    return risk_to_exit_code(result.risk.level)


def cmd_timing(args, settings: Settings) -> int:
    """Print whether an acquisition date is past or future."""
    today = args.today or date.today()
    timing = get_timing(args.date, today)
    print(f"This CHOW is in the {timing.value.upper()}")
    return ExitCode.OK


def cmd_restore(args, settings: Settings) -> int:
    """Print the last saved case."""
    case = FormStateStore(settings.form_state_path).load()
    if case is None:
        print_info("No saved form state")
        return ExitCode.OK
    print(json.dumps(case.to_dict(), indent=2))
    return ExitCode.OK


def cmd_clear_state(args, settings: Settings) -> int:
    """Remove the saved case."""
    if FormStateStore(settings.form_state_path).clear():
        print_success("Form state cleared")
    else:
        print_info("No saved form state")
    return ExitCode.OK


def _client(settings: Settings, ticketing) -> LinearClient:
    return LinearClient(ticketing, api_url=settings.linear_api_url, timeout=settings.http_timeout)


def cmd_ticket_connect(args, settings: Settings) -> int:
    """Test an API key, then save it with the chosen team and project."""
    store = TicketingSettingsStore(settings.ticketing_settings_path)
    api_key = args.api_key.strip()
    if not looks_like_api_key(api_key):
        print_warning("API key does not look like a personal key (expected lin_api_...)")

    client = _client(settings, replace(store.load(), api_key=api_key))
    print_info("Connecting to Linear...")
    teams = client.list_teams()
    if not teams:
        print_error("No teams found. Check your API key permissions.")
        return ExitCode.TICKETING_ERROR

    if not args.team:
        print_success("Connected! Select a team with --team:")
        for team in teams:
            print_kv(team["id"], team["name"], indent=1)
        store.update(api_key=api_key)
        return ExitCode.OK

    team = next((t for t in teams if t["id"] == args.team), None)
    if team is None:
        print_error(f"Team not found: {args.team}")
        return ExitCode.INPUT_INVALID

    project_name = ""
    if args.project:
        projects = client.list_projects(team["id"])
        project = next((p for p in projects if p["id"] == args.project), None)
        if project is None:
            print_error(f"Project not found: {args.project}")
            return ExitCode.INPUT_INVALID
        project_name = project["name"]

    saved = store.update(
        api_key=api_key,
        team_id=team["id"],
        team_name=team["name"],
        project_id=args.project or "",
        project_name=project_name,
    )
    print_success(f"Connected: {saved.team_name}")
    return ExitCode.OK


def cmd_ticket_status(args, settings: Settings) -> int:
    """Show the tracker connection."""
    ticketing = TicketingSettingsStore(settings.ticketing_settings_path).load()
    if not ticketing.is_connected:
        print_info("Not connected")
        return ExitCode.OK
    print_success(f"Connected: {ticketing.team_name}")
    public = ticketing.to_public_dict()
    print_kv("API key", public["api_key"], indent=1)
    print_kv("Team", f"{ticketing.team_name} ({ticketing.team_id})", indent=1)
    if ticketing.project_id:
        print_kv("Project", f"{ticketing.project_name} ({ticketing.project_id})", indent=1)
    return ExitCode.OK


def cmd_ticket_options(args, settings: Settings) -> int:
    """List assignees and workflow states for issue creation."""
    ticketing = TicketingSettingsStore(settings.ticketing_settings_path).load()
    if not ticketing.is_connected:
        print_error("Not connected. Run: chow ticket connect --api-key KEY --team ID")
        return ExitCode.TICKETING_ERROR
    client = _client(settings, ticketing)

    print(f"{Colors.BOLD}Assignees{Colors.END}")
    for member in client.list_team_members():
        print_kv(member["id"], member.get("displayName") or member.get("name", ""), indent=1)
    print(f"{Colors.BOLD}Workflow States{Colors.END}")
    for state in client.list_workflow_states():
        print_kv(state["id"], f"{state['name']} ({state.get('type')})", indent=1)
    return ExitCode.OK


def cmd_ticket_create(args, settings: Settings) -> int:
    """Evaluate a case and create an issue with the plan."""
    ticketing = TicketingSettingsStore(settings.ticketing_settings_path).load()
    case = read_case(args.case)
    result = evaluate(case, today=args.today, escalation_contacts=settings.escalation_contacts)

    if args.stage:
        stage = resolve_stage(args.stage)
        description = stage_document(result.stage_documents, stage.value)
        title = args.title or default_issue_title(case, stage)
    else:
        description = result.full_document
        title = args.title or default_issue_title(case)

    issue = _client(settings, ticketing).create_issue(
        title,
        description,
        priority=args.priority,
        assignee_id=args.assignee,
        state_id=args.state,
    )
    print_success(f"Created: {issue['identifier']}")
    print_kv("URL", issue.get("url", ""), indent=1)
    return ExitCode.OK


def cmd_ticket_disconnect(args, settings: Settings) -> int:
    """Forget the tracker connection."""
    TicketingSettingsStore(settings.ticketing_settings_path).clear()
    print_success("Disconnected")
    return ExitCode.OK


# ============================================================================
# MAIN
# ============================================================================

def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date (expected YYYY-MM-DD): {value}") from None


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chow",
        description="ChowPilot CLI - change-of-ownership action plans",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0   OK              Success (evaluate: LOW risk)
  2   MEDIUM_RISK     evaluate: MEDIUM risk
  3   HIGH_RISK       evaluate: HIGH risk
  10  INPUT_INVALID   Invalid case input or stage
  11  STATE_ERROR     Saved state unreadable or unwritable
  12  TICKETING_ERROR Tracker not connected or request failed

Examples:
  chow evaluate --case case.yaml
  chow evaluate --case case.yaml --format markdown --stage stage3
  cat case.json | chow evaluate --case -
  chow ticket create --case case.yaml --priority 2
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # evaluate
    eval_parser = subparsers.add_parser("evaluate", help="Evaluate a CHOW case")
    eval_parser.add_argument("--case", "-c", required=True, help="Case YAML or JSON file ('-' for stdin)")
    eval_parser.add_argument("--today", type=_iso_date, help="Evaluation date (YYYY-MM-DD)")
    eval_parser.add_argument("--format", "-f", choices=["text", "markdown", "json"], default="text")
    eval_parser.add_argument("--stage", "-s", help="Only this checklist stage (stage1..stage4)")
    eval_parser.add_argument("--guidance", action="store_true", help="Explain action confidence levels")
    eval_parser.add_argument("--save-state", action="store_true", help="Remember this case for restore")
    eval_parser.set_defaults(func=cmd_evaluate)

    # timing
    timing_parser = subparsers.add_parser("timing", help="Is an acquisition date past or future?")
    timing_parser.add_argument("--date", "-d", required=True, type=_iso_date, help="Acquisition date")
    timing_parser.add_argument("--today", type=_iso_date, help="Evaluation date (YYYY-MM-DD)")
    timing_parser.set_defaults(func=cmd_timing)

    # restore / clear-state
    restore_parser = subparsers.add_parser("restore", help="Print the last saved case")
    restore_parser.set_defaults(func=cmd_restore)
    clear_parser = subparsers.add_parser("clear-state", help="Forget the last saved case")
    clear_parser.set_defaults(func=cmd_clear_state)

    # ticket
    ticket_parser = subparsers.add_parser("ticket", help="Issue tracker integration")
    ticket_sub = ticket_parser.add_subparsers(dest="ticket_command", help="Ticket commands")

    connect_parser = ticket_sub.add_parser("connect", help="Connect with an API key")
    connect_parser.add_argument("--api-key", required=True, help="Personal API key (lin_api_...)")
    connect_parser.add_argument("--team", help="Team ID")
    connect_parser.add_argument("--project", help="Project ID (optional)")
    connect_parser.set_defaults(func=cmd_ticket_connect)

    status_parser = ticket_sub.add_parser("status", help="Show connection")
    status_parser.set_defaults(func=cmd_ticket_status)

    options_parser = ticket_sub.add_parser("options", help="List assignees and workflow states")
    options_parser.set_defaults(func=cmd_ticket_options)

    create_parser_ = ticket_sub.add_parser("create", help="Create an issue from a case")
    create_parser_.add_argument("--case", "-c", required=True, help="Case YAML or JSON file ('-' for stdin)")
    create_parser_.add_argument("--today", type=_iso_date, help="Evaluation date (YYYY-MM-DD)")
    create_parser_.add_argument("--stage", "-s", help="Create the issue for one stage only")
    create_parser_.add_argument("--title", "-t", help="Issue title (default: CHOW: old → new)")
    create_parser_.add_argument("--priority", type=int, choices=[1, 2, 3, 4], help="1 urgent .. 4 low")
    create_parser_.add_argument("--assignee", help="Assignee ID")
    create_parser_.add_argument("--state", help="Workflow state ID")
    create_parser_.set_defaults(func=cmd_ticket_create)

    disconnect_parser = ticket_sub.add_parser("disconnect", help="Forget the connection")
    disconnect_parser.set_defaults(func=cmd_ticket_disconnect)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    if not sys.stdout.isatty():
        Colors.disable()

    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    settings = Settings.from_env()
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        return args.func(args, settings)
    except ChowPilotError as e:
        print_chow_error(e)
        return error_to_exit_code(e)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        return ExitCode.INTERNAL_ERROR


if __name__ == "__main__":
    sys.exit(main())
