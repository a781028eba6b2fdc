"""
ChowPilot Linear Client

Minimal GraphQL client for creating CHOW tickets in Linear.

Usage:
    client = LinearClient(settings)
    teams = client.list_teams(api_key="lin_api_...")
    issue = client.create_issue("CHOW: A → B", result.full_document)
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..config import LINEAR_API_URL
from ..exceptions import TicketingNotConnectedError, TicketingRequestError
from ..models import CaseInput, ChecklistStage
from .settings import TicketingSettings

logger = logging.getLogger(__name__)

# Workflow state types in board order
STATE_ORDER = ("backlog", "unstarted", "started", "completed", "canceled")


# =============================================================================
# Queries
# =============================================================================

TEAMS_QUERY = """
query {
    teams {
        nodes {
            id
            name
        }
    }
}
"""

PROJECTS_QUERY = """
query($teamId: String!) {
    team(id: $teamId) {
        projects {
            nodes {
                id
                name
            }
        }
    }
}
"""

MEMBERS_QUERY = """
query($teamId: String!) {
    team(id: $teamId) {
        members {
            nodes {
                id
                name
                displayName
            }
        }
    }
}
"""

STATES_QUERY = """
query($teamId: String!) {
    team(id: $teamId) {
        states {
            nodes {
                id
                name
                type
            }
        }
    }
}
"""

ISSUE_CREATE_MUTATION = """
mutation($input: IssueCreateInput!) {
    issueCreate(input: $input) {
        success
        issue {
            id
            identifier
            url
        }
    }
}
"""


def default_issue_title(case: CaseInput, stage: Optional[ChecklistStage] = None) -> str:
    """Issue title for a case, optionally for a single stage."""
    old = case.old_owner_name or "Unknown"
    new = case.new_owner_name or "Unknown"
    title = f"CHOW: {old} → {new}"
    if stage is not None:
        title += f" - {stage.heading}"
    return title


def _state_rank(state: dict[str, Any]) -> int:
    try:
        return STATE_ORDER.index(state.get("type"))
    except ValueError:
        return len(STATE_ORDER)


class LinearClient:
    """
    Linear GraphQL client.

    Args:
        settings: Connection settings (API key, team, optional project)
        api_url: GraphQL endpoint
        timeout: Seconds per request
        session: requests.Session to use (a new one by default)
    """

    def __init__(
        self,
        settings: TicketingSettings,
        api_url: str = LINEAR_API_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    # ── Transport ────────────────────────────────────────────────────────────

    def graphql(
        self,
        query: str,
        variables: Optional[dict[str, Any]] = None,
        api_key: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Run a GraphQL request and return its ``data``.

        Raises:
            TicketingRequestError: On transport, HTTP or GraphQL errors
        """
        key = api_key if api_key is not None else self.settings.api_key
        try:
            response = self.session.post(
                self.api_url,
                json={"query": query, "variables": variables or {}},
                headers={"Content-Type": "application/json", "Authorization": key},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise TicketingRequestError(
                message=f"HTTP error! status: {response.status_code}",
                details={"status_code": response.status_code},
            ) from exc
        except requests.RequestException as exc:
            raise TicketingRequestError(
                message=f"Failed to reach issue tracker: {exc}",
            ) from exc

        try:
            result = response.json()
        except ValueError as exc:
            raise TicketingRequestError(message="Issue tracker returned invalid JSON") from exc

        if result.get("errors"):
            raise TicketingRequestError(
                message=result["errors"][0].get("message", "GraphQL error"),
                details={"errors": result["errors"]},
            )
        return result.get("data") or {}

    def _require_connection(self) -> None:
        if not self.settings.is_connected:
            raise TicketingNotConnectedError(
                message="Issue tracker is not connected: set an API key and team",
            )

    # ── Queries ──────────────────────────────────────────────────────────────

    def list_teams(self, api_key: Optional[str] = None) -> list[dict[str, Any]]:
        """Teams visible to the key. Doubles as the connection test."""
        data = self.graphql(TEAMS_QUERY, api_key=api_key)
        return data["teams"]["nodes"]

    def list_projects(self, team_id: Optional[str] = None) -> list[dict[str, Any]]:
        data = self.graphql(PROJECTS_QUERY, {"teamId": team_id or self.settings.team_id})
        return data["team"]["projects"]["nodes"]

    def list_team_members(self, team_id: Optional[str] = None) -> list[dict[str, Any]]:
        data = self.graphql(MEMBERS_QUERY, {"teamId": team_id or self.settings.team_id})
        return data["team"]["members"]["nodes"]

    def list_workflow_states(self, team_id: Optional[str] = None) -> list[dict[str, Any]]:
        """Workflow states sorted backlog, unstarted, started, completed, canceled."""
        data = self.graphql(STATES_QUERY, {"teamId": team_id or self.settings.team_id})
        return sorted(data["team"]["states"]["nodes"], key=_state_rank)

    # ── Mutations ────────────────────────────────────────────────────────────

    def create_issue(
        self,
        title: str,
        description: str,
        priority: Optional[int] = None,
        assignee_id: Optional[str] = None,
        state_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Create an issue in the configured team (and project, if set).

        Returns:
            The created issue: {id, identifier, url}

        Raises:
            TicketingNotConnectedError: If no API key or team is configured
            TicketingRequestError: If the request fails or is rejected
        """
        self._require_connection()
        if not title.strip():
            raise TicketingRequestError(message="Please enter a title")

        issue_input: dict[str, Any] = {
            "teamId": self.settings.team_id,
            "title": title,
            "description": description,
        }
        if priority:
            issue_input["priority"] = priority
        if assignee_id:
            issue_input["assigneeId"] = assignee_id
        if state_id:
            issue_input["stateId"] = state_id
        if self.settings.project_id:
            issue_input["projectId"] = self.settings.project_id

        data = self.graphql(ISSUE_CREATE_MUTATION, {"input": issue_input})
        created = data.get("issueCreate") or {}
        if not created.get("success"):
            raise TicketingRequestError(message="Failed to create issue")

        issue = created["issue"]
        logger.info(
            "Issue created: %s",
            issue.get("identifier"),
            extra={"issue_identifier": issue.get("identifier")},
        )
        return issue
