"""Module for Linear issue operations."""

import logging
from collections.abc import Sequence
from typing import Any

from ..models.linear import LinearIssue
from .relations import (
    ISSUE_FIELDS,
    ISSUE_SUMMARY_FIELDS,
    RelationsMixin,
    selection_for,
)

logger = logging.getLogger("mcp-linear.linear")


class IssuesMixin(RelationsMixin):
    """Mixin for Linear issue operations."""

    async def get_issue(
        self, issue_id: str, plan: Sequence[str] = ()
    ) -> LinearIssue:
        """
        Get an issue and the relations named by ``plan``.

        The issue itself is looked up first; the planned relations are then
        fetched concurrently, keyed by the identifier Linear returned (so
        human-readable identifiers such as ``ENG-12`` work too).

        Args:
            issue_id: Issue UUID or identifier
            plan: Relation names to resolve

        Returns:
            LinearIssue with the planned relations populated

        Raises:
            EntityNotFoundError: If the issue does not exist
            LinearAPIError: If any request fails
        """
        data = await self.fetch_entity("issue", "Issue", issue_id, ISSUE_FIELDS)
        relations = await self.resolve_relations("issue", data["id"], plan)
        return LinearIssue.from_api_response({**data, **relations})

    async def list_issues(
        self,
        filter: dict[str, Any] | None = None,
        first: int = 50,
        plan: Sequence[str] = (),
    ) -> list[LinearIssue]:
        """
        List issues matching an ``IssueFilter``.

        Args:
            filter: Linear issue filter (``None`` for all issues)
            first: Maximum number of issues to return
            plan: Relations embedded in the same request

        Returns:
            List of LinearIssue objects
        """
        query = (
            "query ListIssues($filter: IssueFilter, $first: Int) { "
            "issues(filter: $filter, first: $first) { nodes { "
            f"{ISSUE_SUMMARY_FIELDS} {selection_for('issue', plan)} }} }} }}"
        )
        data = await self.execute(query, {"filter": filter, "first": first})
        issues = LinearIssue.from_connection(data.get("issues"))
        logger.debug(f"Listed {len(issues)} issues (first={first})")
        return issues

    async def search_issues(
        self, term: str, first: int = 50, plan: Sequence[str] = ()
    ) -> list[LinearIssue]:
        """
        Full-text search for issues.

        Args:
            term: Search text
            first: Maximum number of results
            plan: Relations embedded in the same request

        Returns:
            List of LinearIssue objects carrying the search ``metadata``
        """
        query = (
            "query SearchIssues($term: String!, $first: Int) { "
            "searchIssues(term: $term, first: $first) { nodes { "
            f"{ISSUE_SUMMARY_FIELDS} metadata {selection_for('issue', plan)} }} }} }}"
        )
        data = await self.execute(query, {"term": term, "first": first})
        return LinearIssue.from_connection(data.get("searchIssues"))

    async def create_issue(
        self, input: dict[str, Any], plan: Sequence[str] = ()
    ) -> tuple[bool, LinearIssue]:
        """
        Create an issue.

        Args:
            input: ``IssueCreateInput`` fields
            plan: Relations of the created issue to return

        Returns:
            Tuple of (success, created issue)
        """
        mutation = (
            "mutation CreateIssue($input: IssueCreateInput!) { "
            "issueCreate(input: $input) { success issue { "
            f"{ISSUE_SUMMARY_FIELDS} {selection_for('issue', plan)} }} }} }}"
        )
        success, issue = await self.mutate(
            mutation, {"input": input}, "issueCreate", "issue"
        )
        logger.info(f"Created issue {issue.get('identifier')} (success={success})")
        return success, LinearIssue.from_api_response(issue)

    async def update_issue(
        self, issue_id: str, input: dict[str, Any], plan: Sequence[str] = ()
    ) -> tuple[bool, LinearIssue]:
        """
        Update an issue.

        Only the keys present in ``input`` are changed; a ``None`` value
        clears the field.

        Args:
            issue_id: Issue UUID or identifier
            input: ``IssueUpdateInput`` fields
            plan: Relations of the updated issue to return

        Returns:
            Tuple of (success, updated issue)
        """
        mutation = (
            "mutation UpdateIssue($id: String!, $input: IssueUpdateInput!) { "
            "issueUpdate(id: $id, input: $input) { success issue { "
            f"{ISSUE_SUMMARY_FIELDS} {selection_for('issue', plan)} }} }} }}"
        )
        success, issue = await self.mutate(
            mutation, {"id": issue_id, "input": input}, "issueUpdate", "issue"
        )
        logger.info(f"Updated issue {issue_id} (success={success})")
        return success, LinearIssue.from_api_response(issue)
