"""Relation descriptors and explicit relation resolution.

Linear exposes an entity's relations (an issue's state, assignee, labels...)
as separately fetchable fields. Every relation a tool may need is declared
here once; tools pass a fixed plan (a tuple of relation names) and nothing
outside that plan is ever requested.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .client import LinearClient

logger = logging.getLogger("mcp-linear.linear")

# Scalar selections, shared by the per-entity mixins
USER_FIELDS = "id name displayName email active"
ISSUE_FIELDS = (
    "id identifier title description priority priorityLabel url "
    "createdAt updatedAt startedAt completedAt canceledAt dueDate estimate "
    "customerTicketCount previousIdentifiers branchName archivedAt "
    "autoArchivedAt autoClosedAt trashed"
)
ISSUE_SUMMARY_FIELDS = "id identifier title description priority priorityLabel url createdAt"
PROJECT_FIELDS = (
    "id name description content state url createdAt updatedAt "
    "startDate targetDate completedAt progress"
)
TEAM_FIELDS = "id name key description"
LABEL_FIELDS = "id name color description createdAt updatedAt"
PROJECT_STATUS_FIELDS = "id name color type description position"


@dataclass(frozen=True)
class Relation:
    """A lazily resolved field on a Linear entity."""

    field: str
    selection: str
    connection: bool = False  # Paginated: the value lives under ``nodes``
    arguments: str = ""  # e.g. "(first: 50)"

    def selection_text(self) -> str:
        """GraphQL selection for this relation, nested inside its parent."""
        body = f"nodes {{ {self.selection} }}" if self.connection else self.selection
        return f"{self.field}{self.arguments} {{ {body} }}"

    def unwrap(self, value: Any) -> Any:
        """Return the relation value with connection wrappers removed."""
        if not self.connection:
            return value
        if isinstance(value, dict):
            return value.get("nodes") or []
        return value or []


ISSUE_RELATIONS: dict[str, Relation] = {
    "state": Relation("state", "id name color type"),
    "assignee": Relation("assignee", "id name displayName email"),
    "creator": Relation("creator", "id name displayName email"),
    "team": Relation("team", "id name key"),
    "project": Relation("project", "id name state"),
    "parent": Relation("parent", "id identifier title"),
    "cycle": Relation("cycle", "id name number"),
    "labels": Relation("labels", "id name color", connection=True),
    "comments": Relation(
        "comments", "id body createdAt user { id name }", connection=True
    ),
    "attachments": Relation("attachments", "id title url", connection=True),
    "relations": Relation(
        "relations", "id type relatedIssue { id identifier title }", connection=True
    ),
}

PROJECT_RELATIONS: dict[str, Relation] = {
    "lead": Relation("lead", "id name displayName"),
    "status": Relation("status", "id name type"),
    "teams": Relation("teams", "id name key", connection=True),
    "issues": Relation(
        "issues",
        "id identifier title priority state { id name }",
        connection=True,
        arguments="(first: 50)",
    ),
    "members": Relation("members", "id name displayName", connection=True),
    "externalLinks": Relation("externalLinks", "id label url", connection=True),
}

TEAM_RELATIONS: dict[str, Relation] = {
    "states": Relation(
        "states",
        "id name color type position description",
        connection=True,
        arguments="(first: 250)",
    ),
    "labels": Relation(
        "labels", LABEL_FIELDS, connection=True, arguments="(first: 250)"
    ),
    "memberships": Relation(
        "memberships", "id user { id }", connection=True, arguments="(first: 250)"
    ),
}

RELATIONS: dict[str, dict[str, Relation]] = {
    "issue": ISSUE_RELATIONS,
    "project": PROJECT_RELATIONS,
    "team": TEAM_RELATIONS,
}


def plan_relations(root: str, plan: Sequence[str]) -> list[Relation]:
    """Look up the relations named by a plan.

    Raises:
        KeyError: If the root or any relation name is not declared
    """
    registry = RELATIONS[root]
    unknown = [name for name in plan if name not in registry]
    if unknown:
        msg = f"Undeclared {root} relation(s): {', '.join(unknown)}"
        raise KeyError(msg)
    return [registry[name] for name in plan]


def selection_for(root: str, plan: Sequence[str]) -> str:
    """Selection text embedding every planned relation in one request."""
    return " ".join(relation.selection_text() for relation in plan_relations(root, plan))


def relation_query(root: str, relation: Relation) -> str:
    """GraphQL document fetching a single relation of one entity."""
    operation = f"{root.capitalize()}{relation.field[0].upper()}{relation.field[1:]}"
    return (
        f"query {operation}($id: String!) {{ "
        f"{root}(id: $id) {{ id {relation.selection_text()} }} }}"
    )


class RelationsMixin(LinearClient):
    """Mixin resolving planned relations as independent concurrent lookups."""

    async def resolve_relations(
        self, root: str, entity_id: str, plan: Sequence[str]
    ) -> dict[str, Any]:
        """Fetch every relation in ``plan`` concurrently.

        Args:
            root: Entity type ('issue', 'project' or 'team')
            entity_id: Identifier of the entity whose relations are resolved
            plan: Relation names to resolve

        Returns:
            Mapping of relation name to its raw value (``None`` or a list for
            absent relations).

        Raises:
            KeyError: If the plan names an undeclared relation (before any request)
            LinearAPIError: If any lookup fails
        """
        relations = plan_relations(root, plan)
        if not relations:
            return {}

        logger.debug(f"Resolving {root} {entity_id} relations: {', '.join(plan)}")
        results = await asyncio.gather(
            *(self._fetch_relation(root, entity_id, relation) for relation in relations)
        )
        return dict(zip(plan, results, strict=True))

    async def _fetch_relation(
        self, root: str, entity_id: str, relation: Relation
    ) -> Any:
        data = await self.execute(relation_query(root, relation), {"id": entity_id})
        entity = data.get(root) or {}
        return relation.unwrap(entity.get(relation.field))
