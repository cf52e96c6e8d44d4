"""Actions resource - the indexer management action queue."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .. import queries
from ..actions import action_to_graphql
from ..models import (
    ActionFilter,
    ActionInput,
    ActionParams,
    ActionResult,
    ActionUpdateInput,
    OrderDirection,
)
from ..transport import Transport


def _results(data: Dict[str, Any], field: str) -> List[ActionResult]:
    return [ActionResult(**item) for item in data.get(field) or []]


class ActionsResource:
    """Client for the action queue operations of the management API.

    Every method is a single request; server-reported failures surface as
    RemoteOperationError and are never retried.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def queue_actions(self, actions: Sequence[ActionInput]) -> List[ActionResult]:
        """Add actions to the queue.

        Args:
            actions: Validated action inputs; an empty list is sent as-is

        Returns:
            The queued actions as stored by the server
        """
        data = await self._transport.execute(
            "queueActions",
            queries.QUEUE_ACTIONS,
            {"actions": [action.to_graphql() for action in actions]},
        )
        return _results(data, "queueActions")

    async def approve_actions(self, action_ids: Sequence[int]) -> List[ActionResult]:
        """Mark queued actions as approved for execution."""
        data = await self._transport.execute(
            "approveActions", queries.APPROVE_ACTIONS, {"actionIDs": list(action_ids)}
        )
        return _results(data, "approveActions")

    async def execute_approved_actions(self) -> List[ActionResult]:
        """Ask the server to execute every approved action now.

        Returns:
            The executed actions, with ``transaction`` or ``failure_reason`` set
        """
        data = await self._transport.execute(
            "executeApprovedActions", queries.EXECUTE_APPROVED_ACTIONS
        )
        return _results(data, "executeApprovedActions")

    async def cancel_actions(self, action_ids: Sequence[int]) -> List[ActionResult]:
        data = await self._transport.execute(
            "cancelActions", queries.CANCEL_ACTIONS, {"actionIDs": list(action_ids)}
        )
        return _results(data, "cancelActions")

    async def delete_actions(self, action_ids: Sequence[int]) -> List[ActionResult]:
        data = await self._transport.execute(
            "deleteActions", queries.DELETE_ACTIONS, {"actionIDs": list(action_ids)}
        )
        return _results(data, "deleteActions")

    async def update_actions(
        self,
        action_filter: ActionFilter,
        update: ActionUpdateInput,
    ) -> List[ActionResult]:
        """Apply ``update`` to every action matching ``action_filter``.

        Args:
            action_filter: Non-empty filter selecting the actions
            update: Parsed update; only explicitly set fields are sent

        Returns:
            The updated actions
        """
        data = await self._transport.execute(
            "updateActions",
            queries.UPDATE_ACTIONS,
            {"filter": action_filter.to_graphql(), "action": action_to_graphql(update)},
        )
        return _results(data, "updateActions")

    async def fetch_action(self, action_id: int) -> Optional[ActionResult]:
        """Get one action by id, or None if the server has no such action."""
        data = await self._transport.execute(
            "action", queries.ACTION, {"actionID": action_id}
        )
        item = data.get("action")
        return ActionResult(**item) if item else None

    async def fetch_actions(
        self,
        action_filter: ActionFilter,
        first: Optional[int] = None,
        order_by: Optional[ActionParams] = None,
        order_direction: Optional[OrderDirection] = None,
    ) -> List[ActionResult]:
        """Query actions.

        Args:
            action_filter: Non-empty filter selecting the actions
            first: Return at most this many actions
            order_by: Column to sort by
            order_direction: Sort direction

        Returns:
            Matching actions in server order
        """
        variables: Dict[str, Any] = {"filter": action_filter.to_graphql()}
        if first is not None:
            variables["first"] = first
        if order_by is not None:
            variables["orderBy"] = ActionParams(order_by).value
        if order_direction is not None:
            variables["orderDirection"] = OrderDirection(order_direction).value

        data = await self._transport.execute("actions", queries.ACTIONS, variables)
        return _results(data, "actions")
