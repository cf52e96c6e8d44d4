"""Construction and validation of action records.

Everything in this module runs before any request is made: a record that
leaves these functions has passed every local check.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from .exceptions import MissingParameterError, ParseError
from .models import (
    ActionFilter,
    ActionInput,
    ActionStatus,
    ActionType,
    ActionUpdateInput,
    ActionVariantParams,
    GenericActionInputParams,
    VARIANT_PARAMS,
    missing_required_fields,
)
from .parsers import (
    format_grt,
    identity,
    normalize_poi,
    null_pass_through,
    parse_boolean,
    parse_grt,
    parse_int,
    validate_action_status,
    validate_action_type,
    validate_network_identifier,
    validate_poi,
)

logger = logging.getLogger(__name__)

ActionParamsArg = Union[GenericActionInputParams, ActionVariantParams]


def _as_variant(action_type: ActionType, params: ActionParamsArg) -> ActionVariantParams:
    if isinstance(params, GenericActionInputParams):
        return params.to_variant(action_type)
    expected = VARIANT_PARAMS[action_type]
    if not isinstance(params, expected):
        raise TypeError(
            f"{type(params).__name__} cannot describe a '{action_type.value}' action, "
            f"expected {expected.__name__}"
        )
    return params


def validate_action_input(action_type: ActionType, params: ActionParamsArg) -> None:
    """Raise MissingParameterError naming every required field absent for ``action_type``."""
    variant = _as_variant(action_type, params)
    missing = missing_required_fields(action_type, variant)
    if missing:
        raise MissingParameterError(action_type, missing)


def build_action_input(
    action_type: ActionType,
    params: ActionParamsArg,
    source: str,
    reason: str,
    status: ActionStatus,
    priority: int,
    protocol_network: str,
) -> ActionInput:
    """Turn per-type parameters plus queue metadata into an ActionInput.

    Args:
        action_type: Which change is requested
        params: Either positional params (``target_deployment``, ``param1``..)
            or the named params model for ``action_type``
        source: Who decided on the action (e.g. ``indexerCLI``)
        reason: Why the action is being taken
        status: Initial queue status
        priority: Execution priority
        protocol_network: Network the allocation lives on

    Returns:
        A validated ActionInput

    Raises:
        MissingParameterError: A required field for ``action_type`` is absent
    """
    variant = _as_variant(action_type, params)
    validate_action_input(action_type, variant)

    fields: Dict[str, Any] = {
        "type": action_type,
        "deployment_id": variant.deployment_id,
        "source": source,
        "reason": reason,
        "status": status,
        "priority": priority,
        "protocol_network": protocol_network,
    }
    amount = getattr(variant, "amount", None)
    if amount is not None:
        fields["amount"] = str(amount)
    if action_type in (ActionType.UNALLOCATE, ActionType.REALLOCATE):
        fields["allocation_id"] = variant.allocation_id
        fields["poi"] = normalize_poi(variant.poi)
        fields["force"] = variant.force is True or variant.force == "true"

    action = ActionInput(**fields)
    logger.debug("Built %s action input for deployment %s", action_type.value, action.deployment_id)
    return action


# Parsers for each field accepted by parse_action_update_input, keyed by wire name
ACTION_UPDATE_PARSERS: Dict[str, Callable[[Any], Any]] = {
    "id": null_pass_through(parse_int),
    "deploymentID": null_pass_through(identity),
    "allocationID": identity,
    "amount": null_pass_through(parse_grt),
    "poi": null_pass_through(validate_poi),
    "force": parse_boolean,
    "type": validate_action_type,
    "status": validate_action_status,
    "reason": null_pass_through(identity),
    "protocolNetwork": validate_network_identifier,
}

# Inverse direction: parsed values back to what the management API expects
ACTION_UPDATE_TO_GRAPHQL: Dict[str, Callable[[Any], Any]] = {
    "amount": null_pass_through(format_grt),
    "type": null_pass_through(lambda x: x.value),
    "status": null_pass_through(lambda x: x.value),
}


def parse_action_update_input(update: Mapping[str, Any]) -> ActionUpdateInput:
    """Run every supplied field through its parser.

    Fails fast: the first unknown field or parser failure raises ParseError
    and no further fields are attempted.
    """
    parsed: Dict[str, Any] = {}
    for key, value in update.items():
        parser = ACTION_UPDATE_PARSERS.get(key)
        try:
            if parser is None:
                raise KeyError(f"'{key}' is not an updatable action field")
            parsed[key] = parser(value)
        except Exception as e:
            raise ParseError(key, e) from e
    try:
        return ActionUpdateInput(**parsed)
    except ValidationError as e:
        # loc is the wire name since fields are populated by alias
        errors = e.errors()
        field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else "update"
        raise ParseError(field, e) from e


def action_to_graphql(update: ActionUpdateInput) -> Dict[str, Any]:
    """Serialize the explicitly set fields of ``update`` for the wire."""
    wire = update.model_dump(by_alias=True, exclude_unset=True)
    return {
        key: ACTION_UPDATE_TO_GRAPHQL.get(key, identity)(value)
        for key, value in wire.items()
    }


def build_action_filter(
    id: Optional[str] = None,
    type: Optional[str] = None,
    status: Optional[str] = None,
    source: Optional[str] = None,
    reason: Optional[str] = None,
) -> ActionFilter:
    """Build a filter from optional criteria; at least one must be given."""
    criteria: Dict[str, Any] = {}
    if id:
        try:
            criteria["id"] = parse_int(id)
        except (TypeError, ValueError) as e:
            raise ParseError("id", e) from e
    if type:
        criteria["type"] = validate_action_type(type)
    if status:
        criteria["status"] = validate_action_status(status)
    if source:
        criteria["source"] = source
    if reason:
        criteria["reason"] = reason
    return ActionFilter(**criteria)
