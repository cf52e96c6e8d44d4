from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .exceptions import EmptyFilterError, MissingParameterError


class CaseInsensitiveEnum(str, Enum):
    """Enum that allows case-insensitive value lookup."""
    @classmethod
    def _missing_(cls, value: object) -> 'CaseInsensitiveEnum | None':
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value.lower() == lowered or member.name.lower() == lowered:
                    return member
        return None

    @classmethod
    def variant_names(cls) -> List[str]:
        """Wire values in declaration order, as shown to users."""
        return [member.value for member in cls]


class ActionType(CaseInsensitiveEnum):
    ALLOCATE = "allocate"
    UNALLOCATE = "unallocate"
    REALLOCATE = "reallocate"


class ActionStatus(CaseInsensitiveEnum):
    QUEUED = "queued"
    APPROVED = "approved"
    PENDING = "pending"
    DEPLOYING = "deploying"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELED = "canceled"


class ActionParams(CaseInsensitiveEnum):
    """Columns the management service can order action queries by."""
    ID = "id"
    STATUS = "status"
    TYPE = "type"
    DEPLOYMENT_ID = "deploymentID"
    ALLOCATION_ID = "allocationID"
    TRANSACTION = "transaction"
    AMOUNT = "amount"
    POI = "poi"
    FORCE = "force"
    SOURCE = "source"
    REASON = "reason"
    PRIORITY = "priority"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    PROTOCOL_NETWORK = "protocolNetwork"


class OrderDirection(CaseInsensitiveEnum):
    ASC = "asc"
    DESC = "desc"


# Wire names of the fields each action type cannot do without
REQUIRED_ACTION_FIELDS: Dict[ActionType, Tuple[str, ...]] = {
    ActionType.ALLOCATE: ("deploymentID", "amount"),
    ActionType.UNALLOCATE: ("deploymentID", "allocationID"),
    ActionType.REALLOCATE: ("deploymentID", "allocationID", "amount"),
}


def _wire_value(model: BaseModel, wire_name: str) -> Any:
    for name, info in type(model).model_fields.items():
        if (info.alias or name) == wire_name:
            return getattr(model, name)
    return None


def missing_required_fields(action_type: ActionType, model: BaseModel) -> List[str]:
    return [
        field for field in REQUIRED_ACTION_FIELDS[action_type]
        if _wire_value(model, field) is None
    ]


# ── Per-type action parameters ──────────────────────────────


class _VariantParams(BaseModel):
    action_type: ClassVar[ActionType]

    deployment_id: Optional[str] = Field(None, alias="deploymentID")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class AllocateParams(_VariantParams):
    """Open a new allocation of ``amount`` on a deployment."""
    action_type: ClassVar[ActionType] = ActionType.ALLOCATE

    amount: Optional[Union[str, int]] = None


class UnallocateParams(_VariantParams):
    """Close ``allocation_id``, optionally with an explicit POI."""
    action_type: ClassVar[ActionType] = ActionType.UNALLOCATE

    allocation_id: Optional[str] = Field(None, alias="allocationID")
    poi: Optional[str] = None
    force: Optional[Union[bool, str]] = None


class ReallocateParams(_VariantParams):
    """Close ``allocation_id`` and reopen on the same deployment with ``amount``."""
    action_type: ClassVar[ActionType] = ActionType.REALLOCATE

    allocation_id: Optional[str] = Field(None, alias="allocationID")
    amount: Optional[Union[str, int]] = None
    poi: Optional[str] = None
    force: Optional[Union[bool, str]] = None


ActionVariantParams = Union[AllocateParams, UnallocateParams, ReallocateParams]

VARIANT_PARAMS: Dict[ActionType, type] = {
    ActionType.ALLOCATE: AllocateParams,
    ActionType.UNALLOCATE: UnallocateParams,
    ActionType.REALLOCATE: ReallocateParams,
}

# Meaning of param1..param4 for each action type, in order
POSITIONAL_LAYOUT: Dict[ActionType, Tuple[str, ...]] = {
    ActionType.ALLOCATE: ("amount",),
    ActionType.UNALLOCATE: ("allocation_id", "poi", "force"),
    ActionType.REALLOCATE: ("allocation_id", "amount", "poi", "force"),
}


class GenericActionInputParams(BaseModel):
    """Positional parameters as typed on the command line.

    The meaning of ``param1``..``param4`` depends on the action type; use
    :meth:`to_variant` to obtain the named parameters for a type.
    """
    target_deployment: Optional[str] = None
    param1: Optional[str] = None
    param2: Optional[str] = None
    param3: Optional[str] = None
    param4: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_values(cls, target_deployment: Optional[str], *values: Optional[str]) -> "GenericActionInputParams":
        if len(values) > 4:
            raise ValueError(f"At most 4 positional values are accepted, got {len(values)}")
        params = {f"param{i}": value for i, value in enumerate(values, start=1)}
        return cls(target_deployment=target_deployment, **params)

    def to_variant(self, action_type: ActionType) -> ActionVariantParams:
        positional = [self.param1, self.param2, self.param3, self.param4]
        fields: Dict[str, Any] = {"deployment_id": self.target_deployment}
        for name, value in zip(POSITIONAL_LAYOUT[action_type], positional):
            fields[name] = value
        return VARIANT_PARAMS[action_type](**fields)


# ── Action records ──────────────────────────────────────────


class ActionInput(BaseModel):
    """A request to queue one action."""
    type: ActionType
    deployment_id: Optional[str] = Field(None, alias="deploymentID")
    allocation_id: Optional[str] = Field(None, alias="allocationID")
    amount: Optional[str] = None
    poi: Optional[str] = None
    force: bool = False
    source: str
    reason: str
    status: ActionStatus
    priority: int = 0
    protocol_network: str = Field(alias="protocolNetwork")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @model_validator(mode="after")
    def _check_required_fields(self) -> "ActionInput":
        missing = missing_required_fields(self.type, self)
        if missing:
            raise MissingParameterError(self.type, missing)
        return self

    def to_graphql(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class ActionResult(BaseModel):
    """An action as stored by the management service."""
    id: int
    type: ActionType
    deployment_id: str = Field(alias="deploymentID")
    allocation_id: Optional[str] = Field(None, alias="allocationID")
    amount: Optional[str] = None
    poi: Optional[str] = None
    force: Optional[bool] = None
    source: Optional[str] = None
    reason: Optional[str] = None
    status: ActionStatus
    priority: Optional[int] = None
    protocol_network: Optional[str] = Field(None, alias="protocolNetwork")
    transaction: Optional[str] = None
    failure_reason: Optional[str] = Field(None, alias="failureReason")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ActionFilter(BaseModel):
    """Criteria selecting actions for queries and bulk updates."""
    id: Optional[int] = None
    type: Optional[ActionType] = None
    status: Optional[ActionStatus] = None
    source: Optional[str] = None
    reason: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_not_empty(self) -> "ActionFilter":
        if all(getattr(self, name) is None for name in type(self).model_fields):
            raise EmptyFilterError()
        return self

    def to_graphql(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ActionUpdateInput(BaseModel):
    """Partial action used for bulk updates.

    Only fields that were explicitly supplied are sent; an explicit ``None``
    is sent as null.
    """
    id: Optional[int] = None
    deployment_id: Optional[str] = Field(None, alias="deploymentID")
    allocation_id: Optional[str] = Field(None, alias="allocationID")
    amount: Optional[int] = None
    poi: Optional[str] = None
    force: Optional[bool] = None
    type: Optional[ActionType] = None
    status: Optional[ActionStatus] = None
    reason: Optional[str] = None
    protocol_network: Optional[str] = Field(None, alias="protocolNetwork")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
