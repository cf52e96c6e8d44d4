"""
Indexer management SDK.

Builds and validates action queue records (allocate / unallocate /
reallocate / bulk update) and exchanges them with the indexer management
GraphQL API.
"""

from .actions import (
    ACTION_UPDATE_PARSERS,
    action_to_graphql,
    build_action_filter,
    build_action_input,
    parse_action_update_input,
    validate_action_input,
)
from .client import IndexerManagementClient
from .exceptions import (
    ConfigurationError,
    EmptyFilterError,
    IndexerConnectionError,
    IndexerError,
    IndexerTimeoutError,
    InvalidEnumError,
    MissingParameterError,
    ParseError,
    RemoteOperationError,
)
from .models import (
    ActionFilter,
    ActionInput,
    ActionParams,
    ActionResult,
    ActionStatus,
    ActionType,
    ActionUpdateInput,
    AllocateParams,
    GenericActionInputParams,
    OrderDirection,
    ReallocateParams,
    UnallocateParams,
)
from .logging_config import setup_basic_logging
from .parsers import validate_action_status, validate_action_type

__all__ = [
    "IndexerManagementClient",
    # Builders
    "build_action_input",
    "validate_action_input",
    "build_action_filter",
    "parse_action_update_input",
    "action_to_graphql",
    "ACTION_UPDATE_PARSERS",
    "setup_basic_logging",
    "validate_action_type",
    "validate_action_status",
    # Types
    "ActionType",
    "ActionStatus",
    "ActionParams",
    "OrderDirection",
    "ActionInput",
    "ActionResult",
    "ActionFilter",
    "ActionUpdateInput",
    "GenericActionInputParams",
    "AllocateParams",
    "UnallocateParams",
    "ReallocateParams",
    # Errors
    "IndexerError",
    "InvalidEnumError",
    "MissingParameterError",
    "EmptyFilterError",
    "ParseError",
    "RemoteOperationError",
    "IndexerConnectionError",
    "IndexerTimeoutError",
    "ConfigurationError",
]

__version__ = "0.1.0"
