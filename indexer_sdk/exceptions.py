from typing import Any, Dict, List, Optional, Sequence


class IndexerError(Exception):
    """Base exception for the SDK."""


class InvalidEnumError(IndexerError):
    """Free-text value did not match any variant of a closed enum."""

    def __init__(self, enum_name: str, value: Any, valid: Sequence[str]):
        options = "', '".join(valid)
        super().__init__(f"Invalid '{enum_name}' \"{value}\", must be one of ['{options}']")
        self.enum_name = enum_name
        self.value = value
        self.valid = list(valid)


class MissingParameterError(IndexerError):
    """Required fields absent for the given action type."""

    def __init__(self, action_type: Any, missing: Sequence[str]):
        type_name = getattr(action_type, "value", action_type)
        super().__init__(
            f"Missing required input parameters for '{type_name}' action: {', '.join(missing)}"
        )
        self.action_type = action_type
        self.missing = list(missing)


class EmptyFilterError(IndexerError):
    """No criteria supplied to a query or update filter."""

    def __init__(self) -> None:
        super().__init__(
            "No action filter provided, please specify at least one filter using "
            "['--id', '--type', '--status', '--source', '--reason']"
        )


class ParseError(IndexerError):
    """A field value failed its dedicated parser."""

    def __init__(self, field: str, cause: BaseException):
        super().__init__(f"Failed to parse value for key, {field}: {cause}")
        self.field = field
        self.cause = cause


class RemoteOperationError(IndexerError):
    """The management service reported a failure for an operation."""

    def __init__(
        self,
        operation: str,
        errors: List[Dict[str, Any]],
        status_code: Optional[int] = None,
    ):
        messages = "; ".join(
            str(e.get("message", e) if isinstance(e, dict) else e) for e in errors
        ) or "unknown error"
        super().__init__(f"{operation} failed: {messages}")
        self.operation = operation
        self.errors = errors
        self.status_code = status_code


class IndexerTimeoutError(IndexerError):
    """Timeout errors"""


class IndexerConnectionError(IndexerError):
    """Connection errors"""


class ConfigurationError(IndexerError):
    """Client configuration is missing or invalid."""
