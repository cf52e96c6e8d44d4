"""Field-level parsers and validators.

Each function takes user-supplied text and either returns the normalized
value or raises. They are shared by the action builder, the filter builder
and the update parser table.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any, Callable, Dict, Optional, TypeVar, Union

from .exceptions import InvalidEnumError
from .models import ActionStatus, ActionType, CaseInsensitiveEnum

T = TypeVar("T")
U = TypeVar("U")

GRT_DECIMALS = 18
ZERO_POI = "0x" + "00" * 32

_POI_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_CAIP2_RE = re.compile(r"^[-a-z0-9]{3,8}:[-_a-zA-Z0-9]{1,32}$")
_ALIAS_RE = re.compile(r"^[a-z-]+$")

CAIP2_BY_CHAIN_ALIAS: Dict[str, str] = {
    "mainnet": "eip155:1",
    "goerli": "eip155:5",
    "gnosis": "eip155:100",
    "hardhat": "eip155:1337",
    "arbitrum-one": "eip155:42161",
    "arbitrum-goerli": "eip155:421613",
    "arbitrum-sepolia": "eip155:421614",
    "avalanche": "eip155:43114",
    "matic": "eip155:137",
    "celo": "eip155:42220",
    "optimism": "eip155:10",
    "fantom": "eip155:250",
    "sepolia": "eip155:11155111",
    "bsc": "eip155:56",
    "linea": "eip155:59144",
    "scroll": "eip155:534352",
    "base": "eip155:8453",
    "moonbeam": "eip155:1284",
    "fuse": "eip155:122",
    "blast-mainnet": "eip155:81457",
    "boba": "eip155:288",
    "boba-bnb": "eip155:56288",
    "zora": "eip155:7777777",
    "mode-mainnet": "eip155:34443",
}

CAIP2_BY_CHAIN_ID: Dict[int, str] = {
    int(caip2.split(":")[1]): caip2 for caip2 in CAIP2_BY_CHAIN_ALIAS.values()
}


def _validate_enum(enum_cls: type, enum_name: str, text: Any) -> Any:
    try:
        return enum_cls(text)
    except ValueError:
        raise InvalidEnumError(enum_name, text, enum_cls.variant_names()) from None


def validate_action_type(text: str) -> ActionType:
    """Match ``text`` against the action types, ignoring case."""
    return _validate_enum(ActionType, "ActionType", text)


def validate_action_status(text: str) -> ActionStatus:
    """Match ``text`` against the action statuses, ignoring case."""
    return _validate_enum(ActionStatus, "ActionStatus", text)


def validate_enum(enum_cls: type, text: str) -> CaseInsensitiveEnum:
    return _validate_enum(enum_cls, enum_cls.__name__, text)


def null_pass_through(fn: Callable[[T], U]) -> Callable[[Optional[T]], Optional[U]]:
    """Wrap ``fn`` so that ``None`` is returned untouched."""
    def wrapper(value: Optional[T]) -> Optional[U]:
        return None if value is None else fn(value)
    return wrapper


def identity(value: T) -> T:
    return value


def parse_int(value: Union[str, int, float]) -> int:
    """Parse an integer id, rejecting booleans and fractional numbers."""
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Expected an integer, got {value!r}")
        return int(value)
    return int(str(value).strip())


def normalize_poi(poi: Optional[str]) -> Optional[str]:
    """Expand the ``0`` / ``0x0`` shorthand into the 32-byte zero hash."""
    if poi in ("0", "0x0"):
        return ZERO_POI
    return poi


def validate_poi(poi: Union[str, int, None]) -> Optional[str]:
    """Check that ``poi`` is a 32 byte hex string ('0x' + 64 hex digits).

    ``0`` (string or number) is accepted as the zero POI.
    """
    if poi is None:
        return None
    if poi == 0 or poi == "0":
        return ZERO_POI
    if not isinstance(poi, str) or not _POI_RE.match(poi):
        raise ValueError(f"Invalid POI provided ('{poi}'): Must be a 32 byte length hex string")
    return poi


def parse_boolean(value: Union[str, bool, int, None]) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() not in ("", "false", "f", "0")


def parse_grt(value: Union[str, int]) -> int:
    """Parse a decimal GRT amount into base units (18 decimals)."""
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid GRT amount: '{value}'") from None
    if not amount.is_finite():
        raise ValueError(f"Invalid GRT amount: '{value}'")
    with localcontext() as ctx:
        ctx.prec = 100
        base_units = amount.scaleb(GRT_DECIMALS)
    if base_units != base_units.to_integral_value():
        raise ValueError(f"GRT amount '{value}' has more than {GRT_DECIMALS} decimals")
    return int(base_units)


def format_grt(base_units: int) -> str:
    """Format base units as a decimal GRT string, e.g. ``12.5`` or ``1.0``."""
    sign = "-" if base_units < 0 else ""
    whole, fraction = divmod(abs(int(base_units)), 10 ** GRT_DECIMALS)
    fraction_text = str(fraction).rjust(GRT_DECIMALS, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{fraction_text}"


def resolve_chain_id(key: Union[str, int]) -> str:
    """Resolve a chain alias, numeric chain id or CAIP-2 id to a CAIP-2 id."""
    text = str(key)
    caip2: Optional[str] = None
    if text.isdigit():
        caip2 = CAIP2_BY_CHAIN_ID.get(int(text))
    elif ":" in text:
        _, _, reference = text.partition(":")
        if reference.isdigit():
            caip2 = CAIP2_BY_CHAIN_ID.get(int(reference))
    else:
        caip2 = CAIP2_BY_CHAIN_ALIAS.get(text)
    if caip2 is None:
        raise ValueError(f"Failed to resolve CAIP2 ID from the provided network alias: {key}")
    return caip2


def validate_network_identifier(text: str) -> str:
    """Accept a CAIP-2 id (``eip155:1``) or a network alias (``mainnet``)."""
    if not isinstance(text, str) or not (_CAIP2_RE.match(text) or _ALIAS_RE.match(text)):
        raise ValueError(
            f"Failed to parse \"{text}\". Expected: a CAIP-2 network identifier or a network alias"
        )
    try:
        return resolve_chain_id(text)
    except ValueError:
        raise ValueError(
            f"Failed to parse \"{text}\". Expected: a supported network identifier"
        ) from None
