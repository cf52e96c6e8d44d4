"""Tests for action type / status validation."""
import pytest

from indexer_sdk.exceptions import InvalidEnumError
from indexer_sdk.models import ActionParams, ActionStatus, ActionType, OrderDirection
from indexer_sdk.parsers import validate_action_status, validate_action_type, validate_enum


class TestValidateActionType:
    @pytest.mark.parametrize("text", ["allocate", "ALLOCATE", "Allocate", "aLLoCaTe"])
    def test_case_insensitive(self, text):
        assert validate_action_type(text) is ActionType.ALLOCATE

    def test_all_variants(self):
        assert validate_action_type("unallocate") is ActionType.UNALLOCATE
        assert validate_action_type("REALLOCATE") is ActionType.REALLOCATE

    @pytest.mark.parametrize("text", ["", "alloc", "allocate ", "close", "collect"])
    def test_invalid(self, text):
        with pytest.raises(InvalidEnumError) as exc_info:
            validate_action_type(text)
        assert exc_info.value.valid == ["allocate", "unallocate", "reallocate"]

    def test_error_message_lists_options_in_order(self):
        with pytest.raises(InvalidEnumError) as exc_info:
            validate_action_type("bogus")
        assert str(exc_info.value) == (
            "Invalid 'ActionType' \"bogus\", must be one of ['allocate', 'unallocate', 'reallocate']"
        )

    def test_none_is_invalid(self):
        with pytest.raises(InvalidEnumError):
            validate_action_type(None)


class TestValidateActionStatus:
    @pytest.mark.parametrize("text,expected", [
        ("queued", ActionStatus.QUEUED),
        ("APPROVED", ActionStatus.APPROVED),
        ("Pending", ActionStatus.PENDING),
        ("success", ActionStatus.SUCCESS),
        ("FAILED", ActionStatus.FAILED),
        ("canceled", ActionStatus.CANCELED),
    ])
    def test_case_insensitive(self, text, expected):
        assert validate_action_status(text) is expected

    def test_invalid(self):
        with pytest.raises(InvalidEnumError) as exc_info:
            validate_action_status("cancelled")
        assert exc_info.value.enum_name == "ActionStatus"
        assert exc_info.value.valid == [
            "queued", "approved", "pending", "deploying", "success", "failed", "canceled",
        ]


class TestOtherEnums:
    def test_order_by_matches_wire_value(self):
        assert validate_enum(ActionParams, "deploymentid") is ActionParams.DEPLOYMENT_ID
        assert validate_enum(ActionParams, "DEPLOYMENT_ID") is ActionParams.DEPLOYMENT_ID

    def test_order_by_error_lists_wire_values(self):
        with pytest.raises(InvalidEnumError) as exc_info:
            validate_enum(ActionParams, "nonsense")
        assert "deploymentID" in exc_info.value.valid
        assert "createdAt" in exc_info.value.valid
        assert "deployment_id" not in exc_info.value.valid
        assert "'deploymentID'" in str(exc_info.value)

    def test_order_direction(self):
        assert validate_enum(OrderDirection, "DESC") is OrderDirection.DESC
        with pytest.raises(InvalidEnumError):
            validate_enum(OrderDirection, "down")
