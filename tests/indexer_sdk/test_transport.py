"""Tests for the GraphQL transport and the client end to end."""
import json

import httpx
import pytest

from indexer_sdk import IndexerManagementClient
from indexer_sdk.actions import build_action_input
from indexer_sdk.exceptions import (
    IndexerConnectionError,
    IndexerTimeoutError,
    RemoteOperationError,
)
from indexer_sdk.models import ActionStatus, ActionType, GenericActionInputParams
from indexer_sdk.transport import Transport

URL = "http://indexer-agent:18000"
DEPLOYMENT = "QmTest1234567890abcdefghijklmnopqrstuvwxyzABCDEF"


def recording_transport(response_factory):
    """Return (requests, MockTransport) where every request body is recorded."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(json.loads(request.content))
        return response_factory(request)

    return requests, httpx.MockTransport(handler)


@pytest.mark.asyncio
class TestTransport:
    async def test_returns_data(self):
        requests, mock = recording_transport(
            lambda r: httpx.Response(200, json={"data": {"approveActions": []}})
        )
        async with Transport(URL, 5.0, http_transport=mock) as transport:
            data = await transport.execute("approveActions", "mutation { x }", {"actionIDs": [1]})

        assert data == {"approveActions": []}
        assert requests == [{
            "query": "mutation { x }",
            "operationName": "approveActions",
            "variables": {"actionIDs": [1]},
        }]

    async def test_omits_variables_when_none(self):
        requests, mock = recording_transport(
            lambda r: httpx.Response(200, json={"data": {"executeApprovedActions": []}})
        )
        async with Transport(URL, 5.0, http_transport=mock) as transport:
            await transport.execute("executeApprovedActions", "mutation { y }")

        assert "variables" not in requests[0]

    async def test_graphql_errors_are_preserved(self):
        errors = [{"message": "Cannot approve actions", "extensions": {"code": "IE069"}}]
        _, mock = recording_transport(
            lambda r: httpx.Response(200, json={"data": None, "errors": errors})
        )
        async with Transport(URL, 5.0, http_transport=mock) as transport:
            with pytest.raises(RemoteOperationError) as exc_info:
                await transport.execute("approveActions", "mutation { x }", {})

        assert exc_info.value.errors == errors
        assert exc_info.value.operation == "approveActions"
        assert exc_info.value.status_code == 200
        assert "Cannot approve actions" in str(exc_info.value)

    async def test_non_object_error_entries(self):
        errors = ["boom", {"message": "second"}]
        _, mock = recording_transport(
            lambda r: httpx.Response(200, json={"data": None, "errors": errors})
        )
        async with Transport(URL, 5.0, http_transport=mock) as transport:
            with pytest.raises(RemoteOperationError) as exc_info:
                await transport.execute("cancelActions", "mutation { x }", {})

        assert exc_info.value.errors == errors
        assert str(exc_info.value) == "cancelActions failed: boom; second"

    async def test_http_error_without_graphql_body(self):
        _, mock = recording_transport(lambda r: httpx.Response(502, text="Bad Gateway"))
        async with Transport(URL, 5.0, http_transport=mock) as transport:
            with pytest.raises(RemoteOperationError) as exc_info:
                await transport.execute("actions", "query { x }", {})

        assert exc_info.value.status_code == 502
        assert exc_info.value.errors == [{"message": "Bad Gateway"}]

    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with Transport(URL, 5.0, http_transport=httpx.MockTransport(handler)) as transport:
            with pytest.raises(IndexerTimeoutError):
                await transport.execute("actions", "query { x }", {})

    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with Transport(URL, 5.0, http_transport=httpx.MockTransport(handler)) as transport:
            with pytest.raises(IndexerConnectionError):
                await transport.execute("actions", "query { x }", {})

    async def test_not_started(self):
        with pytest.raises(RuntimeError):
            await Transport(URL, 5.0).execute("actions", "query { x }", {})


@pytest.mark.asyncio
async def test_client_queue_then_approve():
    def respond(request):
        body = json.loads(request.content)
        if body["operationName"] == "queueActions":
            queued = [
                dict(action, id=i + 1, transaction=None, failureReason=None)
                for i, action in enumerate(body["variables"]["actions"])
            ]
            return httpx.Response(200, json={"data": {"queueActions": queued}})
        approved = [
            {"id": i, "type": "allocate", "deploymentID": DEPLOYMENT, "status": "approved"}
            for i in body["variables"]["actionIDs"]
        ]
        return httpx.Response(200, json={"data": {"approveActions": approved}})

    requests, mock = recording_transport(respond)
    action = build_action_input(
        ActionType.ALLOCATE,
        GenericActionInputParams.from_values(DEPLOYMENT, "10000"),
        "indexerCLI", "manual", ActionStatus.QUEUED, 0, "arbitrum-sepolia",
    )

    async with IndexerManagementClient(URL, http_transport=mock) as client:
        queued = await client.actions.queue_actions([action])
        approved = await client.actions.approve_actions([a.id for a in queued])

    assert [r["operationName"] for r in requests] == ["queueActions", "approveActions"]
    assert requests[0]["variables"]["actions"][0]["deploymentID"] == DEPLOYMENT
    assert queued[0].amount == "10000"
    assert approved[0].status is ActionStatus.APPROVED
