"""Error mapping tests — every failure leaves as the same envelope."""

import json

import pytest
from starlette.requests import Request

from talentflow.api.errors import INTERNAL_ERROR_MESSAGE, status_for, unhandled_error_handler
from talentflow.errors import (
    DomainValidationError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
)


@pytest.mark.parametrize(
    "exc,status",
    [
        (NotFoundError("x"), 404),
        (ForbiddenError("x"), 403),
        (UnauthenticatedError("x"), 401),
        (InvalidCredentialsError(), 401),
        (DomainValidationError("x"), 400),
    ],
)
def test_status_for_domain_errors(exc, status):
    assert status_for(exc) == status


@pytest.mark.asyncio
async def test_unhandled_error_is_generic_500():
    """Internals never leak: the body carries a fixed message only."""
    request = Request({"type": "http", "method": "GET", "path": "/api/jobs", "headers": []})
    resp = await unhandled_error_handler(request, RuntimeError("db password is hunter2"))
    assert resp.status_code == 500
    body = json.loads(resp.body)
    assert body == {"success": False, "message": INTERNAL_ERROR_MESSAGE, "data": None}


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(client):
    r = await client.get("/api/does-not-exist")
    assert r.status_code == 404
    assert r.json()["success"] is False
    assert r.json()["data"] is None


@pytest.mark.asyncio
async def test_wrong_method_uses_envelope(client, recruiter):
    r = await client.patch("/api/auth/me", headers=recruiter.headers)
    assert r.status_code == 405
    assert r.json()["success"] is False


@pytest.mark.asyncio
async def test_malformed_json_body(client):
    r = await client.post(
        "/api/auth/login",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Validation failed"
