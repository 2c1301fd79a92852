# tests/conftest.py
from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tss_mediator.main import app as fastapi_app
from tss_mediator.services.hub import get_hub
from tss_mediator.services.message_store import get_message_store


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def reset_relay_state() -> Iterator[None]:
    """Give every test an empty store and hub."""
    get_message_store().clear()
    get_hub().reset()
    try:
        yield
    finally:
        get_message_store().clear()
        get_hub().reset()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def build_envelope(header: str, **payload: Any) -> str:
    """Encode a control envelope the way devices put it on the wire."""
    return json.dumps({"header": header, "body": json.dumps(payload)})


def build_message(sender: str, to: list[str], message_hash: str, body: str = "payload") -> dict[str, Any]:
    return {"from": sender, "to": to, "hash": message_hash, "body": body}
