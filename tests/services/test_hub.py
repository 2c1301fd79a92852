"""Tests for the realtime control channel hub."""

import pytest

from tests.conftest import build_envelope
from tss_mediator.services.hub import ConnectionHub


@pytest.fixture
def hub() -> ConnectionHub:
    return ConnectionHub()


@pytest.fixture
def make_connection(mocker):
    def _make():
        connection = mocker.AsyncMock()
        connection.send_text = mocker.AsyncMock()
        return connection

    return _make


async def _hello(hub: ConnectionHub, connection, client_key: str) -> None:
    await hub.dispatch(connection, build_envelope("Hello", clientKey=client_key))


@pytest.mark.asyncio
async def test_hello_binds_identifier(hub, make_connection) -> None:
    conn = make_connection()
    await _hello(hub, conn, "A")
    assert hub.connection_for("A") is conn
    assert hub.connected_count == 1


@pytest.mark.asyncio
async def test_legacy_hello_header_is_accepted(hub, make_connection) -> None:
    conn = make_connection()
    await hub.dispatch(conn, build_envelope("HelloMessage", clientKey="A"))
    assert hub.connection_for("A") is conn


@pytest.mark.asyncio
async def test_reconnect_replaces_binding(hub, make_connection) -> None:
    first, second = make_connection(), make_connection()
    await _hello(hub, first, "A")
    await _hello(hub, second, "A")
    assert hub.connection_for("A") is second


@pytest.mark.asyncio
async def test_disconnect_removes_every_binding_of_connection(hub, make_connection) -> None:
    shared, other = make_connection(), make_connection()
    await _hello(hub, shared, "A")
    await _hello(hub, shared, "A-alias")
    await _hello(hub, other, "B")

    removed = hub.disconnect(shared)

    assert sorted(removed) == ["A", "A-alias"]
    assert hub.connection_for("A") is None
    assert hub.connection_for("B") is other


@pytest.mark.asyncio
async def test_start_session_records_owner(hub, make_connection) -> None:
    await hub.dispatch(make_connection(), build_envelope("StartSession", sessionID="s1", clientKey="A"))
    assert hub.owner_of("s1") == "A"


@pytest.mark.asyncio
async def test_start_session_accepts_owner_id_alias(hub, make_connection) -> None:
    await hub.dispatch(make_connection(), build_envelope("StartSession", sessionID="s1", ownerID="A"))
    assert hub.owner_of("s1") == "A"


@pytest.mark.asyncio
async def test_start_session_overwrites_owner(hub, make_connection) -> None:
    conn = make_connection()
    await hub.dispatch(conn, build_envelope("StartSession", sessionID="s1", clientKey="A"))
    await hub.dispatch(conn, build_envelope("StartSession", sessionID="s1", clientKey="B"))
    assert hub.owner_of("s1") == "B"


@pytest.mark.asyncio
async def test_join_is_forwarded_verbatim_to_owner(hub, make_connection) -> None:
    owner, joiner = make_connection(), make_connection()
    await _hello(hub, owner, "A")
    await hub.dispatch(owner, build_envelope("StartSession", sessionID="s1", clientKey="A"))

    join = build_envelope("JoinSession", sessionID="s1", clientKey="B")
    drop = build_envelope("DropSession", sessionID="s1", clientKey="B")
    await hub.dispatch(joiner, join)
    await hub.dispatch(joiner, drop)

    assert [call.args[0] for call in owner.send_text.await_args_list] == [join, drop]
    joiner.send_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_join_before_start_session_is_dropped(hub, make_connection) -> None:
    owner, joiner = make_connection(), make_connection()
    await _hello(hub, owner, "A")

    await hub.dispatch(joiner, build_envelope("JoinSession", sessionID="s1", clientKey="B"))

    owner.send_text.assert_not_awaited()
    joiner.send_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_join_with_offline_owner_is_dropped(hub, make_connection) -> None:
    joiner = make_connection()
    await hub.dispatch(joiner, build_envelope("StartSession", sessionID="s1", clientKey="A"))
    await hub.dispatch(joiner, build_envelope("JoinSession", sessionID="s1", clientKey="B"))
    joiner.send_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_end_session_forgets_owner(hub, make_connection) -> None:
    owner, joiner = make_connection(), make_connection()
    await _hello(hub, owner, "A")
    await hub.dispatch(owner, build_envelope("StartSession", sessionID="s1", clientKey="A"))
    await hub.dispatch(owner, build_envelope("EndSession", sessionID="s1"))

    assert hub.owner_of("s1") is None
    await hub.dispatch(joiner, build_envelope("JoinSession", sessionID="s1", clientKey="B"))
    owner.send_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_start_tss_reaches_only_connected_committee(hub, make_connection) -> None:
    a, b, outsider = make_connection(), make_connection(), make_connection()
    await _hello(hub, a, "A")
    await _hello(hub, b, "B")
    await _hello(hub, outsider, "Z")

    frame = build_envelope("StartTSS", committee=["A", "B", "C"])
    await hub.dispatch(a, frame)

    a.send_text.assert_awaited_once_with(frame)
    b.send_text.assert_awaited_once_with(frame)
    outsider.send_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_tss_routing_unicasts_verbatim(hub, make_connection) -> None:
    a, b = make_connection(), make_connection()
    await _hello(hub, a, "A")
    await _hello(hub, b, "B")

    frame = build_envelope("TSSRouting", to="B", round="1", payload="opaque-bytes")
    await hub.dispatch(a, frame)

    b.send_text.assert_awaited_once_with(frame)
    a.send_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_tss_routing_to_offline_client_is_dropped(hub, make_connection) -> None:
    a = make_connection()
    await _hello(hub, a, "A")
    await hub.dispatch(a, build_envelope("TSSRouting", to="B"))
    a.send_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_failed_send_does_not_raise(hub, make_connection) -> None:
    a, b = make_connection(), make_connection()
    b.send_text.side_effect = RuntimeError("socket closed")
    await _hello(hub, a, "A")
    await _hello(hub, b, "B")

    await hub.dispatch(a, build_envelope("StartTSS", committee=["A", "B"]))

    a.send_text.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "frame",
    [
        "not json",
        '{"header": "Unknown", "body": "{}"}',
        '{"header": "Hello"}',
        '{"header": "Hello", "body": "not json"}',
        '{"header": "Hello", "body": "{\\"wrong\\": 1}"}',
        '{"header": "StartTSS", "body": "{\\"committee\\": \\"A\\"}"}',
    ],
)
async def test_undecodable_frames_are_dropped(hub, make_connection, frame) -> None:
    conn = make_connection()
    await hub.dispatch(conn, frame)
    conn.send_text.assert_not_awaited()
    assert hub.connected_count == 0


@pytest.mark.asyncio
async def test_reset_forgets_everything(hub, make_connection) -> None:
    conn = make_connection()
    await _hello(hub, conn, "A")
    await hub.dispatch(conn, build_envelope("StartSession", sessionID="s1", clientKey="A"))
    hub.reset()
    assert hub.connected_count == 0
    assert hub.session_count == 0
