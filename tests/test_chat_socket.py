import json

import pytest
from starlette.websockets import WebSocketDisconnect

from chat_relay.application.realtime import SUPERSEDED_CLOSE_CODE
from chat_relay.infrastructure.persistence import InMemoryMessageRepository


def status(user_id: int, online: bool) -> dict:
    return {"event": "user_status", "data": {"userId": user_id, "online": online}}


def send_message(receiver_id: int, text: str) -> dict:
    return {"event": "send_message", "data": {"receiverId": receiver_id, "text": text}}


def online_map(roster: list[dict]) -> dict[int, bool]:
    return {entry["id"]: entry["online"] for entry in roster}


def test_end_to_end_private_message(client, bearer):
    with client.websocket_connect("/ws", headers=bearer(1)) as one:
        assert one.receive_json() == status(1, True)
        with client.websocket_connect("/ws", headers=bearer(2)) as two:
            assert two.receive_json() == status(2, True)
            assert one.receive_json() == status(2, True)

            one.send_json(send_message(2, "hi"))

            received = two.receive_json()
            confirmed = one.receive_json()
            assert received["event"] == "new_message"
            assert confirmed["event"] == "message_sent"
            assert received["data"]["text"] == "hi"
            assert received["data"]["senderId"] == 1
            assert received["data"]["receiverId"] == 2
            assert confirmed["data"] == received["data"]

    history = client.get("/api/messages/1", headers=bearer(2)).json()
    assert [(m["senderId"], m["receiverId"], m["text"]) for m in history] == [
        (1, 2, "hi")
    ]
    assert history[0]["id"] == received["data"]["id"]


def test_message_to_offline_user_is_logged_and_confirmed(client, bearer):
    with client.websocket_connect("/ws", headers=bearer(1)) as one:
        assert one.receive_json() == status(1, True)

        one.send_json(send_message(2, "hi"))

        confirmed = one.receive_json()
        assert confirmed["event"] == "message_sent"
        assert confirmed["data"]["text"] == "hi"

    history = client.get("/api/messages/2", headers=bearer(1)).json()
    assert [(m["senderId"], m["receiverId"], m["text"]) for m in history] == [
        (1, 2, "hi")
    ]

    # Connecting later does not replay the message
    with client.websocket_connect("/ws", headers=bearer(2)) as two:
        assert two.receive_json() == status(2, True)
        two.send_json(send_message(3, "ping"))
        assert two.receive_json()["event"] == "message_sent"


def test_presence_round_trip_seen_by_other_user(client, bearer):
    with client.websocket_connect("/ws", headers=bearer(2)) as observer:
        assert observer.receive_json() == status(2, True)

        with client.websocket_connect("/ws", headers=bearer(1)) as one:
            assert one.receive_json() == status(1, True)
            assert observer.receive_json() == status(1, True)
            roster = client.get("/api/users", headers=bearer(2)).json()
            assert online_map(roster)[1] is True
            assert client.get("/").json()["activeUsers"] == 2

        assert observer.receive_json() == status(1, False)
        roster = client.get("/api/users", headers=bearer(2)).json()
        assert online_map(roster)[1] is False


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer forged"}, {"Cookie": "auth_token=forged"}],
)
def test_rejected_admission_is_invisible(client, bearer, headers):
    with client.websocket_connect("/ws", headers=bearer(2)) as observer:
        assert observer.receive_json() == status(2, True)

        with pytest.raises(WebSocketDisconnect) as excinfo:
            with client.websocket_connect("/ws", headers=headers):
                pass
        assert excinfo.value.code == 1008

        # The next thing the observer sees is its own confirmation, not a presence change
        observer.send_json(send_message(3, "anyone?"))
        assert observer.receive_json()["event"] == "message_sent"
        assert client.get("/").json()["activeUsers"] == 1


def test_session_cookie_is_accepted(client, token_for):
    headers = {"Cookie": f"auth_token={token_for(4)}"}
    with client.websocket_connect("/ws", headers=headers) as four:
        assert four.receive_json() == status(4, True)


def test_typing_indicator_forwarded(client, bearer):
    with client.websocket_connect("/ws", headers=bearer(1)) as one:
        assert one.receive_json() == status(1, True)
        with client.websocket_connect("/ws", headers=bearer(2)) as two:
            assert two.receive_json() == status(2, True)
            assert one.receive_json() == status(2, True)

            one.send_json({"event": "typing", "data": {"receiverId": 2, "isTyping": True}})

            assert two.receive_json() == {
                "event": "user_typing",
                "data": {"userId": 1, "isTyping": True},
            }

    assert client.get("/api/messages/2", headers=bearer(1)).json() == []


@pytest.mark.parametrize(
    "frame",
    [
        "not json",
        '{"event": "shout", "data": {}}',
        '{"event": "send_message", "data": {"receiverId": 2}}',
        '{"event": "send_message", "data": {"receiverId": 2, "text": ""}}',
        '{"event": "typing", "data": {"receiverId": -1, "isTyping": true}}',
    ],
)
def test_malformed_frames_get_error_and_connection_survives(client, bearer, frame):
    with client.websocket_connect("/ws", headers=bearer(1)) as one:
        assert one.receive_json() == status(1, True)

        one.send_text(frame)
        assert one.receive_json() == {"event": "error", "data": {"error": "Invalid event"}}

        one.send_json(send_message(2, "still alive"))
        assert one.receive_json()["event"] == "message_sent"

    assert len(client.get("/api/messages/2", headers=bearer(1)).json()) == 1


def test_reconnect_supersedes_previous_connection(client, bearer):
    with client.websocket_connect("/ws", headers=bearer(2)) as observer:
        assert observer.receive_json() == status(2, True)

        first = client.websocket_connect("/ws", headers=bearer(1))
        first.__enter__()
        try:
            assert first.receive_json() == status(1, True)
            assert observer.receive_json() == status(1, True)

            with client.websocket_connect("/ws", headers=bearer(1)) as second:
                assert second.receive_json() == status(1, True)
                assert observer.receive_json() == status(1, True)

                with pytest.raises(WebSocketDisconnect) as excinfo:
                    first.receive_json()
                assert excinfo.value.code == SUPERSEDED_CLOSE_CODE

                first.__exit__(None, None, None)
                first = None

                # The old connection's termination left user 1 online
                roster = client.get("/api/users", headers=bearer(2)).json()
                assert online_map(roster)[1] is True

                second.send_json(send_message(2, "new socket"))
                assert second.receive_json()["event"] == "message_sent"
                delivered = observer.receive_json()
                assert delivered["event"] == "new_message"
                assert delivered["data"]["text"] == "new socket"
        finally:
            if first is not None:
                first.__exit__(None, None, None)

        assert observer.receive_json() == status(1, False)


def test_binary_frames_must_be_utf8(client, bearer):
    with client.websocket_connect("/ws", headers=bearer(1)) as one:
        assert one.receive_json() == status(1, True)

        one.send_bytes(b"\xff\xfe\x00not utf-8")
        assert one.receive_json() == {"event": "error", "data": {"error": "Invalid event"}}

        one.send_bytes(json.dumps(send_message(2, "grüße")).encode("utf-8"))
        confirmed = one.receive_json()
        assert confirmed["event"] == "message_sent"
        assert confirmed["data"]["text"] == "grüße"


def test_failure_handling_a_frame_stays_with_that_connection(
    client, bearer, monkeypatch
):
    save = InMemoryMessageRepository.save

    async def flaky_save(self, message):
        if message.text == "boom":
            raise RuntimeError("log unavailable at /var/secret")
        await save(self, message)

    monkeypatch.setattr(InMemoryMessageRepository, "save", flaky_save)

    with client.websocket_connect("/ws", headers=bearer(1)) as one:
        assert one.receive_json() == status(1, True)
        with client.websocket_connect("/ws", headers=bearer(2)) as two:
            assert two.receive_json() == status(2, True)
            assert one.receive_json() == status(2, True)

            one.send_json(send_message(2, "boom"))
            assert one.receive_json() == {
                "event": "error",
                "data": {"error": "Internal error"},
            }

            assert client.get("/").json()["activeUsers"] == 2
            assert online_map(client.get("/api/users", headers=bearer(3)).json()) == {
                1: True,
                2: True,
                4: False,
            }

            one.send_json(send_message(2, "after"))
            assert one.receive_json()["event"] == "message_sent"
            delivered = two.receive_json()
            assert delivered["event"] == "new_message"
            assert delivered["data"]["text"] == "after"

    history = client.get("/api/messages/2", headers=bearer(1)).json()
    assert [m["text"] for m in history] == ["after"]


def test_history_limit_keeps_newest(client, bearer):
    with client.websocket_connect("/ws", headers=bearer(1)) as one:
        assert one.receive_json() == status(1, True)
        for text in ("first", "second", "third"):
            one.send_json(send_message(2, text))
            assert one.receive_json()["event"] == "message_sent"

    history = client.get("/api/messages/2?limit=2", headers=bearer(1)).json()
    assert [m["text"] for m in history] == ["second", "third"]
