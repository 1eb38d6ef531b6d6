"""Личные сообщения: отправка и чтение переписки."""

from __future__ import annotations

from datetime import timedelta

from src.services.messages import list_conversation, send_message
from src.utils.clock import utc_now


def _send(client, auth, a, b, text):
    return client.post("/api/messages/send", json={"from": a, "to": b, "text": text}, headers=auth(a))


class TestSend:
    def test_send_returns_message(self, client, auth) -> None:
        resp = _send(client, auth, "u1", "u2", "hi")
        assert resp.status_code == 200
        body = resp.json()
        assert body["from"] == "u1"
        assert body["to"] == "u2"
        assert body["text"] == "hi"
        assert "createdAt" in body

    def test_not_gated_by_connection(self, client, auth) -> None:
        # u1 и u2 не связаны — отправка всё равно разрешена
        assert _send(client, auth, "u1", "u9", "hello stranger").status_code == 200

    def test_missing_text(self, client, auth) -> None:
        resp = client.post("/api/messages/send", json={"from": "u1", "to": "u2"}, headers=auth("u1"))
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing from, to, or text"}

    def test_blank_text(self, client, auth) -> None:
        assert _send(client, auth, "u1", "u2", "   ").status_code == 400

    def test_only_sender_may_send(self, client, auth) -> None:
        resp = client.post(
            "/api/messages/send", json={"from": "u1", "to": "u2", "text": "x"}, headers=auth("u2")
        )
        assert resp.status_code == 403


class TestConversation:
    def test_both_directions_in_time_order(self, client, auth) -> None:
        _send(client, auth, "u1", "u2", "one")
        _send(client, auth, "u2", "u1", "two")
        _send(client, auth, "u1", "u2", "three")
        _send(client, auth, "u1", "u3", "elsewhere")

        msgs = client.get("/api/messages/u1/u2", headers=auth("u2")).json()
        assert [m["text"] for m in msgs] == ["one", "two", "three"]

        reversed_path = client.get("/api/messages/u2/u1", headers=auth("u1")).json()
        assert [m["text"] for m in reversed_path] == ["one", "two", "three"]

    def test_outsider_forbidden(self, client, auth) -> None:
        resp = client.get("/api/messages/u1/u2", headers=auth("u3"))
        assert resp.status_code == 403

    def test_ordering_follows_created_at(self, db) -> None:
        now = utc_now()
        send_message(db, "a", "b", "later", now=now - timedelta(minutes=1))
        send_message(db, "b", "a", "earlier", now=now - timedelta(minutes=5))
        assert [m.text for m in list_conversation(db, "a", "b")] == ["earlier", "later"]
