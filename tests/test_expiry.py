"""Суточный TTL заявок и сообщений: чтения не видят протухшее, job удаляет физически."""

from __future__ import annotations

from datetime import timedelta

from src.jobs.expire_records import purge_expired_once, start_expiry_loop
from src.models.connection import Connection
from src.models.connection_request import ConnectionRequest
from src.models.message import Message
from src.services.connections import accept_connection, list_incoming_requests
from src.services.messages import list_conversation
from src.utils.clock import RECORD_TTL, utc_now


def _stale():
    return utc_now() - RECORD_TTL - timedelta(minutes=1)


class TestReadsIgnoreExpired:
    def test_expired_request_not_listed(self, client, auth, db) -> None:
        db.add(ConnectionRequest(from_uid="u1", to_uid="u2", created_at=_stale()))
        db.commit()
        assert client.get("/api/connections/requests/u2", headers=auth("u2")).json() == []

    def test_expired_request_can_be_sent_again(self, client, auth, db) -> None:
        db.add(ConnectionRequest(from_uid="u1", to_uid="u2", created_at=_stale()))
        db.commit()
        resp = client.post("/api/connections/request", json={"from": "u1", "to": "u2"}, headers=auth("u1"))
        assert resp.status_code == 200
        assert db.query(ConnectionRequest).count() == 1

    def test_expired_request_cannot_be_accepted(self, db) -> None:
        db.add(ConnectionRequest(from_uid="u1", to_uid="u2", created_at=_stale()))
        db.commit()
        assert accept_connection(db, "u1", "u2") is False
        assert db.query(Connection).count() == 0

    def test_expired_message_not_in_conversation(self, client, auth, db) -> None:
        db.add(Message(from_uid="u1", to_uid="u2", text="old", created_at=_stale()))
        db.add(Message(from_uid="u2", to_uid="u1", text="fresh", created_at=utc_now()))
        db.commit()
        msgs = client.get("/api/messages/u1/u2", headers=auth("u1")).json()
        assert [m["text"] for m in msgs] == ["fresh"]

    def test_connection_never_expires(self, client, auth, db) -> None:
        db.add(Connection(
            from_uid="u1", to_uid="u2", user_min="u1", user_max="u2",
            created_at=utc_now() - timedelta(days=30), updated_at=utc_now() - timedelta(days=30),
        ))
        db.commit()
        assert len(client.get("/api/connections/u1", headers=auth("u1")).json()) == 1


class TestBoundary:
    """Запись ровно суточной давности ещё жива: протухает только то, что старше суток."""

    def test_request_at_boundary_still_accepted(self, db) -> None:
        now = utc_now()
        db.add(ConnectionRequest(from_uid="u1", to_uid="u2", created_at=now - RECORD_TTL))
        db.commit()
        assert [r.from_uid for r in list_incoming_requests(db, "u2", now=now)] == ["u1"]
        assert accept_connection(db, "u1", "u2", now=now) is True
        assert db.query(Connection).count() == 1

    def test_message_at_boundary_still_listed(self, db) -> None:
        now = utc_now()
        db.add(Message(from_uid="u1", to_uid="u2", text="edge", created_at=now - RECORD_TTL))
        db.commit()
        assert [m.text for m in list_conversation(db, "u1", "u2", now=now)] == ["edge"]

    def test_purge_keeps_boundary_rows(self, db) -> None:
        now = utc_now()
        db.add_all([
            ConnectionRequest(from_uid="u1", to_uid="u2", created_at=now - RECORD_TTL),
            Message(from_uid="u1", to_uid="u2", text="edge", created_at=now - RECORD_TTL),
        ])
        db.commit()
        assert purge_expired_once(db, now=now) == {"requests_deleted": 0, "messages_deleted": 0}

    def test_one_second_past_boundary_expires(self, db) -> None:
        now = utc_now()
        db.add(Message(from_uid="u1", to_uid="u2", text="gone", created_at=now - RECORD_TTL - timedelta(seconds=1)))
        db.commit()
        assert list_conversation(db, "u1", "u2", now=now) == []
        assert purge_expired_once(db, now=now)["messages_deleted"] == 1


class TestPurgeJob:
    def test_purge_deletes_only_stale_rows(self, db) -> None:
        db.add_all([
            ConnectionRequest(from_uid="u1", to_uid="u2", created_at=_stale()),
            ConnectionRequest(from_uid="u3", to_uid="u2", created_at=utc_now()),
            Message(from_uid="u1", to_uid="u2", text="old", created_at=_stale()),
            Message(from_uid="u1", to_uid="u2", text="new", created_at=utc_now()),
        ])
        db.commit()

        summary = purge_expired_once(db)

        assert summary == {"requests_deleted": 1, "messages_deleted": 1}
        assert [r.from_uid for r in db.query(ConnectionRequest).all()] == ["u3"]
        assert [m.text for m in db.query(Message).all()] == ["new"]

    def test_purge_uses_given_clock(self, db) -> None:
        db.add(Message(from_uid="u1", to_uid="u2", text="x", created_at=utc_now()))
        db.commit()
        summary = purge_expired_once(db, now=utc_now() + timedelta(days=2))
        assert summary["messages_deleted"] == 1

    def test_loop_not_started_without_event_loop(self) -> None:
        assert start_expiry_loop() is None
