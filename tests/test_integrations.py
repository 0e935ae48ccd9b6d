"""Outbound integrations: auth provider, Redis lock, mail task, OTP purge."""

from datetime import datetime, timezone, timedelta
from unittest.mock import MagicMock

import pytest
import redis
import requests
from kombu.exceptions import OperationalError

from conftest import TestingSessionLocal
from storefront.api.deps import get_auth_client
from storefront.data.models import OtpModel
from storefront.domain.errors import ExternalServiceError
from storefront.services import notification_service
from storefront.services.auth_client import AuthClient, AuthProviderError
from storefront.services.lock_service import LockService
from storefront.services.notification_service import (
    NotificationService,
    build_otp_email_html,
    send_otp_email_task,
)
from storefront.services.order_service import OrderService
from storefront.tasks import expire


def _response(status, body=None):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = body or {}
    resp.content = b"{}" if body is not None else b""
    resp.text = ""
    return resp


@pytest.fixture
def auth_api():
    api = AuthClient(base_url="https://auth.test/", anon_key="anon", service_role_key="service")
    api.session = MagicMock()
    return api


class TestAuthClient:
    def test_sign_up_unwraps_user(self, auth_api):
        auth_api.session.request.return_value = _response(
            200, {"user": {"id": "abc", "email": "a@b.c"}, "session": {}}
        )

        user = auth_api.sign_up("a@b.c", "pw", {"username": "a"})

        assert user == {"id": "abc", "email": "a@b.c"}
        method, url = auth_api.session.request.call_args.args
        assert (method, url) == ("POST", "https://auth.test/auth/v1/signup")
        kwargs = auth_api.session.request.call_args.kwargs
        assert kwargs["headers"]["apikey"] == "anon"
        assert kwargs["json"]["data"] == {"username": "a"}

    def test_admin_calls_use_service_role_key(self, auth_api):
        auth_api.session.request.return_value = _response(200, {"id": "abc"})

        auth_api.update_user("abc", {"password": "new"})

        kwargs = auth_api.session.request.call_args.kwargs
        assert kwargs["headers"]["Authorization"] == "Bearer service"

    def test_error_keeps_status_and_message(self, auth_api):
        auth_api.session.request.return_value = _response(
            400, {"error": "invalid_grant", "error_description": "Invalid login credentials"}
        )

        with pytest.raises(AuthProviderError) as exc:
            auth_api.sign_in_with_password("a@b.c", "bad")

        assert exc.value.status == 400
        assert exc.value.message == "Invalid login credentials"

    def test_find_user_pages_through_users(self, auth_api):
        first = {"users": [{"id": str(i), "email": f"u{i}@b.c"} for i in range(2)]}
        second = {"users": [{"id": "x", "email": "Target@B.c"}]}
        auth_api.session.request.side_effect = [_response(200, first), _response(200, second)]

        user = auth_api.find_user_by_email("target@b.c", per_page=2)

        assert user["id"] == "x"
        assert auth_api.session.request.call_count == 2

    def test_find_user_missing(self, auth_api):
        auth_api.session.request.return_value = _response(200, {"users": []})
        assert auth_api.find_user_by_email("nobody@b.c") is None

    def test_connection_errors_are_retried(self, auth_api):
        auth_api.session.request.side_effect = [
            requests.ConnectionError("reset"),
            _response(200, {"id": "abc"}),
        ]

        assert auth_api.update_user("abc", {}) == {"id": "abc"}
        assert auth_api.session.request.call_count == 2

    def test_unreachable_provider_is_provider_error(self, auth_api):
        auth_api.session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(AuthProviderError) as exc:
            auth_api.sign_in_with_password("a@b.c", "pw")

        assert exc.value.status is None
        assert exc.value.message == "Auth provider unreachable."
        assert auth_api.session.request.call_count == 3

    def test_unreachable_provider_keeps_error_envelope(self, client, auth_api):
        auth_api.session.request.side_effect = requests.Timeout("slow")
        client.app.dependency_overrides[get_auth_client] = lambda: auth_api

        resp = client.post("/login", json={"email": "a@b.c", "password": "pw"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "Auth provider unreachable."}


class TestLockService:
    def test_acquire_sets_key_once_with_ttl(self):
        fake = MagicMock()
        fake.set.return_value = True

        assert LockService(client=fake).acquire_place_order_lock("u1", "tok", ttl=30) is True
        fake.set.assert_called_once_with(name="order:place:u1", value="tok", nx=True, ex=30)

    def test_acquire_when_held(self):
        fake = MagicMock()
        fake.set.return_value = None
        assert LockService(client=fake).acquire_place_order_lock("u1", "tok", ttl=30) is False

    def test_release_is_token_checked(self):
        fake = MagicMock()
        fake.eval.return_value = 0

        assert LockService(client=fake).release_place_order_lock("u1", "other") is False
        script, numkeys, key, token = fake.eval.call_args.args
        assert (numkeys, key, token) == (1, "order:place:u1", "other")

    def test_transient_errors_are_retried(self):
        fake = MagicMock()
        fake.set.side_effect = [redis.ConnectionError("down"), True]

        assert LockService(client=fake).acquire_place_order_lock("u1", "tok", ttl=30) is True
        assert fake.set.call_count == 2

    def test_unreachable_redis_fails_placement(self, db, catalog):
        lock = MagicMock()
        lock.acquire_place_order_lock.side_effect = redis.ConnectionError("down")

        with pytest.raises(ExternalServiceError):
            OrderService(db, lock_service=lock).place_order_from_cart("u1")
        lock.release_place_order_lock.assert_not_called()


class TestOtpEmail:
    def test_html_contains_code_and_purpose(self):
        html = build_otp_email_html("123456", "Password Reset")
        assert "123456" in html
        assert "Password Reset" in html
        assert "10 minutes" in html

    def test_task_sends_through_resend(self, monkeypatch):
        sent = []
        monkeypatch.setattr(
            notification_service.resend.Emails,
            "send",
            lambda params: sent.append(params) or {"id": "msg-1"},
        )

        result = send_otp_email_task.apply(args=("a@b.c", "654321", "Email Verification")).get()

        assert result == {"email": "a@b.c", "id": "msg-1"}
        assert sent[0]["to"] == ["a@b.c"]
        assert sent[0]["subject"] == "Your OTP for Email Verification"
        assert "654321" in sent[0]["html"]

    def test_enqueue_uses_purpose_label(self, monkeypatch):
        calls = []
        monkeypatch.setattr(send_otp_email_task, "delay", lambda *args: calls.append(args))

        NotificationService().send_otp_email("a@b.c", "111111", "password_reset")

        assert calls == [("a@b.c", "111111", "Password Reset")]

    def test_broker_down_is_external_error(self, monkeypatch):
        def boom(*args):
            raise OperationalError("broker unreachable")

        monkeypatch.setattr(send_otp_email_task, "delay", boom)

        with pytest.raises(ExternalServiceError):
            NotificationService().send_otp_email("a@b.c", "111111", "password_reset")


def test_purge_task_removes_only_expired(db, monkeypatch):
    now = datetime.now(timezone.utc)
    db.add_all(
        [
            OtpModel(email="a@b.c", otp="111111", purpose="password_reset", expires_at=now - timedelta(minutes=1)),
            OtpModel(email="a@b.c", otp="222222", purpose="password_reset", expires_at=now + timedelta(minutes=5)),
        ]
    )
    db.commit()
    monkeypatch.setattr(expire, "SessionLocal", TestingSessionLocal)

    removed = expire.purge_expired_otps_task()

    assert removed == 1
    db.expire_all()
    assert [o.otp for o in db.query(OtpModel).all()] == ["222222"]
