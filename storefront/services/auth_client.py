# storefront/services/auth_client.py
import requests

from storefront.domain.errors import ExternalServiceError
from storefront.utils.retry import http_retry
from storefront.utils.settings import SUPABASE_URL, SUPABASE_KEY, SUPABASE_SERVICE_ROLE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AuthProviderError(ExternalServiceError):
    """Negative answer from the auth provider; keeps its HTTP status."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    return (
        body.get("msg")
        or body.get("error_description")
        or body.get("message")
        or body.get("error")
        or f"HTTP {resp.status_code}"
    )


class AuthClient:
    """
    Thin client for the Supabase Auth (GoTrue) REST API.

    Public calls use the anon key; admin calls use the service-role key.
    """

    def __init__(
        self,
        base_url: str | None = None,
        anon_key: str | None = None,
        service_role_key: str | None = None,
        timeout: int = 5,
    ):
        self.base_url = (base_url or SUPABASE_URL).rstrip("/") + "/auth/v1"
        self.anon_key = anon_key or SUPABASE_KEY
        self.service_role_key = service_role_key or SUPABASE_SERVICE_ROLE
        self.timeout = timeout
        self.session = requests.Session()

    def _headers(self, admin: bool = False) -> dict:
        key = self.service_role_key if admin else self.anon_key
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, admin: bool = False, **kwargs) -> dict:
        try:
            return self._send(method, path, admin=admin, **kwargs)
        except requests.RequestException as e:
            logger.error(f"AuthClient {method} {path} failed: {e}")
            raise AuthProviderError("Auth provider unreachable.") from e

    @http_retry()
    def _send(self, method: str, path: str, admin: bool = False, **kwargs) -> dict:
        url = f"{self.base_url}{path}"
        logger.info(f"AuthClient {method} {url}")

        resp = self.session.request(
            method,
            url,
            headers=self._headers(admin),
            timeout=self.timeout,
            **kwargs,
        )
        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.warning(f"AuthClient {method} {path} -> {resp.status_code}: {message}")
            raise AuthProviderError(message, status=resp.status_code)
        return resp.json() if resp.content else {}

    def sign_up(self, email: str, password: str, metadata: dict) -> dict:
        body = self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": metadata},
        )
        # with autoconfirm on the user comes wrapped next to a session
        return body.get("user", body)

    def sign_in_with_password(self, email: str, password: str) -> dict:
        body = self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return body["user"]

    def find_user_by_email(self, email: str, per_page: int = 200) -> dict | None:
        wanted = email.lower()
        page = 1
        while True:
            body = self._request(
                "GET",
                "/admin/users",
                admin=True,
                params={"page": page, "per_page": per_page},
            )
            users = body.get("users", [])
            for user in users:
                if (user.get("email") or "").lower() == wanted:
                    return user
            if len(users) < per_page:
                return None
            page += 1

    def update_user(self, user_id: str, attributes: dict) -> dict:
        return self._request("PUT", f"/admin/users/{user_id}", admin=True, json=attributes)
