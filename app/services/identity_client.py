# app/services/identity_client.py
from dataclasses import dataclass

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception

from app.domain.errors import AuthenticationInvalid, NotFound
from app.utils.settings import IDENTITY_PROVIDER_URL, IDENTITY_SERVICE_KEY, IDENTITY_TIMEOUT_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    id: str
    email: str | None = None


def _is_transient(exc: BaseException) -> bool:
    # 4xx to odpowiedz providera, nie ma sensu ponawiac
    if isinstance(exc, requests.HTTPError):
        return exc.response is not None and exc.response.status_code >= 500
    return isinstance(exc, requests.RequestException)


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception(_is_transient),
    )


class IdentityClient:
    """Klient zewnetrznego identity providera (API zgodne z GoTrue)."""

    def __init__(self, base_url: str | None = None, service_key: str | None = None, timeout: int = IDENTITY_TIMEOUT_SECONDS):
        self.base_url = (base_url or IDENTITY_PROVIDER_URL).rstrip("/")
        self.service_key = service_key if service_key is not None else IDENTITY_SERVICE_KEY
        self.timeout = timeout

    def get_user(self, token: str) -> Identity:
        try:
            data = self._fetch_user(token)
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code in (401, 403, 404):
                raise AuthenticationInvalid() from e
            raise

        if not data or not data.get("id"):
            raise AuthenticationInvalid()
        return Identity(id=str(data["id"]), email=data.get("email"))

    @http_retry()
    def _fetch_user(self, token: str) -> dict:
        url = f"{self.base_url}/auth/v1/user"
        logger.info(f"IdentityClient GET {url}")

        resp = requests.get(
            url,
            headers={"Authorization": f"Bearer {token}", "apikey": self.service_key},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()

    def delete_user(self, user_id: str):
        try:
            self._delete_user(user_id)
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                raise NotFound("User not found") from e
            raise

    @http_retry()
    def _delete_user(self, user_id: str):
        url = f"{self.base_url}/auth/v1/admin/users/{user_id}"
        logger.info(f"IdentityClient DELETE {url}")

        resp = requests.delete(
            url,
            headers={"Authorization": f"Bearer {self.service_key}", "apikey": self.service_key},
            timeout=self.timeout,
        )
        resp.raise_for_status()

    def create_user(self, email: str, password: str, full_name: str | None = None) -> Identity | None:
        """
        Zaklada potwierdzone konto przez admin API providera.
        Zwraca None gdy konto z tym emailem juz istnieje (422).
        """
        try:
            data = self._create_user(email, password, full_name)
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 422:
                logger.info(f"Uzytkownik {email} juz istnieje u providera, pomijam")
                return None
            raise

        return Identity(id=str(data["id"]), email=data.get("email", email))

    @http_retry()
    def _create_user(self, email: str, password: str, full_name: str | None) -> dict:
        url = f"{self.base_url}/auth/v1/admin/users"
        logger.info(f"IdentityClient POST {url}")

        resp = requests.post(
            url,
            json={
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": {"full_name": full_name},
            },
            headers={"Authorization": f"Bearer {self.service_key}", "apikey": self.service_key},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()
