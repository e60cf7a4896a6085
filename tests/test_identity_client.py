import json

import pytest
import requests

from app.api.deps import get_identity_client
from app.data.models import UserRoleModel
from app.domain.errors import AuthenticationInvalid, NotFound
from app.main import app
from app.services import identity_client as identity_module
from app.services.identity_client import IdentityClient


def _response(status_code, payload=None):
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = "http://identity.test"
    resp._content = json.dumps(payload or {}).encode()
    return resp


class ScriptedHttp:
    """Zwraca kolejne odpowiedzi (albo rzuca wyjatki) i zapisuje wywolania."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def real_identity(client):
    identity = IdentityClient(base_url="http://identity.test/", service_key="service-key")
    app.dependency_overrides[get_identity_client] = lambda: identity
    return identity


def test_token_is_resolved_through_provider(client, real_identity, monkeypatch):
    http = ScriptedHttp(_response(200, {"id": "user-alice", "email": "alice@test.com"}))
    monkeypatch.setattr(identity_module.requests, "get", http)

    resp = client.get("/cart", headers={"Authorization": "Bearer abc"})

    assert resp.status_code == 200
    url, kwargs = http.calls[0]
    assert url == "http://identity.test/auth/v1/user"
    assert kwargs["headers"] == {"Authorization": "Bearer abc", "apikey": "service-key"}


def test_rejected_token_is_401_without_retry(client, real_identity, monkeypatch):
    http = ScriptedHttp(_response(401))
    monkeypatch.setattr(identity_module.requests, "get", http)

    resp = client.get("/cart", headers={"Authorization": "Bearer expired"})

    assert resp.status_code == 401
    assert resp.json() == {"detail": "Unauthorized"}
    assert len(http.calls) == 1


def test_provider_answer_without_id_is_401(client, real_identity, monkeypatch):
    monkeypatch.setattr(identity_module.requests, "get", ScriptedHttp(_response(200, {})))

    resp = client.get("/cart", headers={"Authorization": "Bearer abc"})

    assert resp.status_code == 401


def test_server_error_is_retried(client, real_identity, monkeypatch):
    http = ScriptedHttp(
        _response(500),
        _response(503),
        _response(200, {"id": "user-alice", "email": "alice@test.com"}),
    )
    monkeypatch.setattr(identity_module.requests, "get", http)

    resp = client.get("/cart", headers={"Authorization": "Bearer abc"})

    assert resp.status_code == 200
    assert len(http.calls) == 3


def test_unreachable_provider_is_502(client, real_identity, monkeypatch):
    http = ScriptedHttp(requests.ConnectionError("connection refused"))
    monkeypatch.setattr(identity_module.requests, "get", http)

    resp = client.get("/cart", headers={"Authorization": "Bearer abc"})

    assert resp.status_code == 502
    assert resp.json() == {"detail": "Identity provider unavailable"}
    assert len(http.calls) == 3


def test_persistent_server_error_is_502(client, real_identity, monkeypatch):
    http = ScriptedHttp(_response(500))
    monkeypatch.setattr(identity_module.requests, "get", http)

    resp = client.get("/cart", headers={"Authorization": "Bearer abc"})

    assert resp.status_code == 502
    assert len(http.calls) == 3


def test_get_user_maps_rejections(monkeypatch):
    identity = IdentityClient(base_url="http://identity.test", service_key="k")

    for status in (401, 403, 404):
        monkeypatch.setattr(identity_module.requests, "get", ScriptedHttp(_response(status)))
        with pytest.raises(AuthenticationInvalid):
            identity.get_user("abc")


def test_delete_unknown_user_is_not_found(monkeypatch):
    http = ScriptedHttp(_response(404))
    monkeypatch.setattr(identity_module.requests, "delete", http)

    with pytest.raises(NotFound):
        IdentityClient(base_url="http://identity.test", service_key="k").delete_user("ghost")

    url, kwargs = http.calls[0]
    assert url == "http://identity.test/auth/v1/admin/users/ghost"
    assert kwargs["headers"]["Authorization"] == "Bearer k"
    assert len(http.calls) == 1


def test_delete_user_endpoint_maps_missing_account_to_404(client, db, real_identity, monkeypatch):
    db.add(UserRoleModel(user_id="admin-1", role="admin"))
    db.commit()
    monkeypatch.setattr(identity_module.requests, "get", ScriptedHttp(_response(200, {"id": "admin-1"})))
    monkeypatch.setattr(identity_module.requests, "delete", ScriptedHttp(_response(404)))

    resp = client.delete("/users/ghost", headers={"Authorization": "Bearer admin"})

    assert resp.status_code == 404
    assert resp.json() == {"detail": "User not found"}


def test_create_user_sends_confirmed_account(monkeypatch):
    http = ScriptedHttp(_response(200, {"id": "new-1", "email": "john@test.com"}))
    monkeypatch.setattr(identity_module.requests, "post", http)

    created = IdentityClient(base_url="http://identity.test", service_key="k").create_user(
        "john@test.com", "User123!", "John Doe"
    )

    assert created.id == "new-1"
    url, kwargs = http.calls[0]
    assert url == "http://identity.test/auth/v1/admin/users"
    assert kwargs["json"]["email_confirm"] is True
    assert kwargs["json"]["user_metadata"] == {"full_name": "John Doe"}


def test_create_existing_user_returns_none(monkeypatch):
    monkeypatch.setattr(identity_module.requests, "post", ScriptedHttp(_response(422)))

    assert IdentityClient(base_url="http://identity.test", service_key="k").create_user("a@test.com", "x") is None
