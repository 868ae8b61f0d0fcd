from __future__ import annotations

import base64
import os

import pytest
from conftest import TEST_KEY, InMemoryUserRepository, RecordingMailer
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from flask import Flask

from logopass.application.services.credential_service import CredentialService
from logopass.application.use_cases.credentials.fetch_protected_resource import (
    FetchProtectedResourceUseCase,
)
from logopass.application.use_cases.credentials.obtain_auth_token import (
    ObtainAuthTokenUseCase,
)
from logopass.application.use_cases.credentials.redeem_password_reset import (
    RedeemPasswordResetUseCase,
)
from logopass.application.use_cases.credentials.register_user import RegisterUserUseCase
from logopass.application.use_cases.credentials.request_password_reset import (
    RequestPasswordResetUseCase,
)
from logopass.domain.credentials.exceptions import StorageError
from logopass.interfaces.http.controllers.credentials_controller import (
    CredentialsController,
)
from logopass.shared.middleware.error_handler import configure_error_handling

T = 1_700_000_000


@pytest.fixture()
def flask_app(
    users: InMemoryUserRepository,
    credentials: CredentialService,
    mailer: RecordingMailer,
) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    controller = CredentialsController(
        obtain_token_use_case=ObtainAuthTokenUseCase(users=users, credentials=credentials),
        register_use_case=RegisterUserUseCase(
            users=users, credentials=credentials, mailer=mailer
        ),
        request_reset_use_case=RequestPasswordResetUseCase(
            credentials=credentials, mailer=mailer, clock=lambda: T
        ),
        redeem_reset_use_case=RedeemPasswordResetUseCase(
            users=users, credentials=credentials, mailer=mailer, clock=lambda: T + 10
        ),
        fetch_resource_use_case=FetchProtectedResourceUseCase(credentials=credentials),
    )
    app.register_blueprint(controller.as_blueprint())
    return app


def test_registration_returns_token_envelope(
    flask_app: Flask, credentials: CredentialService
) -> None:
    with flask_app.test_client() as client:
        response = client.post("/registration/", json={"email": "Alice@Example.com"})

    body = response.get_json()
    assert response.status_code == 200
    assert set(body) == {"data", "success", "message", "payload"}
    assert body["success"] is True
    assert credentials.verify_auth_token(body["data"]) == 1


def test_registration_duplicate_email_is_reported(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        client.post("/registration/", json={"email": "alice@example.com"})
        response = client.post("/registration/", json={"email": "alice@example.com"})

    body = response.get_json()
    assert response.status_code == 409
    assert body == {
        "data": "",
        "success": False,
        "message": "Email already used!",
        "payload": "",
    }


@pytest.mark.parametrize("email", ["not-an-email", "a@b", "@example.com"])
def test_registration_rejects_bad_email(flask_app: Flask, email: str) -> None:
    with flask_app.test_client() as client:
        response = client.post("/registration/", json={"email": email})

    assert response.status_code == 422
    assert response.get_json()["message"] == "Invalid email format!"


def test_registration_without_body_is_wrong_data(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.post("/registration/", data="nope")

    assert response.status_code == 422
    assert response.get_json()["message"] == "Wrong data!"


def test_get_auth_token(flask_app: Flask, mailer: RecordingMailer) -> None:
    with flask_app.test_client() as client:
        client.post("/registration/", json={"email": "alice@example.com"})
        good = client.post(
            "/getauthtoken/",
            json={"login": "alice@example.com", "password": "Generated-Pass-0001"},
        )
        bad = client.post(
            "/getauthtoken/", json={"login": "alice@example.com", "password": "nope"}
        )

    assert good.get_json()["success"] is True
    assert good.get_json()["data"]
    assert bad.status_code == 401
    assert bad.get_json()["message"] == "Wrong login or password!"


def test_data_by_token_accepts_bearer_and_raw_header(
    flask_app: Flask, credentials: CredentialService
) -> None:
    token = credentials.issue_auth_token(42)

    with flask_app.test_client() as client:
        bearer = client.post(
            "/gettestdatabytoken/", headers={"Authorization": f"Bearer {token}"}
        )
        raw = client.post("/gettestdatabytoken/", headers={"Authorization": token})

    for response in (bearer, raw):
        assert response.status_code == 200
        assert response.get_json()["payload"] == '{"param":"value"}'


@pytest.mark.parametrize("header", [None, "", "Bearer garbage"])
def test_data_by_token_rejects_missing_or_bad_token(
    flask_app: Flask, header: str | None
) -> None:
    headers = {"Authorization": header} if header is not None else {}

    with flask_app.test_client() as client:
        response = client.post("/gettestdatabytoken/", headers=headers)

    assert response.status_code == 401
    assert response.get_json()["success"] is False


def test_data_by_token_rejects_reset_token(
    flask_app: Flask, credentials: CredentialService
) -> None:
    token = credentials.issue_reset_link("a@b.com", now=T)

    with flask_app.test_client() as client:
        response = client.post(
            "/gettestdatabytoken/", headers={"Authorization": f"Bearer {token}"}
        )

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid token!"


def test_data_by_token_preflight(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.options("/gettestdatabytoken/")

    assert response.status_code == 200
    assert "Authorization" in response.headers["Access-Control-Allow-Headers"]


def test_password_restore_email_and_change(
    flask_app: Flask, mailer: RecordingMailer, credentials: CredentialService
) -> None:
    with flask_app.test_client() as client:
        client.post("/registration/", json={"email": "alice@example.com"})
        sent = client.post("/getpasswordrestoreemail/", json={"email": "alice@example.com"})
        token = mailer.last_body.split("changepassword/")[1].split()[0]
        changed = client.get(f"/changepassword/{token}")

    assert sent.get_json()["success"] is True
    assert changed.status_code == 200
    assert credentials.verify_auth_token(changed.get_json()["data"]) == 1
    assert "Generated-Pass-0002" in mailer.last_body


def test_change_password_with_expired_link(
    flask_app: Flask, credentials: CredentialService
) -> None:
    token = credentials.issue_reset_link("alice@example.com", now=T - 600)

    with flask_app.test_client() as client:
        response = client.get(f"/changepassword/{token}")

    assert response.status_code == 410
    assert response.get_json()["message"] == "Expired link!"


def test_change_password_with_blank_email_claim(flask_app: Flask) -> None:
    nonce = os.urandom(12)
    sealed = nonce + AESGCM(TEST_KEY).encrypt(
        nonce, b'{"email":"   ","expires_at":9999999999}', None
    )
    token = base64.urlsafe_b64encode(sealed).decode("ascii").rstrip("=")

    with flask_app.test_client() as client:
        response = client.get(f"/changepassword/{token}")

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid link!"


def test_collaborator_failure_is_rendered(
    flask_app: Flask, users: InMemoryUserRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _fail(_user):
        raise StorageError()

    monkeypatch.setattr(users, "save_user", _fail)

    with flask_app.test_client() as client:
        response = client.post("/registration/", json={"email": "alice@example.com"})

    assert response.status_code == 502
    assert response.get_json()["message"] == "Save error!"
