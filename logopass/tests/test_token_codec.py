from __future__ import annotations

import base64
import os

import pytest
from conftest import ROTATED_KEY, TEST_KEY
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from logopass.domain.credentials.entities import AuthPayload, ResetPayload
from logopass.domain.credentials.exceptions import (
    InvalidTokenError,
    MalformedTokenError,
    SerializationError,
    TokenDecryptError,
    TokenPayloadError,
)
from logopass.infrastructure.tokens import AesGcmTokenCodec

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


def _seal(key: bytes, plaintext: bytes) -> str:
    nonce = os.urandom(12)
    raw = nonce + AESGCM(key).encrypt(nonce, plaintext, None)
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


@pytest.mark.parametrize(
    "payload",
    [
        AuthPayload(user_id=1),
        AuthPayload(user_id=42),
        AuthPayload(user_id=2**53),
        ResetPayload(email="a@b.com", expires_at=1_700_000_600),
        ResetPayload(email="ünïcode@example.org", expires_at=0),
    ],
)
def test_round_trip(codec: AesGcmTokenCodec, payload) -> None:
    assert codec.decode(codec.encode(payload)) == payload


def test_token_is_url_safe(codec: AesGcmTokenCodec) -> None:
    token = codec.encode(ResetPayload(email="a@b.com", expires_at=1))

    assert token
    assert set(token) <= set(_ALPHABET)


def test_encoding_is_randomized(codec: AesGcmTokenCodec) -> None:
    payload = AuthPayload(user_id=7)

    assert codec.encode(payload) != codec.encode(payload)


def test_flipping_any_character_is_rejected(codec: AesGcmTokenCodec) -> None:
    token = codec.encode(AuthPayload(user_id=42))

    for index, char in enumerate(token):
        replacement = "A" if char != "A" else "B"
        tampered = token[:index] + replacement + token[index + 1 :]
        with pytest.raises(InvalidTokenError):
            codec.decode(tampered)


@pytest.mark.parametrize("token", ["", "   ", "not base64!", "QUJD", "a" * 5])
def test_malformed_text_is_rejected(codec: AesGcmTokenCodec, token: str) -> None:
    with pytest.raises(MalformedTokenError):
        codec.decode(token)


def test_truncated_token_is_rejected(codec: AesGcmTokenCodec) -> None:
    token = codec.encode(AuthPayload(user_id=42))

    with pytest.raises(InvalidTokenError):
        codec.decode(token[:-4])


def test_foreign_key_is_rejected(codec: AesGcmTokenCodec) -> None:
    foreign = AesGcmTokenCodec([ROTATED_KEY])
    token = foreign.encode(AuthPayload(user_id=42))

    with pytest.raises(TokenDecryptError):
        codec.decode(token)


def test_rotated_keys_still_decode() -> None:
    old = AesGcmTokenCodec([TEST_KEY])
    rotated = AesGcmTokenCodec([ROTATED_KEY, TEST_KEY])
    legacy_token = old.encode(AuthPayload(user_id=9))

    assert rotated.decode(legacy_token) == AuthPayload(user_id=9)
    with pytest.raises(TokenDecryptError):
        old.decode(rotated.encode(AuthPayload(user_id=9)))


@pytest.mark.parametrize(
    "plaintext",
    [
        b"not json",
        b"\xff\xfe",
        b"[1, 2]",
        b'{"user_id": 0}',
        b'{"user_id": -3}',
        b'{"user_id": "5"}',
        b'{"user_id": true}',
        b'{"email": "a@b.com"}',
        b'{"email": "", "expires_at": 5}',
        b'{"email": "   ", "expires_at": 5}',
        b'{"email": "a@b.com", "expires_at": 1.5}',
        b'{"user_id": 1, "email": "a@b.com", "expires_at": 1}',
        b'{"user_id": 1, "role": "admin"}',
    ],
)
def test_ambiguous_or_malformed_payload_is_rejected(
    codec: AesGcmTokenCodec, plaintext: bytes
) -> None:
    with pytest.raises(TokenPayloadError):
        codec.decode(_seal(TEST_KEY, plaintext))


def test_decode_errors_share_a_base(codec: AesGcmTokenCodec) -> None:
    for error in (MalformedTokenError, TokenDecryptError, TokenPayloadError):
        assert issubclass(error, InvalidTokenError)
    with pytest.raises(InvalidTokenError) as exc_info:
        codec.decode("%%%")
    assert exc_info.value.code == "malformed_token"


def test_unknown_payload_type_is_a_serialization_error(codec: AesGcmTokenCodec) -> None:
    with pytest.raises(SerializationError):
        codec.encode({"user_id": 1})  # type: ignore[arg-type]


@pytest.mark.parametrize("keys", [[], [b"short"], [TEST_KEY, b"x" * 16]])
def test_codec_rejects_bad_keys(keys: list[bytes]) -> None:
    with pytest.raises(ValueError):
        AesGcmTokenCodec(keys)
