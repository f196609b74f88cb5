from datetime import timedelta

import pytest
from identity.auth.tokens import InvalidToken, create_session_token, decode_session_token
from jose import jwt


def test_token_roundtrip():
    token = create_session_token("acc-1", "asha@example.com", "Asha", "Admin")
    user = decode_session_token(token)
    assert user.id == "acc-1"
    assert user.email == "asha@example.com"
    assert user.is_admin


def test_expired_token_is_rejected():
    token = create_session_token("acc-1", "a@example.com", "A", "User", expires_delta=timedelta(seconds=-1))
    with pytest.raises(InvalidToken):
        decode_session_token(token)


def test_tampered_token_is_rejected():
    forged = jwt.encode({"sub": "acc-1", "role": "Admin"}, "some-other-secret", algorithm="HS256")
    with pytest.raises(InvalidToken):
        decode_session_token(forged)


def test_token_without_subject_is_rejected():
    from shared.settings import get_settings

    settings = get_settings()
    token = jwt.encode({"role": "Admin"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidToken):
        decode_session_token(token)
