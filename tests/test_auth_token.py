from datetime import timedelta

import pytest
from routinely_core.auth import (
    ExpiredSignatureError,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)


def test_token_round_trip():
    token = create_access_token({"sub": "tester"})
    payload = decode_token(token)
    assert payload["sub"] == "tester"
    assert "exp" in payload


def test_expired_token_raises():
    token = create_access_token({"sub": "tester"}, expires_delta=timedelta(seconds=-1))
    with pytest.raises(ExpiredSignatureError):
        decode_token(token)


def test_password_hash_verify():
    pw = "s3cret!"
    hashed = hash_password(pw)
    assert hashed != pw
    assert verify_password(pw, hashed)
    assert not verify_password("wrong", hashed)


def test_verify_against_garbage_hash():
    assert verify_password("pw", "not-a-hash") is False
