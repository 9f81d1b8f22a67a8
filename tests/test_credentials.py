import time

import pytest
from jose import jwt

import taskboard.config as config
from taskboard.errors import InvalidInput, InvalidToken
from taskboard.utils.auth import create_token, decode_token, hash_password, verify_password


def test_hash_and_verify():
    hashed = hash_password("correct_horse_battery_staple")
    assert hashed != "correct_horse_battery_staple"
    assert verify_password("correct_horse_battery_staple", hashed)
    assert not verify_password("wrong", hashed)


def test_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


def test_password_too_long_is_rejected():
    with pytest.raises(InvalidInput) as exc:
        hash_password("a" * 100)
    assert "72" in str(exc.value)


def test_verify_too_long_password_is_false():
    hashed = hash_password("short")
    assert verify_password("a" * 100, hashed) is False


def test_verify_against_garbage_hash_is_false():
    assert verify_password("pw", "not-a-bcrypt-hash") is False


def test_token_round_trip():
    token = create_token(7, "a@example.com")
    assert decode_token(token) == {"userId": 7, "email": "a@example.com"}


def test_token_lifetime_is_seven_days():
    before = int(time.time())
    claims = jwt.get_unverified_claims(create_token(7, "a@example.com"))
    assert abs(claims["exp"] - before - 7 * 24 * 3600) <= 2


def test_expired_token(monkeypatch):
    monkeypatch.setattr(config, "ACCESS_TOKEN_EXPIRE_MINUTES", -1)
    token = create_token(7, "a@example.com")
    with pytest.raises(InvalidToken) as exc:
        decode_token(token)
    assert "expired" in str(exc.value).lower()


def test_wrong_secret():
    token = jwt.encode({"userId": 7, "email": "a@example.com"}, "other-secret", algorithm="HS256")
    with pytest.raises(InvalidToken):
        decode_token(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token(token):
    with pytest.raises(InvalidToken):
        decode_token(token)


def test_token_without_identity_is_rejected():
    token = jwt.encode({"sub": "a@example.com"}, config.SECRET_KEY, algorithm=config.ALGORITHM)
    with pytest.raises(InvalidToken):
        decode_token(token)
