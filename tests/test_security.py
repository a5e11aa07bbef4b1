import pytest

from marketplace.core.errors import InvalidCredential
from marketplace.core.security import (
    Identity,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SECRET = "unit-secret"


def test_token_round_trip():
    token = create_access_token(7, "a@b.com", secret_key=SECRET)
    assert decode_access_token(token, SECRET) == Identity(user_id=7, email="a@b.com")


def test_token_wrong_secret_rejected():
    token = create_access_token(7, "a@b.com", secret_key=SECRET)
    with pytest.raises(InvalidCredential):
        decode_access_token(token, "other-secret")


def test_token_tampered_payload_rejected():
    token = create_access_token(7, "a@b.com", secret_key=SECRET)
    other = create_access_token(8, "c@d.com", secret_key=SECRET)
    header, _, signature = token.split(".")
    forged = ".".join([header, other.split(".")[1], signature])
    with pytest.raises(InvalidCredential):
        decode_access_token(forged, SECRET)


def test_token_expired_rejected():
    token = create_access_token(7, "a@b.com", expires_delta=-10, secret_key=SECRET)
    with pytest.raises(InvalidCredential) as excinfo:
        decode_access_token(token, SECRET)
    assert excinfo.value.message == "Token expired"


@pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "!!!.???.***"])
def test_malformed_token_rejected(token):
    with pytest.raises(InvalidCredential):
        decode_access_token(token, SECRET)


def test_password_hash_and_verify():
    hashed = hash_password("pw123456")
    assert "$" in hashed
    assert hashed != hash_password("pw123456")  # salted
    assert verify_password("pw123456", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("pw123456", "not-a-hash")
