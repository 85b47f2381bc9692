from datetime import timedelta

from jose import jwt

from workhub_common.security import (
    JWT_ALGORITHM,
    JWT_SECRET_KEY,
    check_password,
    hash_password,
    issue_access_token,
    read_access_token,
)


def test_password_hash_check():
    stored = hash_password("s3creta")

    assert stored != "s3creta"
    assert check_password("s3creta", stored)
    assert not check_password("otra", stored)
    assert not check_password("s3creta", None)


def test_access_token_carries_identity():
    token = issue_access_token("ana@workhub.io", "user-1")

    user = read_access_token(token)

    assert user.email == "ana@workhub.io"
    assert user.user_id == "user-1"
    assert user.role == "user"


def test_expired_or_foreign_tokens_are_rejected():
    expired = issue_access_token("ana@workhub.io", "user-1", lifetime=timedelta(minutes=-1))
    refresh = jwt.encode({"sub": "ana@workhub.io", "user_id": "user-1", "type": "refresh"},
                         JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)
    no_user = jwt.encode({"sub": "ana@workhub.io", "type": "access"}, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)

    assert read_access_token(expired) is None
    assert read_access_token(refresh) is None
    assert read_access_token(no_user) is None
    assert read_access_token("basura") is None
