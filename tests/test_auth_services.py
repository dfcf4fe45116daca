from datetime import timedelta

import jwt
import pytest

from chat_relay.domain.entities.user import User
from chat_relay.domain.value_objects.user_id import UserId
from chat_relay.infrastructure.auth import JwtTokenService, Pbkdf2PasswordHasher
from chat_relay.infrastructure.persistence import (
    InMemoryUserRepository,
    parse_demo_users,
)

USER = User(id=UserId(3), username="user3", name="Demo User 3", password_hash="x")


def make_service(**overrides) -> JwtTokenService:
    options = {"secret": "s3cret", "issuer": "relay", "audience": "clients"}
    options.update(overrides)
    return JwtTokenService(**options)


def test_issued_token_verifies_to_user_id():
    service = make_service()
    assert service.verify(service.issue(USER)) == UserId(3)


def test_expired_token_is_rejected():
    service = make_service(expires_in=timedelta(seconds=-5))
    assert service.verify(service.issue(USER)) is None


@pytest.mark.parametrize(
    "other",
    [
        {"secret": "another-secret"},
        {"issuer": "someone-else"},
        {"audience": "other-clients"},
    ],
)
def test_token_from_other_configuration_is_rejected(other):
    token = make_service(**other).issue(USER)
    assert make_service().verify(token) is None


@pytest.mark.parametrize("credential", [None, "", "not-a-jwt"])
def test_garbage_credentials_are_rejected(credential):
    assert make_service().verify(credential) is None


def test_token_without_user_id_claim_is_rejected():
    token = jwt.encode(
        {"iat": 1, "exp": 4_102_444_800, "iss": "relay", "aud": "clients"},
        "s3cret",
        algorithm="HS256",
    )
    assert make_service().verify(token) is None


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        make_service(secret="")


def test_password_hash_round_trip():
    hasher = Pbkdf2PasswordHasher(iterations=1000)
    stored = hasher.hash("password1")

    assert stored.startswith("pbkdf2_sha256$1000$")
    assert hasher.verify("password1", stored)
    assert not hasher.verify("password2", stored)
    assert hasher.hash("password1") != stored  # fresh salt


@pytest.mark.parametrize("stored", ["", "plain", "md5$1$00$00", "pbkdf2_sha256$x$zz$00"])
def test_malformed_hash_never_verifies(stored):
    assert not Pbkdf2PasswordHasher(iterations=1000).verify("password1", stored)


@pytest.mark.asyncio
async def test_demo_users_are_parsed_and_looked_up():
    hasher = Pbkdf2PasswordHasher(iterations=1000)
    users = parse_demo_users(
        ["1:user1:password1:Demo User 1", " ", "2:user2:pw:Name: With Colon"], hasher
    )
    repository = InMemoryUserRepository(users)

    user2 = await repository.get_by_username("user2")
    assert user2.id == UserId(2)
    assert user2.name == "Name: With Colon"
    assert hasher.verify("pw", user2.password_hash)
    assert (await repository.get_by_id(UserId(1))).username == "user1"
    assert await repository.get_by_username("nobody") is None
    assert [user.id.value for user in await repository.list_all()] == [1, 2]


def test_malformed_demo_user_entry_is_refused():
    with pytest.raises(ValueError):
        parse_demo_users(["1:user1"], Pbkdf2PasswordHasher(iterations=1000))


def test_duplicate_user_ids_are_refused():
    with pytest.raises(ValueError):
        InMemoryUserRepository([USER, USER])
