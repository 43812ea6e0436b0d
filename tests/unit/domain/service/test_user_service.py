"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from querynet.domain.error import AuthenticationError, NotFoundError, ValidationError
from querynet.domain.model import UserPreferences
from querynet.domain.service import UserService
from querynet.domain.value import Theme, UserId, UserStat
from tests.factories import PASSWORD, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_hashes_password(self, unit_env):
        service = await unit_env.get(UserService)

        user = await service.register("alice", "Alice@Example.com", PASSWORD)

        assert user.username.root == "alice"
        assert user.email.root == "alice@example.com"
        assert user.password_hash != PASSWORD
        assert user.reputation == 1
        assert user.stats.questions_asked == 0

    @pytest.mark.asyncio
    async def test_duplicate_email_or_username_is_rejected(self, unit_env):
        service = await unit_env.get(UserService)
        await make_user(service, "alice")

        with pytest.raises(ValidationError, match="User already exists"):
            await service.register("alice2", "alice@example.com", PASSWORD)
        with pytest.raises(ValidationError, match="User already exists"):
            await service.register("alice", "other@example.com", PASSWORD)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "username,email,password",
        [
            ("alice", "alice@example.com", "short"),
            ("alice", "alice@example.com", "x" * 73),
            ("al", "alice@example.com", PASSWORD),
            ("alice smith", "alice@example.com", PASSWORD),
            ("alice", "not-an-email", PASSWORD),
        ],
    )
    async def test_invalid_input(self, unit_env, username, email, password):
        service = await unit_env.get(UserService)

        with pytest.raises(ValidationError):
            await service.register(username, email, password)


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, unit_env):
        service = await unit_env.get(UserService)
        alice = await make_user(service, "alice")

        user = await service.authenticate("alice@example.com", PASSWORD)

        assert user.id == alice.id
        assert user.last_active >= alice.last_active

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password",
        [
            ("alice@example.com", "wrong-password"),
            ("nobody@example.com", PASSWORD),
            ("garbage", PASSWORD),
        ],
    )
    async def test_invalid_credentials_share_one_message(self, unit_env, email, password):
        service = await unit_env.get(UserService)
        await make_user(service, "alice")

        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            await service.authenticate(email, password)


@pytest.mark.asyncio
async def test_update_preferences(unit_env):
    service = await unit_env.get(UserService)
    alice = await make_user(service, "alice")

    updated = await service.update_preferences(
        alice.id, UserPreferences(email_notifications=False, theme=Theme.DARK)
    )

    assert updated.preferences.email_notifications is False
    assert updated.preferences.push_notifications is True
    assert updated.preferences.theme is Theme.DARK


@pytest.mark.asyncio
async def test_update_preferences_unknown_user(unit_env):
    service = await unit_env.get(UserService)

    with pytest.raises(NotFoundError):
        await service.update_preferences(UserId(uuid4()), UserPreferences())


@pytest.mark.asyncio
async def test_counters_never_go_negative(unit_env):
    service = await unit_env.get(UserService)
    alice = await make_user(service, "alice")

    await service.adjust_stat(alice.id, UserStat.ANSWERS_GIVEN, 1)
    await service.adjust_stat(alice.id, UserStat.ANSWERS_GIVEN, -3)

    assert (await service.get_by_id(alice.id)).stats.answers_given == 0


class TestUpdateProfile:
    @pytest.mark.asyncio
    async def test_only_given_fields_change(self, unit_env):
        service = await unit_env.get(UserService)
        alice = await make_user(service, "alice")
        await service.adjust_stat(alice.id, UserStat.QUESTIONS_ASKED, 2)

        updated = await service.update_profile(
            alice.id, bio="Backend developer", location="Dublin"
        )

        assert updated.bio == "Backend developer"
        assert updated.location == "Dublin"
        assert updated.website is None
        assert updated.username.root == "alice"
        stored = await service.get_by_id(alice.id)
        assert stored.bio == "Backend developer"
        assert stored.stats.questions_asked == 2
        assert stored.password_hash == alice.password_hash

    @pytest.mark.asyncio
    async def test_rename(self, unit_env):
        service = await unit_env.get(UserService)
        alice = await make_user(service, "alice")

        updated = await service.update_profile(alice.id, username="alice_dev")

        assert updated.username.root == "alice_dev"
        assert (await service.get_by_id(alice.id)).username.root == "alice_dev"

    @pytest.mark.asyncio
    async def test_keeping_own_username_is_allowed(self, unit_env):
        service = await unit_env.get(UserService)
        alice = await make_user(service, "alice")

        updated = await service.update_profile(alice.id, username="alice", bio="hi")

        assert updated.bio == "hi"

    @pytest.mark.asyncio
    async def test_taken_username_is_rejected(self, unit_env):
        service = await unit_env.get(UserService)
        alice = await make_user(service, "alice")
        await make_user(service, "bob")

        with pytest.raises(ValidationError, match="Username already taken"):
            await service.update_profile(alice.id, username="bob")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "changes",
        [
            {"username": "al"},
            {"bio": "x" * 501},
            {"location": "x" * 101},
            {"website": "x" * 201},
        ],
    )
    async def test_invalid_fields(self, unit_env, changes):
        service = await unit_env.get(UserService)
        alice = await make_user(service, "alice")

        with pytest.raises(ValidationError):
            await service.update_profile(alice.id, **changes)

    @pytest.mark.asyncio
    async def test_unknown_user(self, unit_env):
        service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await service.update_profile(UserId(uuid4()), bio="hi")


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_new_password_replaces_old(self, unit_env):
        service = await unit_env.get(UserService)
        alice = await make_user(service, "alice")

        await service.change_password(alice.id, PASSWORD, "brand-new-pass")

        user = await service.authenticate("alice@example.com", "brand-new-pass")
        assert user.id == alice.id
        with pytest.raises(AuthenticationError):
            await service.authenticate("alice@example.com", PASSWORD)

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, unit_env):
        service = await unit_env.get(UserService)
        alice = await make_user(service, "alice")

        with pytest.raises(ValidationError, match="Current password is incorrect"):
            await service.change_password(alice.id, "not-my-password", "brand-new-pass")

        assert (await service.get_by_id(alice.id)).password_hash == alice.password_hash

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "current,new,message",
        [
            ("", "brand-new-pass", "Please provide current password and new password"),
            (PASSWORD, "", "Please provide current password and new password"),
            (PASSWORD, "short", "at least 6 characters"),
        ],
    )
    async def test_invalid_input(self, unit_env, current, new, message):
        service = await unit_env.get(UserService)
        alice = await make_user(service, "alice")

        with pytest.raises(ValidationError, match=message):
            await service.change_password(alice.id, current, new)
