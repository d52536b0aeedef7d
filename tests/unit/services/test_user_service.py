"""
Unit tests for UserService
"""
import pytest

from app.config import Settings
from app.core.exceptions import InsufficientCreditsError, NotFoundError, ValidationError
from app.core.repositories.user_repo import UserRepository
from app.core.services.user_service import UserService


@pytest.fixture
def user_service():
    settings = Settings(
        jwt_secret="x" * 32,
        admin_emails=frozenset({"admin@example.com"}),
        signup_credits=50,
    )
    return UserService(UserRepository(), settings)


class TestRegister:

    @pytest.mark.asyncio
    async def test_first_sign_in_grants_signup_credits(self, user_service):
        user = await user_service.register("New@Example.com", "New User", "https://pic")
        assert user.email == "new@example.com"
        assert user.credits == 50
        assert user.is_admin is False
        assert user.avatar == "https://pic"

    @pytest.mark.asyncio
    async def test_second_sign_in_keeps_balance(self, user_service):
        await user_service.register("a@example.com", "A")
        await user_service.charge("a@example.com", 10)

        again = await user_service.register("a@example.com", "A Renamed")
        assert again.credits == 40
        assert again.name == "A Renamed"
        assert await user_service.user_repo.count() == 1

    @pytest.mark.asyncio
    async def test_admin_flag_follows_allow_list(self, user_service):
        user = await user_service.register("admin@example.com")
        assert user.is_admin is True

        # Stored flag is never trusted over the allow-list
        user.is_admin = False
        assert (await user_service.register("admin@example.com")).is_admin is True

    @pytest.mark.asyncio
    async def test_email_required(self, user_service):
        with pytest.raises(ValidationError):
            await user_service.register("")

    @pytest.mark.asyncio
    async def test_get_unknown_user(self, user_service):
        with pytest.raises(NotFoundError):
            await user_service.get_user("ghost@example.com")


class TestCredits:

    @pytest.mark.asyncio
    async def test_charge_registers_unknown_subject(self, user_service):
        charged = await user_service.charge("late@example.com", 5)
        assert charged == 5
        assert (await user_service.get_user("late@example.com")).credits == 45

    @pytest.mark.asyncio
    async def test_charge_over_balance(self, user_service):
        await user_service.register("a@example.com")
        with pytest.raises(InsufficientCreditsError, match="51 needed, 50 available"):
            await user_service.charge("a@example.com", 51)
        assert (await user_service.get_user("a@example.com")).credits == 50

    @pytest.mark.asyncio
    async def test_refund_and_grant(self, user_service):
        await user_service.register("a@example.com")
        await user_service.refund("a@example.com", 7)
        user = await user_service.grant("a@example.com", 100)
        assert user.credits == 157

    @pytest.mark.asyncio
    async def test_refund_unknown_user_is_ignored(self, user_service):
        await user_service.refund("ghost@example.com", 10)
        assert await user_service.user_repo.count() == 0
