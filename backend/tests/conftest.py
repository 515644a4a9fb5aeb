"""Shared test fixtures and configuration."""
import pytest

from rbac_admin.config import Settings
from rbac_admin.services.admin import AdminConsole, create_admin_console

# Lowest bcrypt cost keeps hashing fast in tests
TEST_HASH_ROUNDS = 4


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(password_hash_rounds=TEST_HASH_ROUNDS)


@pytest.fixture
async def console(settings: Settings) -> AdminConsole:
    admin_console = create_admin_console(settings)
    yield admin_console
    await admin_console.aclose()


@pytest.fixture
async def empty_console() -> AdminConsole:
    admin_console = create_admin_console(
        Settings(password_hash_rounds=TEST_HASH_ROUNDS, seed_demo_data=False)
    )
    yield admin_console
    await admin_console.aclose()
