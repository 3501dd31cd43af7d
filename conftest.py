"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite file database under tmp_path and a
low bcrypt work factor so hashing stays fast.
"""

import logging

import pytest
import pytest_asyncio

from messagely.config import Config, DBConfig, SecurityConfig
from messagely.core import SQLiteDatabaseManager, UserGateway, MessageGateway
from messagely.encryption import PasswordHash


TEST_WORK_FACTOR = 4


@pytest.fixture
def config(tmp_path):
    return Config(
        db=DBConfig(path=str(tmp_path / "messagely_test.db")),
        security=SecurityConfig(bcrypt_work_factor=TEST_WORK_FACTOR),
    )


@pytest_asyncio.fixture
async def db_manager(config):
    manager = SQLiteDatabaseManager(config)
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
def password_hash(config):
    return PasswordHash(work_factor=config.security.bcrypt_work_factor)


@pytest.fixture
def users(db_manager, password_hash):
    return UserGateway(db_manager, password_hash)


@pytest.fixture
def messages(db_manager):
    return MessageGateway(db_manager)


@pytest_asyncio.fixture
async def seeded(users, messages):
    """Two users and one message in each direction."""
    await users.register(
        username="test1",
        password="password",
        first_name="Test1",
        last_name="Testy1",
        phone="+14155550000",
    )
    await users.register(
        username="test2",
        password="1password",
        first_name="Test2",
        last_name="Testy2",
        phone="+14155552222",
    )
    m1 = await messages.create(from_username="test1", to_username="test2", body="u1-to-u2")
    m2 = await messages.create(from_username="test2", to_username="test1", body="u2-to-u1")
    return {"m1": m1, "m2": m2}


@pytest.fixture
def restore_root_logger():
    """setup_logging replaces the root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)
