import pytest

from storyhub.config import DevelopmentSettings, ProductionSettings, Settings, get_settings
from storyhub.migrations.setup import ensure_admin_account
from storyhub.scripts.sample_data import SAMPLE_STORIES, remove_sample_data, seed_database


@pytest.mark.asyncio
async def test_seed_and_remove_sample_data(app_state):
    added = await seed_database(app_state.stories, app_state.visitors)

    assert added == {"stories": len(SAMPLE_STORIES), "users": 1}
    titles = {story["title"] for story in await app_state.stories.list_stories()}
    assert titles == {"The Journey Begins", "A Silent Night"}

    removed = await remove_sample_data(app_state.stories, app_state.visitors)

    assert removed == {"stories": 2, "users": 1}
    assert await app_state.stories.count_stories() == 0
    assert await app_state.visitors.count_visitors() == 0


@pytest.mark.asyncio
async def test_ensure_admin_account_is_idempotent(app_state):
    await ensure_admin_account(app_state.admins, "editor", "editor-pass-1")
    await ensure_admin_account(app_state.admins, "editor", "different-pass-2")

    admin = await app_state.admins.get_by_username("editor")
    assert admin is not None
    assert admin["password_hash"] != "editor-pass-1"
    assert await app_state.database.admins.count_documents({}) == 1


def test_settings_parse_origins():
    settings = Settings(allowed_origins="http://a.test, http://b.test,")
    assert settings.allowed_origins == ["http://a.test", "http://b.test"]


def test_settings_reject_empty_event_buffer():
    with pytest.raises(ValueError):
        Settings(event_buffer_size=0)


def test_get_settings_follows_environment(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    assert isinstance(get_settings(), ProductionSettings)

    monkeypatch.setenv("ENVIRONMENT", "development")
    assert isinstance(get_settings(), DevelopmentSettings)


@pytest.mark.asyncio
async def test_ensure_collections(database):
    from storyhub.migrations.setup import REQUIRED_COLLECTIONS, ensure_collections

    assert await ensure_collections(database) is True
    assert set(REQUIRED_COLLECTIONS) <= set(await database.list_collection_names())
