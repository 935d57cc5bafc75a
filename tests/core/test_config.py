"""
Unit tests for settings loading.
"""

from locator.core.config import Settings


def test_settings_read_env_file(tmp_path, monkeypatch):
    """Test values in a .env file in the working directory are loaded"""
    (tmp_path / ".env").write_text(
        "LOCATOR_MEDIA_BASE_PATH=/srv/photos\nUNRELATED_KEY=ignored\n"
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOCATOR_MEDIA_BASE_PATH", raising=False)

    settings = Settings()

    assert settings.LOCATOR_MEDIA_BASE_PATH == "/srv/photos"
    assert not hasattr(settings, "UNRELATED_KEY")


def test_environment_overrides_env_file(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("LOG_LEVEL=WARNING\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    assert Settings().LOG_LEVEL == "DEBUG"


def test_defaults_without_env_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOCATOR_MEDIA_BASE_LINK_PREFIX", raising=False)

    assert Settings().LOCATOR_MEDIA_BASE_LINK_PREFIX == "/media/"
