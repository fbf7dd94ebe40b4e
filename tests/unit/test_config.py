"""Unit tests for pocketstore/config.py."""

from pathlib import Path


class TestAppConfig:

    def test_defaults(self, monkeypatch):
        from pocketstore.config import AppConfig
        monkeypatch.delenv("POCKETSTORE_HOME", raising=False)
        monkeypatch.delenv("POCKETSTORE_DEBUG", raising=False)
        cfg = AppConfig.from_env()
        assert cfg.home_dir == Path("~/.pocketstore").expanduser()
        assert cfg.db_path.name == "peopledb.db"
        assert cfg.debug is False

    def test_env_overrides(self, monkeypatch, tmp_path):
        from pocketstore.config import AppConfig
        monkeypatch.setenv("POCKETSTORE_HOME", str(tmp_path))
        monkeypatch.setenv("POCKETSTORE_DEBUG", "yes")
        cfg = AppConfig.from_env()
        assert cfg.home_dir == tmp_path
        assert cfg.debug is True

    def test_cli_flags_win_over_env(self, monkeypatch, tmp_path):
        from pocketstore.config import AppConfig
        monkeypatch.setenv("POCKETSTORE_HOME", "/somewhere/else")
        cfg = AppConfig.from_env().with_overrides(home=str(tmp_path), debug=True)
        assert cfg.home_dir == tmp_path
        assert cfg.debug is True

    def test_unset_flags_keep_env_values(self, monkeypatch, tmp_path):
        from pocketstore.config import AppConfig
        monkeypatch.setenv("POCKETSTORE_HOME", str(tmp_path))
        monkeypatch.setenv("POCKETSTORE_DEBUG", "1")
        cfg = AppConfig.from_env().with_overrides(home=None, debug=False)
        assert cfg.home_dir == tmp_path
        assert cfg.debug is True

    def test_secure_files_live_in_home(self, tmp_path):
        from pocketstore.config import AppConfig
        cfg = AppConfig(home=str(tmp_path))
        assert cfg.secure_path.parent == tmp_path
        assert cfg.key_path.parent == tmp_path
        assert cfg.secure_path != cfg.key_path
