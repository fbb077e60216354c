from coursereviews.config import AppSettings, LogConfig, config
from coursereviews.services import token_blacklist


class TestRedisSettings:

    def test_revocation_list_uses_shared_config(self):
        assert token_blacklist.redis_connection_kwargs() == {
            "host": config.REDIS_HOST,
            "port": config.REDIS_PORT,
            "password": config.REDIS_PASSWORD,
        }

    def test_env_file_values_reach_revocation_list(self, tmp_path, monkeypatch):
        for name in ("REDIS_HOST", "REDIS_PORT", "REDIS_PASSWORD"):
            monkeypatch.delenv(name, raising=False)
        (tmp_path / ".env").write_text(
            "REDIS_HOST=redis.internal\nREDIS_PASSWORD=s3cret\n", encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)

        kwargs = token_blacklist.redis_connection_kwargs(AppSettings())
        assert kwargs == {"host": "redis.internal", "port": 6379, "password": "s3cret"}


class TestLogConfig:

    def test_default_level(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        loggers = LogConfig().model_dump()["loggers"]
        assert loggers == {"coursereviews": {"handlers": ["default"], "level": "INFO"}}

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings = LogConfig().model_dump()
        assert settings["loggers"]["coursereviews"]["level"] == "DEBUG"
        assert settings["formatters"]["default"]["fmt"] == LogConfig().LOG_FORMAT
