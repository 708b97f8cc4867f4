"""Tests for settings and URL building."""

from glintstore.core.config import Settings, get_settings


class TestSettings:
    def test_url_from_parts(self) -> None:
        settings = Settings(
            _env_file=None,
            db_host="db.internal",
            db_port=6543,
            db_user="glint",
            db_password="hunter22",
            db_name="files",
        )

        url = settings.sqlalchemy_url()

        assert url.drivername == "postgresql+psycopg2"
        assert url.host == "db.internal"
        assert url.port == 6543
        assert url.username == "glint"
        assert url.password == "hunter22"
        assert url.database == "files"
        assert url.query["sslmode"] == "prefer"

    def test_sslmode_override(self) -> None:
        settings = Settings(_env_file=None, db_sslmode="require")

        assert settings.sqlalchemy_url().query["sslmode"] == "require"

    def test_database_url_wins(self) -> None:
        settings = Settings(_env_file=None, db_host="ignored", database_url="sqlite:///glint.db")

        url = settings.sqlalchemy_url()

        assert url.get_backend_name() == "sqlite"
        assert url.database == "glint.db"

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("DB_HOST", "from-env")
        monkeypatch.setenv("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
        get_settings.cache_clear()
        try:
            settings = get_settings()
            assert settings.db_host == "from-env"
            assert settings.password_hash_method == "pbkdf2:sha256:1000"
            assert get_settings() is settings
        finally:
            get_settings.cache_clear()
