"""Tests for settings loading."""

from app.config import BASE_DIR, Settings


class TestCorsOrigins:
    def test_comma_separated_env_value(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, http://localhost:5173")
        settings = Settings(_env_file=None)
        assert settings.cors_origins == ["http://localhost:3000", "http://localhost:5173"]

    def test_single_origin(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "https://shop.example.com")
        settings = Settings(_env_file=None)
        assert settings.cors_origins == ["https://shop.example.com"]

    def test_default_without_env(self, monkeypatch):
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        settings = Settings(_env_file=None)
        assert settings.cors_origins == ["http://localhost:3000", "http://localhost:5173"]


def test_example_env_file_loads(monkeypatch):
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    monkeypatch.delenv("TAX_RATE", raising=False)
    monkeypatch.delenv("MONGODB_DATABASE", raising=False)
    settings = Settings(_env_file=BASE_DIR.parent / ".env.example")
    assert settings.cors_origins == ["http://localhost:3000", "http://localhost:5173"]
    assert settings.tax_rate == 0.08
    assert settings.mongodb_database == "storefront"
