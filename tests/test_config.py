"""Tests for settings and logging setup"""
import json
import logging

from user_registry.config import Settings
from user_registry.core.logging import setup_logging


def test_defaults(monkeypatch):
    monkeypatch.delenv("MONGO_URI", raising=False)
    settings = Settings(_env_file=None)
    assert settings.MONGO_URI == "mongodb://localhost:27017"
    assert settings.API_PREFIX == "/api"
    assert settings.CORS_ORIGINS == ["*"]

def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MONGO_URI", "mongodb://db:27017")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ORIGINS", '["https://app.example.com"]')
    settings = Settings(_env_file=None)
    assert settings.MONGO_URI == "mongodb://db:27017"
    assert settings.PORT == 8080
    assert settings.CORS_ORIGINS == ["https://app.example.com"]

def test_empty_variable_keeps_default(monkeypatch):
    monkeypatch.setenv("MONGO_DB_NAME", "")
    assert Settings(_env_file=None).MONGO_DB_NAME == "user_registry"

def test_json_logging(capsys):
    setup_logging(level="INFO", json_logs=True)
    logging.getLogger("user_registry.test").info("registered %s", "abc")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["message"] == "registered abc"
    assert record["levelname"] == "INFO"

    setup_logging(level="INFO")
