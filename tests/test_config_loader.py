from pathlib import Path

import pytest
from pydantic import ValidationError

from src.utils.config_loader import load_premium_config

ENV_KEYS = ["REDIS_URL", "REDIS_SVC", "REDIS_PORT", "RATE_MATRIX_PATH", "RATE_MATRIX_SHEET"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "premium_config.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_empty_config_gives_defaults(tmp_path):
    cfg = load_premium_config(write_config(tmp_path, ""))
    assert cfg.store.url is None
    assert cfg.matrix.path == "premium_tables.xlsx"
    assert cfg.matrix.sheet == "matrix"
    assert cfg.quote.age_basis == "day_of_month"
    assert cfg.quote.strict_date_of_birth is False


def test_yaml_values(tmp_path):
    path = write_config(
        tmp_path,
        "store:\n  redis_host: cache\n  redis_port: 6380\nquote:\n  age_basis: anniversary\n",
    )
    cfg = load_premium_config(path)
    assert cfg.store.url == "redis://cache:6380"
    assert cfg.quote.age_basis == "anniversary"


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = write_config(tmp_path, "store:\n  redis_host: cache\nmatrix:\n  path: a.xlsx\n")
    monkeypatch.setenv("REDIS_SVC", "redis-svc")
    monkeypatch.setenv("RATE_MATRIX_PATH", "/data/rates.xlsx")
    cfg = load_premium_config(path)
    assert cfg.store.url == "redis://redis-svc:6379"
    assert cfg.matrix.path == "/data/rates.xlsx"


def test_redis_url_wins_over_host(tmp_path, monkeypatch):
    monkeypatch.setenv("REDIS_URL", "redis://:secret@db:6379/2")
    monkeypatch.setenv("REDIS_SVC", "ignored")
    cfg = load_premium_config(write_config(tmp_path, ""))
    assert cfg.store.url == "redis://:secret@db:6379/2"
    assert "secret" not in cfg.store.redacted_url


def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_premium_config(tmp_path / "missing.yml")


def test_invalid_values_rejected(tmp_path):
    with pytest.raises(ValidationError):
        load_premium_config(write_config(tmp_path, "quote:\n  age_basis: lunar\n"))


def test_repository_config_loads():
    cfg = load_premium_config()
    assert cfg.matrix.sheet == "matrix"
