"""Pytest fixtures for premium quoting and rate loading tests."""

from datetime import date

import fakeredis
import pytest
from openpyxl import Workbook

from src.database.redis import RedisRateStore
from src.database.redis_real import RedisRateStore as RealRedisRateStore
from src.premium.loader import RateLoader
from src.premium.service import PremiumService
from src.utils.config_loader import MatrixConfig, QuoteConfig

TODAY = date(2024, 6, 15)

MATRIX_ROWS = [
    ["1A", "100000", "ignored", 750],
    ["1A", "100000", "ignored", 900],
    ["1A", "200000", "ignored", 1200],
    ["2B", 50000, None, 300.0],
]


def dob_for_age(age: int) -> str:
    """Date of birth giving `age` on TODAY under either age basis."""
    return date(TODAY.year - age, 1, 1).isoformat()


def write_matrix(path, rows, sheet="matrix"):
    wb = Workbook()
    ws = wb.active
    ws.title = sheet
    for row in rows:
        ws.append(row)
    wb.save(path)
    return path


@pytest.fixture
def store():
    """In-memory rate store stub for tests."""
    return RedisRateStore()


@pytest.fixture
def fake_redis():
    client = fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)
    yield client
    client.flushall()


@pytest.fixture
def redis_store(fake_redis):
    return RealRedisRateStore(client=fake_redis)


@pytest.fixture
def matrix_path(tmp_path):
    return write_matrix(tmp_path / "premium_tables.xlsx", MATRIX_ROWS)


@pytest.fixture
def loader(store, matrix_path):
    return RateLoader(store, MatrixConfig(path=str(matrix_path)))


@pytest.fixture
def service(store):
    return PremiumService(store, QuoteConfig(), today=lambda: TODAY)
