"""Tests for the in-memory and Redis-backed rate stores."""

from unittest.mock import MagicMock

import pytest
import redis

from src.database import create_rate_store
from src.database.redis import RedisRateStore
from src.database.redis_real import RedisRateStore as RealRedisRateStore
from src.database.redis_real import decode_member, encode_member
from src.premium.errors import InternalServerError
from src.utils.config_loader import StoreConfig


@pytest.fixture(params=["memory", "redis"])
def any_store(request):
    if request.param == "memory":
        return request.getfixturevalue("store")
    return request.getfixturevalue("redis_store")


def test_range_by_score_exact_match(any_store):
    any_store.bulk_insert("1A:100000", 1, "750")
    any_store.bulk_insert("1A:100000", 2, "900")
    assert any_store.range_by_score("1A:100000", 1, 1) == ["750"]
    assert any_store.range_by_score("1A:100000", 2, 2) == ["900"]
    assert any_store.range_by_score("1A:100000", 3, 3) == []


def test_range_by_score_is_ordered_by_score(any_store):
    any_store.bulk_insert("k", 3, "30")
    any_store.bulk_insert("k", 1, "10")
    any_store.bulk_insert("k", 2, "20")
    assert any_store.range_by_score("k", 1, 3) == ["10", "20", "30"]


def test_insert_same_score_replaces_member(any_store):
    any_store.bulk_insert("k", 1, "750")
    any_store.bulk_insert("k", 1, "800")
    assert any_store.range_by_score("k", 1, 1) == ["800"]


def test_equal_premiums_at_different_scores_are_kept(any_store):
    any_store.bulk_insert("k", 1, "750")
    any_store.bulk_insert("k", 2, "750")
    assert any_store.range_by_score("k", 1, 1) == ["750"]
    assert any_store.range_by_score("k", 2, 2) == ["750"]


def test_unknown_key_is_empty(any_store):
    assert any_store.range_by_score("missing", 1, 1) == []


def test_list_keys_and_clear_all(any_store):
    assert any_store.list_keys("*") == []
    any_store.bulk_insert("1A:100000", 1, "750")
    any_store.bulk_insert("2B:50000", 1, "300")
    assert sorted(any_store.list_keys("*")) == ["1A:100000", "2B:50000"]
    assert any_store.list_keys("1A:*") == ["1A:100000"]

    any_store.clear_all()
    assert any_store.list_keys("*") == []


def test_redis_members_carry_score_prefix(redis_store, fake_redis):
    redis_store.bulk_insert("k", 4, "1500")
    assert fake_redis.zrangebyscore("k", 4, 4, withscores=True) == [("4:1500", 4.0)]


def test_member_encoding():
    assert encode_member(3, "750") == "3:750"
    assert decode_member("3:750") == "750"
    with pytest.raises(ValueError):
        decode_member("750")


def test_malformed_redis_member_is_internal_error(redis_store, fake_redis):
    fake_redis.zadd("k", {"750": 1})
    with pytest.raises(InternalServerError):
        redis_store.range_by_score("k", 1, 1)


@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.range_by_score("k", 1, 1),
        lambda s: s.bulk_insert("k", 1, "750"),
        lambda s: s.list_keys("*"),
        lambda s: s.clear_all(),
    ],
)
def test_redis_failures_are_internal_errors(call):
    client = MagicMock()
    client.zrangebyscore.side_effect = redis.ConnectionError("refused")
    client.pipeline.return_value.execute.side_effect = redis.TimeoutError("timeout")
    client.keys.side_effect = redis.ConnectionError("refused")
    client.flushall.side_effect = redis.ResponseError("denied")

    with pytest.raises(InternalServerError) as exc:
        call(RealRedisRateStore(client=client))
    assert isinstance(exc.value.__cause__, redis.RedisError)


def test_memory_store_ping():
    assert RedisRateStore().ping() is True


def test_redis_store_ping(redis_store):
    assert redis_store.ping() is True


def test_ping_reports_connection_failure():
    client = MagicMock()
    client.ping.side_effect = redis.ConnectionError("refused")
    assert RealRedisRateStore(client=client).ping() is False


def test_real_store_needs_url_or_client():
    with pytest.raises(ValueError):
        RealRedisRateStore()


def test_create_rate_store_selects_backend():
    assert isinstance(create_rate_store(StoreConfig()), RedisRateStore)
    real = create_rate_store(StoreConfig(redis_host="redis-svc"))
    assert isinstance(real, RealRedisRateStore)
