"""Redis cache wrapper and the cached decorator."""

import pytest

from crystal_calendar import cache as cache_module


class TestCache:
    def test_unavailable_redis_is_a_miss(self):
        assert cache_module.cache.get("anything") is None
        assert cache_module.cache.set("anything", {"a": 1}) is False

    def test_set_get(self, fake_redis):
        assert cache_module.cache.set("report", {"score": 90}, ttl=60)
        assert fake_redis.ttls["report"] == 60
        assert cache_module.cache.get("report") == {"score": 90}
        assert cache_module.cache.get("missing") is None

    def test_health_report_helpers(self, fake_redis):
        report = {"summary": {"overall": "healthy"}, "results": []}
        cache_module.set_cached_health_report(report)
        assert cache_module.get_cached_health_report() == report

    def test_diagnosis_kept_for_a_day(self, fake_redis):
        cache_module.set_cached_diagnosis({"diagnosis": {"issues": []}})
        assert fake_redis.ttls[cache_module.DIAGNOSIS_REPORT_KEY] == 86400
        assert cache_module.get_cached_diagnosis() == {"diagnosis": {"issues": []}}


class TestCachedDecorator:
    @pytest.mark.asyncio
    async def test_second_call_served_from_cache(self, fake_redis):
        calls = []

        @cache_module.cached(key_prefix="relationship_report", ttl=300)
        async def build_report(name):
            calls.append(name)
            return {"name": name}

        assert await build_report("profiles") == {"name": "profiles"}
        assert await build_report("profiles") == {"name": "profiles"}
        assert calls == ["profiles"]
        assert fake_redis.ttls["relationship_report:profiles"] == 300

    @pytest.mark.asyncio
    async def test_none_results_not_cached(self, fake_redis):
        @cache_module.cached(key_prefix="empty")
        async def nothing():
            return None

        assert await nothing() is None
        assert fake_redis.store == {}

    @pytest.mark.asyncio
    async def test_runs_uncached_without_redis(self):
        @cache_module.cached(key_prefix="plain", key_builder=lambda x: f"plain:{x}")
        async def double(x):
            return x * 2

        assert await double(4) == 8
