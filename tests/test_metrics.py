"""Tests for the rate-limit Prometheus collector."""

import httpx
import pytest
from prometheus_client.core import CollectorRegistry

from pterodactyl_api import http, metrics


@pytest.fixture
def quota_client(make_client):
    """Client whose transport reports a 240/239 quota on every response."""
    return make_client(
        lambda request: httpx.Response(
            204,
            headers={"x-ratelimit-limit": "240", "x-ratelimit-remaining": "239"},
        )
    )


async def test_collect_yields_nothing_before_first_snapshot(make_client):
    """No gauges are reported until a quota has been observed."""
    api = make_client(lambda request: httpx.Response(204))
    collector = metrics.RateLimitCollector(api)

    assert list(collector.collect()) == []


async def test_collect_reports_limit_and_remaining(quota_client):
    """Both gauges carry the snapshot values, labelled with the API URL."""
    await quota_client.request(http.EmptyBody, "GET", "servers")
    collector = metrics.RateLimitCollector(quota_client)

    collected = {m.name: m for m in collector.collect()}

    limit = collected["pterodactyl_ratelimit_limit"].samples[0]
    remaining = collected["pterodactyl_ratelimit_remaining"].samples[0]
    assert limit.value == 240
    assert remaining.value == 239
    assert limit.labels == {"url": "https://panel.example/api/application/"}


async def test_collect_uses_metric_prefix(quota_client):
    """The metric prefix is configurable."""
    await quota_client.request(http.EmptyBody, "GET", "servers")
    collector = metrics.RateLimitCollector(quota_client, metric_prefix="panel")

    names = {m.name for m in collector.collect()}

    assert names == {"panel_ratelimit_limit", "panel_ratelimit_remaining"}


async def test_registry_exposes_snapshot(quota_client):
    """A registry with the collector serves the gauges."""
    await quota_client.request(http.EmptyBody, "GET", "servers")
    registry = CollectorRegistry()
    registry.register(metrics.RateLimitCollector(quota_client))

    value = registry.get_sample_value(
        "pterodactyl_ratelimit_remaining",
        {"url": "https://panel.example/api/application/"},
    )

    assert value == 239
