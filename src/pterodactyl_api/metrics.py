"""Prometheus collector for the API key's rate-limit quota.

Exposes the client's last observed quota snapshot on each scrape. Reading
the snapshot never triggers a request.
"""

from collections.abc import Iterator

import structlog
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.metrics_core import Metric
from prometheus_client.registry import Collector

from .application import Client

logger = structlog.get_logger(__name__)


class RateLimitCollector(Collector):
    """Prometheus collector reporting a client's rate-limit snapshot.

    Yields nothing until the client has seen a response carrying both
    rate-limit headers.
    """

    def __init__(self, client: Client, metric_prefix: str = "pterodactyl"):
        """Initialize the collector.

        Args:
            client: Client whose snapshot is reported.
            metric_prefix: Metric name prefix.
        """
        self._client = client
        self._metric_prefix = metric_prefix

    def collect(self) -> Iterator[Metric]:
        """Collect the quota gauges for a Prometheus scrape.

        Yields:
            Limit and remaining-requests gauges, labelled with the API URL.
        """
        limits = self._client.get_rate_limits()
        if limits is None:
            logger.debug("No rate limits observed yet", url=self._client.url)
            return

        limit = GaugeMetricFamily(
            f"{self._metric_prefix}_ratelimit_limit",
            "Requests allowed per rate-limit window",
            labels=["url"],
        )
        limit.add_metric([self._client.url], limits.limit)
        yield limit

        remaining = GaugeMetricFamily(
            f"{self._metric_prefix}_ratelimit_remaining",
            "Requests remaining in the current rate-limit window",
            labels=["url"],
        )
        remaining.add_metric([self._client.url], limits.remaining)
        yield remaining
