# -*- coding: utf-8 -*-
"""
Tests for request performance monitoring.
"""

from okx_client.monitoring import PerformanceMonitor


class TestPerformanceMonitor:

    def test_records_success(self):
        monitor = PerformanceMonitor()
        monitor.record_request("/api/v5/trade/order", "POST", 200, 12.5)

        stats = monitor.statistics
        assert stats.total_requests == 1
        assert stats.successful_requests == 1
        assert stats.failed_requests == 0
        assert stats.avg_duration_ms == 12.5

    def test_records_error_types(self):
        monitor = PerformanceMonitor()
        monitor.record_request("/api/v5/trade/order", "POST", 200, 10.0, error_type="InsufficientFunds")
        monitor.record_request("/api/v5/trade/order", "POST", 429, 5.0, error_type="DDoSProtection")
        monitor.record_request("/api/v5/trade/order", "POST", 200, 5.0, error_type="InsufficientFunds")

        stats = monitor.statistics
        assert stats.failed_requests == 3
        assert stats.errors_by_type == {"InsufficientFunds": 2, "DDoSProtection": 1}
        assert monitor.get_error_rate() == 1.0

    def test_endpoint_stats(self):
        monitor = PerformanceMonitor()
        monitor.record_request("/api/v5/account/balance", "GET", 200, 10.0)
        monitor.record_request("/api/v5/account/balance", "GET", 500, 30.0, error_type="ExchangeNotAvailable")

        endpoint_stats = monitor.get_endpoint_stats("/api/v5/account/balance", "GET")
        assert endpoint_stats["count"] == 2
        assert endpoint_stats["avg_duration_ms"] == 20.0
        assert endpoint_stats["success_rate"] == 0.5
        assert monitor.get_endpoint_stats("/unknown", "GET")["count"] == 0

    def test_history_is_bounded(self):
        monitor = PerformanceMonitor(max_history=3)
        for n in range(5):
            monitor.record_request("/x", "GET", 200, float(n))

        assert [m.duration_ms for m in monitor.get_recent_requests(10)] == [2.0, 3.0, 4.0]
        assert monitor.statistics.total_requests == 5

    def test_reset(self):
        monitor = PerformanceMonitor()
        monitor.record_request("/x", "GET", 200, 1.0)
        monitor.reset()

        assert monitor.statistics.total_requests == 0
        assert monitor.get_recent_requests() == []

    def test_retryable_failures_are_counted_apart(self):
        monitor = PerformanceMonitor()
        monitor.record_request("/api/v5/trade/order", "POST", 503, 8.0, error_type="ExchangeNotAvailable", retryable=True)
        monitor.record_request("/api/v5/trade/order", "POST", 200, 4.0, error_type="InsufficientFunds")

        stats = monitor.statistics
        assert stats.failed_requests == 2
        assert stats.retryable_failures == 1
