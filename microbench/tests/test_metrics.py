from __future__ import annotations

from typing import Any, Dict, List

import pytest
from prometheus_client import REGISTRY

from microbench import metrics


@pytest.fixture
def started(monkeypatch: pytest.MonkeyPatch) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []

    def fake_start_http_server(port, addr="0.0.0.0", **kw):
        calls.append({"port": port, "addr": addr})

    monkeypatch.setattr(metrics, "start_http_server", fake_start_http_server)
    monkeypatch.delenv("MICROBENCH_METRICS_ADDR", raising=False)
    return calls


def test_explicit_port_and_addr(started):
    assert metrics.maybe_start_http_endpoint(9107, addr="127.0.0.1") is True
    assert started == [{"port": 9107, "addr": "127.0.0.1"}]


def test_explicit_addr_wins_over_env(started, monkeypatch):
    monkeypatch.setenv("MICROBENCH_METRICS_ADDR", "0.0.0.0")
    metrics.maybe_start_http_endpoint(9999, addr="127.0.0.1")
    assert started[-1]["addr"] == "127.0.0.1"


def test_env_addr_used_when_addr_omitted(started, monkeypatch):
    monkeypatch.setenv("MICROBENCH_METRICS_ADDR", "127.0.0.2")
    metrics.maybe_start_http_endpoint(9108)
    assert started[-1] == {"port": 9108, "addr": "127.0.0.2"}


def test_default_addr(started):
    metrics.maybe_start_http_endpoint(9109)
    assert started[-1]["addr"] == "0.0.0.0"


def test_env_port(started, monkeypatch):
    monkeypatch.setenv("MICROBENCH_METRICS_PORT", "9110")
    assert metrics.maybe_start_http_endpoint() is True
    assert started[-1]["port"] == 9110


@pytest.mark.parametrize("value", ["", "not-a-port"])
def test_missing_or_malformed_env_port_disables(started, monkeypatch, value):
    monkeypatch.setenv("MICROBENCH_METRICS_PORT", value)
    assert metrics.maybe_start_http_endpoint() is False
    assert started == []


def test_record_search_counts_outcome_and_nonces():
    def sample(name, **labels):
        return REGISTRY.get_sample_value(name, labels) or 0.0

    before_found = sample("microbench_pow_searches_total", outcome="found")
    before_nonces = sample("microbench_pow_nonces_total")
    metrics.record_search("found", 12)
    assert sample("microbench_pow_searches_total", outcome="found") == before_found + 1
    assert sample("microbench_pow_nonces_total") == before_nonces + 12

    metrics.record_search("cancelled", 0)
    assert sample("microbench_pow_nonces_total") == before_nonces + 12
