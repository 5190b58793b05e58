from __future__ import annotations

import pytest

from microbench import bench
from microbench.bench import hashrate
from microbench.errors import InvalidArgument


def test_run_shape():
    out = hashrate.run(seconds=0.05, difficulties=[0, 1, 2])
    assert out["total_hashes"] > 0
    assert out["hashes_per_sec"] > 0
    rows = {r["difficulty"]: r for r in out["results"]}
    assert set(rows) == {0, 1, 2}
    # every digest has at least zero leading zeros
    assert rows[0]["observed"] == out["total_hashes"]
    assert rows[0]["observed"] >= rows[1]["observed"] >= rows[2]["observed"]
    assert rows[1]["expected"] == pytest.approx(out["total_hashes"] / 16)


def test_max_hashes_cap():
    out = hashrate.run(seconds=5.0, difficulties=[1], max_hashes=100)
    assert out["total_hashes"] == 100


def test_invalid_probe_args():
    with pytest.raises(InvalidArgument):
        hashrate.run(seconds=0)
    with pytest.raises(InvalidArgument):
        hashrate.run(difficulties=[70])


def test_registry_lookup():
    assert bench.get("hashrate") is hashrate
    assert bench.get("microbench.bench.hashrate") is hashrate
    assert "hashrate" in bench.available()
    with pytest.raises(KeyError):
        bench.get("nope")


def test_fmt_rate():
    assert hashrate.fmt_rate(2.5e6) == "2.50 M/s"
    assert hashrate.fmt_rate(12) == "12.00 /s"
