from __future__ import annotations

import json

from typer.testing import CliRunner

from microbench.cli.workloads import app

runner = CliRunner()


def test_primes_json():
    r = runner.invoke(app, ["primes", "--bound", "10", "--json"])
    assert r.exit_code == 0, r.output
    payload = json.loads(r.output)
    assert payload["count"] == 4
    assert payload["largest"] == [2, 3, 5, 7]


def test_trace_is_reproducible():
    a = runner.invoke(app, ["trace", "-n", "6", "--seed", "3", "--json"])
    b = runner.invoke(app, ["trace", "-n", "6", "--seed", "3", "--json"])
    assert a.exit_code == 0 and b.exit_code == 0
    assert json.loads(a.output)["trace"] == json.loads(b.output)["trace"]


def test_trace_negative_dimension_fails():
    r = runner.invoke(app, ["trace", "-n", "-1"])
    assert r.exit_code == 2


def test_pow_table_output():
    r = runner.invoke(app, ["pow", "--data", "abc", "--difficulty", "1"])
    assert r.exit_code == 0, r.output
    assert "Proof of work" in r.output
    assert "nonce" in r.output


def test_pow_cap_fails():
    r = runner.invoke(app, ["pow", "--difficulty", "16", "--max-iterations", "5"])
    assert r.exit_code == 3


def test_hashrate_json():
    r = runner.invoke(app, ["hashrate", "--seconds", "0.05", "-D", "1", "--json"])
    assert r.exit_code == 0, r.output
    payload = json.loads(r.output)
    assert payload["total_hashes"] > 0
    assert [x["difficulty"] for x in payload["results"]] == [1]


def test_version():
    r = runner.invoke(app, ["--version"])
    assert r.exit_code == 0
    assert r.output.startswith("microbench ")
