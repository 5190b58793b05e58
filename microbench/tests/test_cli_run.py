from __future__ import annotations

import json
import socket

from microbench import metrics
from microbench.cli.run import _main


def test_summary_and_branch_b(capsys):
    rc = _main(["-n", "3", "-umbral", "1000000", "-archivo", "res.txt",
                "--seed", "1", "--max-primes", "100"])
    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert out[:4] == [
        "Configuración de la simulación:",
        "Dimensión de las matrices: 3",
        "Valor umbral: 1000000",
        "Archivo de salida: res.txt",
    ]
    assert "Se ejecutará la rama B" in out
    assert out[-1].startswith("Rama ejecutada: B")


def test_branch_a_json(capsys):
    rc = _main(["-n", "3", "-umbral", "0", "--seed", "1", "--difficulty", "1", "--json"])
    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert "Se ejecutará la rama A" in out
    payload = json.loads(out[-1])
    assert payload["branch"] == "A"
    assert payload["threshold"] == 0
    assert payload["elapsed_seconds"] >= 0


def test_output_file_is_not_written(tmp_path, capsys):
    target = tmp_path / "salida.txt"
    rc = _main(["-n", "2", "-umbral", "1000000", "-archivo", str(target), "--max-primes", "10"])
    assert rc == 0
    assert not target.exists()


def test_negative_dimension_exit_code(capsys):
    assert _main(["-n", "-4"]) == 2


def test_exhausted_search_exit_code(capsys):
    rc = _main(["-n", "3", "-umbral", "-1", "--difficulty", "16", "--max-iterations", "10"])
    assert rc == 3


def test_dry_run_prints_config(capsys):
    rc = _main(["-n", "5", "--dry-run"])
    out = capsys.readouterr().out
    assert rc == 0
    cfg = json.loads(out)
    assert cfg["n"] == 5
    assert cfg["threshold"] == 10_000
    assert "Configuración" not in out


def test_defaults_from_env(monkeypatch, capsys):
    monkeypatch.setenv("MICROBENCH_N", "4")
    monkeypatch.setenv("MICROBENCH_THRESHOLD", "123")
    rc = _main(["--dry-run"])
    cfg = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert (cfg["n"], cfg["threshold"]) == (4, 123)


def test_metrics_flag_starts_endpoint(monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(metrics, "start_http_server",
                        lambda port, addr="0.0.0.0", **kw: calls.append((addr, port)))
    monkeypatch.setenv("MICROBENCH_METRICS_ADDR", "0.0.0.0")
    rc = _main(["-n", "2", "-umbral", "1000000", "--max-primes", "10",
                "--metrics", "127.0.0.1:9123"])
    assert rc == 0
    assert calls == [("127.0.0.1", 9123)]


def test_metrics_port_in_use_exit_code(capsys):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        port = busy.getsockname()[1]
        rc = _main(["-n", "2", "-umbral", "1000000", "--max-primes", "10",
                    "--metrics", f"127.0.0.1:{port}"])
    assert rc == 2
    assert "Rama ejecutada" not in capsys.readouterr().out
