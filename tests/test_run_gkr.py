"""Tests for the command line entry point."""

import json

import run_gkr
from protocol.proof import ProtocolTrace, load_trace


class TestMain:
    """Exit codes and printed output."""

    def test_accept(self, circuits_dir, capsys) -> None:
        code = run_gkr.main([str(circuits_dir / "sum_product.txt"), "--prime", "101", "--seed", "3"])
        out = capsys.readouterr().out
        assert code == 0
        assert "0,1,45" in out
        assert out.strip().endswith("Accept")

    def test_default_prime(self, circuits_dir, capsys) -> None:
        assert run_gkr.main([str(circuits_dir / "mixed_depth3.txt")]) == 0
        assert "Accept" in capsys.readouterr().out

    def test_reject_exit_code(self, circuits_dir, capsys, monkeypatch) -> None:
        monkeypatch.setattr(
            run_gkr, "prove_and_verify",
            lambda circuit, seed=None: ProtocolTrace(prime=101, bit_width=2, accepted=False, reason="forced"),
        )
        assert run_gkr.main([str(circuits_dir / "sum_product.txt"), "--prime", "101"]) == 1
        assert capsys.readouterr().out.strip().endswith("Reject")

    def test_trace_out(self, circuits_dir, tmp_path) -> None:
        out = tmp_path / "trace.json"
        code = run_gkr.main([str(circuits_dir / "sum_product.txt"), "--prime", "101", "--seed", "1",
                             "--trace-out", str(out)])
        assert code == 0
        trace = load_trace(str(out))
        assert trace.accepted
        assert trace.claimed_outputs == [45]

    def test_config_file(self, circuits_dir, tmp_path, capsys) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"prime": "17", "seed": 2}))
        code = run_gkr.main([str(circuits_dir / "sum_product.txt"), "--config", str(config)])
        assert code == 0
        assert "0,1,11" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys) -> None:
        assert run_gkr.main([str(tmp_path / "nope.txt")]) == 2
        assert "Error" in capsys.readouterr().err

    def test_malformed_circuit(self, tmp_path, capsys) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("0,5,*\n1 2\n")
        assert run_gkr.main([str(path), "--prime", "101"]) == 2
        assert "malformed" in capsys.readouterr().err

    def test_non_prime_modulus(self, circuits_dir, capsys) -> None:
        assert run_gkr.main([str(circuits_dir / "sum_product.txt"), "--prime", "100"]) == 2
        assert "Error" in capsys.readouterr().err

    def test_field_too_small(self, circuits_dir, capsys) -> None:
        assert run_gkr.main([str(circuits_dir / "sum_product.txt"), "--prime", "2"]) == 2

    def test_bad_config(self, circuits_dir, tmp_path, capsys) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"primes": 17}))
        assert run_gkr.main([str(circuits_dir / "sum_product.txt"), "--config", str(config)]) == 2
        assert "configuration" in capsys.readouterr().err
