"""Tests for the command-line interface."""

import json

import pytest

from primekit.cli import main


class TestCommands:
    """Tests for each subcommand."""

    def test_sieve(self, capsys):
        """Test listing primes."""
        assert main(["sieve", "30"]) == 0
        assert capsys.readouterr().out.split() == ["2", "3", "5", "7", "11", "13", "17", "19", "23", "29"]

    def test_sieve_count(self, capsys):
        """Test counting primes with each method."""
        for method in ("auto", "atkin", "segmented", "eratosthenes"):
            assert main(["sieve", "100_000", "--method", method, "--count"]) == 0
            assert capsys.readouterr().out.strip() == "9592"

    def test_is_prime(self, capsys):
        """Test primality output."""
        assert main(["is-prime", "97", "128"]) == 0
        assert capsys.readouterr().out.splitlines() == ["97: prime", "128: not prime"]

    def test_next_prime(self, capsys):
        """Test next-prime output."""
        assert main(["next-prime", "95"]) == 0
        assert capsys.readouterr().out.strip() == "97"

    def test_nth_prime(self, capsys):
        """Test nth-prime output."""
        assert main(["nth-prime", "3"]) == 0
        assert capsys.readouterr().out.strip() == "7"

    def test_factor(self, capsys):
        """Test factorization output with both algorithms."""
        assert main(["factor", "200", "9223372036854775807"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "200: 2 2 2 5 5",
            "9223372036854775807: 7 7 73 127 337 92737 649657",
        ]

        assert main(["factor", "--trial", "200", "1"]) == 0
        assert capsys.readouterr().out.splitlines() == ["200: 2 2 2 5 5", "1:"]

    def test_count(self, capsys):
        """Test prime-count output."""
        assert main(["count", "10", "1000"]) == 0
        assert capsys.readouterr().out.splitlines() == ["pi(10) = 4", "pi(1000) = 168"]


class TestOptions:
    """Tests for global options and error handling."""

    def test_no_command(self, capsys):
        """Test that help is printed without a command."""
        assert main([]) == 1
        assert "Available commands" in capsys.readouterr().out

    def test_invalid_input(self, capsys):
        """Test that library errors become exit code 2."""
        assert main(["is-prime", "-7"]) == 2
        assert "error:" in capsys.readouterr().err

    def test_out_of_range(self, capsys):
        """Test that an oversized value becomes exit code 2."""
        assert main(["next-prime", str(2 ** 64)]) == 2
        assert "64-bit" in capsys.readouterr().err

    def test_non_integer_argument(self):
        """Test that argparse rejects non-numeric values."""
        with pytest.raises(SystemExit):
            main(["nth-prime", "seven"])

    def test_config_file(self, tmp_path, capsys):
        """Test loading configuration from a file."""
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"segment_size": 128}))
        assert main(["--config", str(path), "sieve", "1000", "--count"]) == 0
        assert capsys.readouterr().out.strip() == "168"

    def test_bad_config_file(self, tmp_path, capsys):
        """Test that an invalid config file is reported."""
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"segment_size": 0}))
        assert main(["--config", str(path), "nth-prime", "3"]) == 2

    def test_log_file(self, tmp_path):
        """Test that verbose runs write debug records to the log file."""
        log_path = tmp_path / "primekit.log"
        assert main(["-v", "--log-file", str(log_path), "count", "100000"]) == 0
        text = log_path.read_text()
        assert "DEBUG" in text
        assert "primekit.counting.pi" in text
