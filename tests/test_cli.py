"""
Fair Dice - Command line tests
"""

import pytest

from dice_game import cli
from dice_game.fair_random import generate

CLASSIC_ARGS = ["2,2,4,4,9,9", "6,8,1,1,8,6", "7,5,3,7,5,3"]


class TestArguments:
    """Argument validation happens before any game logic."""

    def test_too_few_dice(self, capsys):
        assert cli.main(["1,2,3,4,5,6", "1,2,3,4,5,6"]) == cli.EXIT_CONFIG
        err = capsys.readouterr().err
        assert "at least 3 dice" in err
        assert "Example usage" in err

    def test_bad_face(self, capsys):
        assert cli.main(["1,2,3,4,5,6", "1,2,3,4,5,6", "1,2,3,4,5,a"]) == cli.EXIT_CONFIG
        assert "integer" in capsys.readouterr().err

    def test_bad_rounds(self, capsys):
        assert cli.main(CLASSIC_ARGS + ["--rounds", "0"]) == cli.EXIT_CONFIG

    def test_table_only(self, capsys):
        assert cli.main(CLASSIC_ARGS + ["--table"]) == cli.EXIT_OK
        out = capsys.readouterr().out
        assert "- (0.3333)" in out
        assert "0.5556" in out


class TestVerifyCommand:
    """Tests for --verify VALUE KEY HMAC."""

    def test_honest_commitment(self, capsys):
        c = generate(6)
        assert cli.main(["--verify", str(c.revealed_value), c.key_hex, c.digest]) == cli.EXIT_OK
        assert "OK" in capsys.readouterr().out

    def test_uppercase_digest(self, capsys):
        c = generate(6)
        args = ["--verify", str(c.revealed_value), c.key_hex.upper(), c.digest.upper()]
        assert cli.main(args) == cli.EXIT_OK

    def test_cheating_code_differs_from_usage_error(self):
        assert cli.EXIT_CHEATING not in (cli.EXIT_OK, cli.EXIT_CONFIG, 2)

    def test_wrong_value(self, capsys):
        c = generate(6)
        wrong = str((c.revealed_value + 1) % 6)
        assert cli.main(["--verify", wrong, c.key_hex, c.digest]) == cli.EXIT_CHEATING
        assert "MISMATCH" in capsys.readouterr().out

    @pytest.mark.parametrize("value, key, digest", [
        ("x", "00" * 32, "00" * 32),
        ("1", "zz", "00" * 32),
        ("1", "00" * 32, "abc"),
    ])
    def test_malformed(self, value, key, digest, capsys):
        assert cli.main(["--verify", value, key, digest]) == cli.EXIT_CONFIG
        assert "Malformed" in capsys.readouterr().err


class TestPlay:
    """Game wiring through main()."""

    def test_exit_is_clean(self, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda prompt="": "x")
        assert cli.main(CLASSIC_ARGS) == cli.EXIT_OK
        assert "Goodbye" in capsys.readouterr().out

    def test_end_of_input_is_clean(self, monkeypatch, capsys):
        def closed(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", closed)
        assert cli.main(CLASSIC_ARGS) == cli.EXIT_OK
