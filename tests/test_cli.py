"""
Tests for the HuaMing CLI
=========================
Command handlers are called in-process through main(); a few checks run
`python -m huaming` in a subprocess.
"""

import json
import subprocess
import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from huaming.cli import main, validate_name


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "-m", "huaming", *args],
        capture_output=True,
        text=True,
        cwd=str(ROOT),
        timeout=60,
    )


class TestValidateName:
    """Input validation for the translate command."""

    def test_valid(self):
        assert validate_name("  Mary-Jane ") == (True, "Mary-Jane")

    def test_empty(self):
        valid, message = validate_name("   ")
        assert not valid
        assert "empty" in message

    def test_digits(self):
        valid, _ = validate_name("R2D2")
        assert not valid

    def test_too_long(self):
        valid, message = validate_name("a" * 41)
        assert not valid
        assert "40" in message


class TestTranslateCommand:
    """huaming translate"""

    def test_json(self, capsys):
        assert main(["translate", "Emily", "-g", "feminine", "--seed", "3", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data) == 3
        assert all(len(item["chineseName"]) == 2 for item in data)
        assert all(item["gender"] == "feminine" for item in data)

    def test_seed_reproducible(self, capsys):
        main(["translate", "John", "--seed", "4", "--json"])
        first = capsys.readouterr().out
        main(["translate", "John", "--seed", "4", "--json"])
        assert capsys.readouterr().out == first

    def test_gender_alias(self, capsys):
        assert main(["t", "John", "-g", "male", "--seed", "1", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data[0]["gender"] == "masculine"

    def test_table(self, capsys):
        assert main(["translate", "Anna", "--seed", "2", "-v"]) == 0
        out = capsys.readouterr().out
        assert "Pinyin" in out
        assert "Anna" in out

    def test_invalid_name(self, capsys):
        assert main(["translate", "R2D2"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_invalid_gender(self):
        with pytest.raises(SystemExit):
            main(["translate", "Anna", "-g", "robot"])


class TestSegmentCommand:
    """huaming segment"""

    def test_json(self, capsys):
        assert main(["segment", "john", "--json"]) == 0
        assert json.loads(capsys.readouterr().out) == ["jo", "h", "n"]

    def test_input_lowercased(self, capsys):
        assert main(["seg", "Emily", "--json"]) == 0
        assert json.loads(capsys.readouterr().out) == ["e", "m", "i", "l", "y"]

    def test_table(self, capsys):
        assert main(["segment", "john"]) == 0
        assert "乔" in capsys.readouterr().out


class TestDescribeCommand:
    """huaming describe"""

    def test_single_character(self, capsys):
        assert main(["describe", "明"]) == 0
        out = capsys.readouterr().out
        assert "bright" in out
        assert "明华" in out

    def test_pair(self, capsys):
        assert main(["d", "志", "华"]) == 0
        out = capsys.readouterr().out
        assert "志华" in out
        assert "4-2" in out

    def test_forbidden_pair(self, capsys):
        assert main(["describe", "马", "虎"]) == 2
        assert "inauspicious" in capsys.readouterr().out

    def test_not_single_character(self, capsys):
        assert main(["describe", "明华"]) == 1
        assert "single character" in capsys.readouterr().err

    def test_too_many(self):
        with pytest.raises(SystemExit):
            main(["describe", "明", "华", "安"])


class TestLexiconCommand:
    """huaming lexicon"""

    def test_stats(self, capsys):
        assert main(["lexicon"]) == 0
        assert "annotations" in capsys.readouterr().out

    def test_fragment(self, capsys):
        assert main(["lex", "--fragment", "jo"]) == 0
        out = capsys.readouterr().out
        assert "乔" in out
        assert "qiáo" in out

    def test_unknown_fragment(self, capsys):
        assert main(["lexicon", "-f", "zz"]) == 0
        assert "No transliterations" in capsys.readouterr().out

    def test_pool(self, capsys):
        assert main(["lexicon", "--position", "last", "--gender", "feminine"]) == 0
        out = capsys.readouterr().out
        assert "琳" in out


class TestMain:
    """Argument parsing and module entry point."""

    def test_no_command(self, capsys):
        assert main([]) == 0
        assert "translate" in capsys.readouterr().out

    def test_version(self):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0

    def test_quiet_json(self, capsys):
        """JSON output is never suppressed."""
        assert main(["--quiet", "segment", "john", "--json"]) == 0
        assert json.loads(capsys.readouterr().out) == ["jo", "h", "n"]

    def test_malformed_env_config(self, capsys, monkeypatch):
        """A non-integer HUAMING_SEED is reported as an error, not a traceback."""
        import huaming.config as config_module
        monkeypatch.setattr(config_module, '_config', None)
        monkeypatch.setenv('HUAMING_SEED', 'abc')
        assert main(["translate", "Emily"]) == 1
        assert "Error: HUAMING_SEED" in capsys.readouterr().err

    def test_module_help(self):
        result = run_cli("--help")
        assert result.returncode == 0
        assert "translate" in result.stdout

    def test_module_translate(self):
        result = run_cli("translate", "Emily", "--gender", "feminine", "--seed", "7", "--json")
        assert result.returncode == 0, result.stderr
        assert len(json.loads(result.stdout)) == 3

    def test_module_forbidden_exit_code(self):
        assert run_cli("describe", "马", "虎").returncode == 2
