"""Tests for the passgen command line and the PyScript page builder."""

import ast
import json
import re

import pytest

import build_docs
from passgen.cli import main
from passgen.history import HISTORY_KEY


@pytest.fixture
def history_file(tmp_path):
    return tmp_path / "history.json"


def _run(capsys, *argv):
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


class TestCli:
    def test_generate_digits(self, capsys):
        code, out, _ = _run(
            capsys, "--no-history", "generate", "-n", "8",
            "--no-uppercase", "--no-lowercase", "--no-symbols",
        )
        assert code == 0
        pwd = out.split()[0]
        assert re.fullmatch(r"\d{8}", pwd)

    def test_generate_records_history(self, capsys, history_file):
        _run(capsys, "--history-file", str(history_file), "generate")
        _, out, _ = _run(capsys, "--history-file", str(history_file), "passphrase")
        saved = json.loads(history_file.read_text())[HISTORY_KEY]
        assert len(saved) == 2
        assert saved[0] == out.split()[0]

    def test_empty_alphabet(self, capsys, history_file):
        code, out, err = _run(
            capsys, "--history-file", str(history_file), "generate",
            "--no-uppercase", "--no-lowercase", "--no-numbers", "--no-symbols",
        )
        assert code == 1
        assert out == ""
        assert "Select at least one character type" in err
        assert not history_file.exists()

    def test_passphrase(self, capsys):
        code, out, _ = _run(capsys, "--no-history", "passphrase", "-w", "5")
        assert code == 0
        assert re.match(r"^(?:[A-Z][a-z]+-){5}\d{3}$", out.split()[0])

    def test_preset(self, capsys):
        code, out, _ = _run(capsys, "--no-history", "preset", "strong")
        assert code == 0
        assert len(out.split()[0]) == 16
        assert "Strong" in out

    def test_unknown_preset(self, capsys, history_file):
        code, out, _ = _run(capsys, "--history-file", str(history_file), "preset", "bogus")
        assert code == 0
        assert out == ""
        assert not history_file.exists()

    def test_bulk(self, capsys, history_file):
        code, out, _ = _run(
            capsys, "--history-file", str(history_file), "bulk", "-c", "7", "-n", "10",
        )
        assert code == 0
        lines = out.splitlines()
        assert len(lines) == 7
        assert all(len(line.strip()) == 10 for line in lines)
        assert not history_file.exists()

    def test_score(self, capsys):
        code, out, _ = _run(capsys, "score", "abc", "Password1")
        assert code == 0
        first, second = out.splitlines()
        assert " 27/100 Weak" in first
        assert " 81/100 Strong" in second

    def test_history_list_and_clear(self, capsys, history_file):
        history_file.write_text(json.dumps({HISTORY_KEY: ["one", "two"]}))
        _, out, _ = _run(capsys, "--history-file", str(history_file), "history")
        assert "1. one" in out
        assert "2. two" in out

        code, out, _ = _run(capsys, "--history-file", str(history_file), "history", "--clear")
        assert code == 0
        assert "Cleared 2" in out
        assert json.loads(history_file.read_text())[HISTORY_KEY] == []

    def test_empty_history(self, capsys, history_file):
        _, out, _ = _run(capsys, "--history-file", str(history_file), "history")
        assert "will appear here" in out

    def test_corrupt_history(self, capsys, history_file):
        history_file.write_text("{broken")
        code, _, err = _run(capsys, "--history-file", str(history_file), "generate")
        assert code == 1
        assert "cannot read history" in err

    def test_generate_exclusions(self, capsys):
        code, out, _ = _run(
            capsys, "--no-history", "generate", "-n", "40",
            "--no-uppercase", "--no-lowercase", "--no-symbols", "-a", "-x", "9",
        )
        assert code == 0
        pwd = out.split()[0]
        assert len(pwd) == 40
        assert set(pwd) <= set("2345678")

    def test_preset_exclusions(self, capsys):
        code, out, _ = _run(capsys, "--no-history", "preset", "pin", "-a", "-x", "2")
        assert code == 0
        assert re.fullmatch(r"[3-9]{4}", out.split()[0])

    def test_preset_passphrase(self, capsys, history_file):
        code, out, _ = _run(capsys, "--history-file", str(history_file), "preset", "passphrase")
        assert code == 0
        phrase = out.split()[0]
        assert re.match(r"^(?:[A-Z][a-z]+-){4}\d{3}$", phrase)
        assert json.loads(history_file.read_text())[HISTORY_KEY] == [phrase]

    @pytest.mark.parametrize("argv", [
        ["generate", "-n", "0"],
        ["passphrase", "-w", "0"],
        ["bulk", "-n", "-3"],
        ["generate", "-n", "ten"],
    ])
    def test_non_positive_sizes_rejected(self, capsys, history_file, argv):
        with pytest.raises(SystemExit) as exc:
            main(["--history-file", str(history_file), *argv])
        assert exc.value.code == 2
        err = capsys.readouterr().err
        assert "usage" in err
        assert not history_file.exists()

    def test_no_command(self, capsys):
        code, out, _ = _run(capsys)
        assert code == 0
        assert "usage" in out


class TestBuildDocs:
    def _script(self, html):
        return html.split('<script type="py">')[1].split("</script>")[0]

    def test_embeds_core(self):
        html = build_docs.build_html()
        script = self._script(html)
        assert "def generate_password(" in script
        assert "def generate_passphrase(" in script
        assert "class History" in script
        assert "def apply_preset(" in script
        assert "@dataclass(frozen=True)\nclass GenerationOptions" in script
        assert "from passgen" not in script
        assert "__PYSCRIPT" not in html

    def test_script_is_valid_python(self):
        ast.parse(self._script(build_docs.build_html()))

    def test_build_writes_file(self, tmp_path, capsys):
        out = tmp_path / "docs" / "index.html"
        build_docs.build(out)
        assert out.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
        assert "Built" in capsys.readouterr().out
