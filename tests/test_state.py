"""Tests for passgen.history and passgen.state."""

import json
import re

import pytest

from passgen import AMBIGUOUS, EMPTY_ALPHABET_MESSAGE, GenerationOptions
from passgen.history import HISTORY_KEY, HISTORY_LIMIT, History
from passgen.state import (
    AppState,
    apply_preset,
    bulk_generate,
    clear_history,
    generate,
    generate_phrase,
    update_options,
)

NONE_ENABLED = dict(uppercase=False, lowercase=False, numbers=False, symbols=False)


# ── History ────────────────────────────────────────────────────────────────


class TestHistory:
    def test_newest_first(self):
        h = History().add("one").add("two")
        assert list(h) == ["two", "one"]

    def test_duplicates_ignored(self):
        h = History().add("one").add("two").add("one")
        assert list(h) == ["two", "one"]

    def test_capacity(self):
        h = History()
        for i in range(HISTORY_LIMIT + 5):
            h = h.add(f"pw{i}")
        assert len(h) == HISTORY_LIMIT
        assert h.entries[0] == f"pw{HISTORY_LIMIT + 4}"
        assert "pw4" not in h

    def test_add_returns_new_history(self):
        h = History()
        assert h.add("x") is not h
        assert len(h) == 0

    def test_clear(self):
        assert len(History(("a", "b")).clear()) == 0

    def test_from_json_dedups_and_trims(self):
        text = json.dumps(["a", "b", "a"] + [f"x{i}" for i in range(20)])
        h = History.from_json(text)
        assert len(h) == HISTORY_LIMIT
        assert h.entries[:3] == ("a", "b", "x0")

    @pytest.mark.parametrize("text", ['{"a": 1}', "[1, 2]", "not json"])
    def test_from_json_rejects_garbage(self, text):
        with pytest.raises(ValueError):
            History.from_json(text)

    def test_load_missing_file(self, tmp_path):
        assert len(History.load(tmp_path / "nope.json")) == 0

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "sub" / "history.json"
        History(("b&<", "a")).save(path)
        assert json.loads(path.read_text())[HISTORY_KEY] == ["b&<", "a"]
        assert History.load(path).entries == ("b&<", "a")

    def test_save_keeps_other_keys(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"theme": "dark"}))
        History(("pw",)).save(path)
        assert json.loads(path.read_text()) == {"theme": "dark", HISTORY_KEY: ["pw"]}

    def test_load_rejects_non_object(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[]")
        with pytest.raises(ValueError):
            History.load(path)


# ── AppState handlers ──────────────────────────────────────────────────────


class TestGenerate:
    def test_records_output(self):
        state = generate(AppState())
        assert len(state.output) == 16
        assert state.score is not None
        assert state.label in ("Weak", "Fair", "Good", "Strong")
        assert state.message is None
        assert list(state.history) == [state.output]

    def test_does_not_mutate_input(self):
        before = AppState()
        generate(before)
        assert before.output == ""
        assert len(before.history) == 0

    def test_empty_alphabet(self):
        state = generate(AppState(history=History(("old",))))
        state = generate(update_options(state, **NONE_ENABLED))
        assert state.message == EMPTY_ALPHABET_MESSAGE
        assert state.output == ""
        assert state.score is None
        assert state.label is None
        assert len(state.history) == 2

    def test_message_cleared_on_success(self):
        state = generate(update_options(AppState(), **NONE_ENABLED))
        state = generate(update_options(state, numbers=True))
        assert state.message is None
        assert state.output.isdigit()

    def test_passphrase(self):
        state = generate_phrase(AppState(), 3)
        assert re.match(r"^(?:[A-Z][a-z]+-){3}\d{3}$", state.output)
        assert state.output in state.history


class TestApplyPreset:
    def test_unknown_is_noop(self):
        state = generate(AppState())
        assert apply_preset(state, "nonexistent") is state

    def test_strong(self):
        state = apply_preset(AppState(), "strong")
        assert state.options.length == 16
        assert len(state.output) == 16
        assert state.score >= 70
        assert state.label == "Strong"

    def test_keeps_exclusions(self):
        state = update_options(AppState(), exclude_ambiguous=True, exclude_chars="2")
        for _ in range(10):
            state = apply_preset(state, "pin")
            assert len(state.output) == 4
            assert state.output.isdigit()
            assert not set(state.output) & set(AMBIGUOUS + "2")
        assert state.options.exclude_ambiguous is True
        assert state.options.exclude_chars == "2"

    def test_passphrase_keeps_options(self):
        state = update_options(AppState(), length=30)
        state = apply_preset(state, "passphrase")
        assert len(state.output.split("-")) == 5
        assert state.options.length == 30


class TestBulkGenerate:
    def test_count(self):
        state = bulk_generate(AppState(), 12)
        assert len(state.bulk) == 12
        assert all(len(p) == 16 for p in state.bulk)

    @pytest.mark.parametrize("count", [None, 0, -4])
    def test_default_count(self, count):
        assert len(bulk_generate(AppState(), count).bulk) == 5

    def test_not_in_history(self):
        state = bulk_generate(AppState(), 3)
        assert len(state.history) == 0
        assert state.output == ""

    def test_empty_alphabet(self):
        state = bulk_generate(update_options(AppState(), **NONE_ENABLED), 3)
        assert state.bulk == ()
        assert state.message == EMPTY_ALPHABET_MESSAGE


def test_clear_history():
    state = generate(generate(AppState()))
    assert len(clear_history(state).history) == 0


def test_update_options():
    state = update_options(AppState(), length=8, symbols=False)
    assert state.options == GenerationOptions(length=8, symbols=False)
