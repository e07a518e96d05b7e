"""Application state and the handlers UI shells call.

Every handler takes an :class:`AppState` and returns a new one; nothing here
touches a widget, the DOM or the filesystem.
"""

import logging
from dataclasses import dataclass, field, replace

from passgen import (
    EmptyAlphabetError,
    GenerationOptions,
    PassphraseOptions,
    generate_passphrase,
    generate_password,
    resolve_preset,
    score_strength,
    strength_label,
)
from passgen.history import History

logger = logging.getLogger(__name__)

DEFAULT_BULK_COUNT = 5


@dataclass(frozen=True)
class AppState:
    options: GenerationOptions = field(default_factory=GenerationOptions)
    output: str = ""
    score: int | None = None
    message: str | None = None
    history: History = field(default_factory=History)
    bulk: tuple[str, ...] = ()

    @property
    def label(self) -> str | None:
        return None if self.score is None else strength_label(self.score)


def _show(state: AppState, secret: str) -> AppState:
    return replace(
        state,
        output=secret,
        score=score_strength(secret),
        message=None,
        history=state.history.add(secret),
    )


def generate(state: AppState) -> AppState:
    """Generate a password from ``state.options`` and record it."""
    try:
        password = generate_password(state.options)
    except EmptyAlphabetError as exc:
        return replace(state, output="", score=None, message=str(exc))
    return _show(state, password)


def generate_phrase(state: AppState, word_count: int = 4) -> AppState:
    """Generate a passphrase and record it."""
    return _show(state, generate_passphrase(word_count))


def update_options(state: AppState, **changes) -> AppState:
    return replace(state, options=replace(state.options, **changes))


def apply_preset(state: AppState, name: str) -> AppState:
    """Apply the named preset and generate with it.

    Password presets set the length and categories but keep the current
    exclusion settings.  Unknown names return *state* unchanged.
    """
    preset = resolve_preset(name)
    if preset is None:
        return state

    logger.debug("applying preset %r", name)
    if isinstance(preset, PassphraseOptions):
        return generate_phrase(state, preset.word_count)

    options = replace(
        preset,
        exclude_ambiguous=state.options.exclude_ambiguous,
        exclude_chars=state.options.exclude_chars,
    )
    return generate(replace(state, options=options))


def bulk_generate(state: AppState, count: int | None = None) -> AppState:
    """Fill ``state.bulk`` with *count* passwords (5 when unset or not positive).

    Bulk results are neither scored nor added to the history.
    """
    if not count or count < 1:
        count = DEFAULT_BULK_COUNT
    try:
        passwords = tuple(generate_password(state.options) for _ in range(count))
    except EmptyAlphabetError as exc:
        return replace(state, bulk=(), message=str(exc))
    return replace(state, bulk=passwords, message=None)


def clear_history(state: AppState) -> AppState:
    return replace(state, history=state.history.clear())
