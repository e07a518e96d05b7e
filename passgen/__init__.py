"""PassGen -- secure password and passphrase generation.

Core functions for alphabet construction, cryptographically strong sampling,
password and passphrase generation, strength scoring and preset lookup.
Everything here is pure apart from the OS entropy source; UI state lives in
:mod:`passgen.state`.
"""

import logging
import re
import secrets
import string
from dataclasses import dataclass

logger = logging.getLogger(__name__)


# ── Errors ─────────────────────────────────────────────────────────────────


class EmptyAlphabetError(ValueError):
    """No characters are left to draw from."""


class InvalidArgument(ValueError):
    """A sampler or generator was called with out-of-range arguments."""


class EntropyUnavailable(RuntimeError):
    """The operating system cannot provide cryptographic randomness."""


# ── Character sets ─────────────────────────────────────────────────────────

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
NUMBERS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
AMBIGUOUS = "l1IO0"

# Canonical concatenation order.
CATEGORIES = {
    "uppercase": UPPERCASE,
    "lowercase": LOWERCASE,
    "numbers": NUMBERS,
    "symbols": SYMBOLS,
}

WORDS = (
    "apple", "banana", "cherry", "dragon", "eagle", "forest", "garden", "harbor",
    "island", "jungle", "kingdom", "lemon", "mountain", "nature", "ocean", "planet",
    "quantum", "river", "sunset", "thunder", "umbrella", "valley", "winter", "xylophone",
    "yellow", "zebra", "anchor", "breeze", "castle", "diamond", "echo", "falcon",
    "guitar", "horizon", "ivory", "jasmine", "kite", "lantern", "marble", "nectar",
    "olive", "pearl", "quartz", "rainbow", "silver", "tiger", "unity", "velvet",
    "willow", "xenon", "yacht", "zenith", "amber", "blaze", "coral", "dusk",
)

EMPTY_ALPHABET_MESSAGE = "Select at least one character type"


@dataclass(frozen=True)
class GenerationOptions:
    length: int = 16
    uppercase: bool = True
    lowercase: bool = True
    numbers: bool = True
    symbols: bool = True
    exclude_ambiguous: bool = False
    exclude_chars: str = ""

    @property
    def categories(self) -> tuple[str, ...]:
        """Names of the enabled categories, in canonical order."""
        return tuple(name for name in CATEGORIES if getattr(self, name))


@dataclass(frozen=True)
class PassphraseOptions:
    word_count: int = 4


# ── Alphabet ───────────────────────────────────────────────────────────────


def build_alphabet(options: GenerationOptions) -> str:
    """Return the characters eligible for *options*.

    Enabled categories are concatenated in canonical order, then ambiguous
    characters (if requested) and every character of ``exclude_chars`` are
    removed.  The result may be empty; :func:`generate_password` decides what
    to do about that.
    """
    charset = "".join(CATEGORIES[name] for name in options.categories)

    if options.exclude_ambiguous:
        charset = "".join(c for c in charset if c not in AMBIGUOUS)
    if options.exclude_chars:
        excluded = set(options.exclude_chars)
        charset = "".join(c for c in charset if c not in excluded)

    logger.debug(
        "alphabet built: categories=%s size=%d", ",".join(options.categories), len(charset),
    )
    return charset


# ── Sampling ───────────────────────────────────────────────────────────────


def random_indices(count: int, modulus: int) -> list[int]:
    """Return *count* indices in ``[0, modulus)``.

    Each index is an unsigned 32-bit value from :mod:`secrets` reduced modulo
    *modulus*.  When *modulus* does not divide 2**32 lower indices are very
    slightly favoured; with alphabets and word lists this small the bias is
    below one part in ten million.
    """
    if modulus <= 0:
        raise InvalidArgument(f"modulus must be positive, got {modulus}")
    if count < 0:
        raise InvalidArgument(f"count must not be negative, got {count}")

    try:
        values = [secrets.randbits(32) for _ in range(count)]
    except (NotImplementedError, OSError) as exc:
        # os.urandom has no usable source on this platform
        raise EntropyUnavailable("no cryptographic random source available") from exc

    logger.debug("drew %d values modulo %d", count, modulus)
    return [v % modulus for v in values]


# ── Password generation ────────────────────────────────────────────────────


def generate_password(options: GenerationOptions) -> str:
    """Generate a random password of exactly ``options.length`` characters.

    Characters are drawn independently from :func:`build_alphabet`, so
    repeats are allowed and no category is guaranteed to appear.

    Raises :class:`EmptyAlphabetError` if every character was excluded.
    """
    if options.length < 1:
        raise InvalidArgument("Password length must be at least 1")

    alphabet = build_alphabet(options)
    if not alphabet:
        raise EmptyAlphabetError(EMPTY_ALPHABET_MESSAGE)

    indices = random_indices(options.length, len(alphabet))
    return "".join(alphabet[i] for i in indices)


def generate_passphrase(word_count: int = 4) -> str:
    """Generate ``Word-Word-...-DDD`` from the built-in word list."""
    if word_count < 1:
        raise InvalidArgument("Passphrase needs at least 1 word")

    words = [WORDS[i].capitalize() for i in random_indices(word_count, len(WORDS))]
    number = random_indices(1, 900)[0] + 100

    return "-".join(words) + f"-{number}"


# ── Strength analysis ──────────────────────────────────────────────────────

_CLASS_PATTERNS = {
    "lowercase": re.compile(r"[a-z]"),
    "uppercase": re.compile(r"[A-Z]"),
    "digits": re.compile(r"[0-9]"),
    "symbols": re.compile(r"[^a-zA-Z0-9]"),
}

_CLASS_POINTS = {"lowercase": 10, "uppercase": 10, "digits": 10, "symbols": 15}

# (lower bound, label), highest first
_BANDS = ((70, "Strong"), (50, "Good"), (30, "Fair"), (0, "Weak"))


def _char_classes(password: str) -> dict[str, bool]:
    return {name: bool(rx.search(password)) for name, rx in _CLASS_PATTERNS.items()}


def score_strength(password: str) -> int:
    """Return a heuristic strength score from 0 to 100.

    Length contributes 4 points per character up to 40.  Each character
    class present adds its own points (10 for lowercase, uppercase and
    digits, 15 for anything else) plus a 5 point mixing bonus.
    """
    classes = _char_classes(password)

    score = min(len(password) * 4, 40)
    score += sum(_CLASS_POINTS[name] for name, present in classes.items() if present)
    score += 5 * sum(classes.values())

    return max(0, min(score, 100))


def strength_label(score: int) -> str:
    """Map a score to Weak / Fair / Good / Strong."""
    for bound, label in _BANDS:
        if score >= bound:
            return label
    return "Weak"


def analyse_strength(password: str) -> dict:
    """Score *password* and return a report.

    Returns a dict with keys:
        length       -- int
        char_classes -- dict[str, bool]  (lowercase, uppercase, digits, symbols)
        score        -- int 0-100
        label        -- str
    """
    score = score_strength(password)
    return {
        "length": len(password),
        "char_classes": _char_classes(password),
        "score": score,
        "label": strength_label(score),
    }


# ── Presets ────────────────────────────────────────────────────────────────

PRESETS = {
    "pin": GenerationOptions(
        length=4, uppercase=False, lowercase=False, numbers=True, symbols=False,
    ),
    "simple": GenerationOptions(
        length=12, uppercase=True, lowercase=True, numbers=True, symbols=False,
    ),
    "strong": GenerationOptions(length=16),
    "ultra": GenerationOptions(length=24),
    "passphrase": PassphraseOptions(word_count=4),
}


def resolve_preset(name: str) -> GenerationOptions | PassphraseOptions | None:
    """Look up a preset by name; unknown names give ``None``."""
    preset = PRESETS.get(name)
    if preset is None:
        logger.debug("unknown preset %r ignored", name)
    return preset
