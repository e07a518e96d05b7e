"""PassGen command-line interface.

Usage examples:
    python -m passgen generate -n 20 --no-symbols
    python -m passgen passphrase -w 5
    python -m passgen preset strong
    python -m passgen bulk -c 10 -x "{}[]"
    python -m passgen score 'Tr0ub4dor&3'
    python -m passgen history --clear
"""

import argparse
import logging
import sys
from pathlib import Path

from passgen import GenerationOptions, analyse_strength
from passgen.history import History
from passgen.state import (
    AppState,
    apply_preset,
    bulk_generate,
    clear_history,
    generate,
    generate_phrase,
)

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_FILE = Path.home() / ".passgen" / "history.json"


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _add_generation_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-n", "--length", type=_positive_int, default=16,
        help="Password length (default: 16)",
    )
    p.add_argument("--no-uppercase", action="store_true")
    p.add_argument("--no-lowercase", action="store_true")
    p.add_argument("--no-numbers", action="store_true")
    p.add_argument("--no-symbols", action="store_true")
    p.add_argument(
        "-a", "--exclude-ambiguous", action="store_true",
        help="Leave out look-alike characters (l 1 I O 0)",
    )
    p.add_argument(
        "-x", "--exclude", default="", metavar="CHARS",
        help="Characters never to use",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="passgen",
        description="Generate secure passwords and passphrases.",
    )
    parser.add_argument(
        "--history-file", type=Path, default=DEFAULT_HISTORY_FILE,
        help=f"Where generated passwords are remembered (default: {DEFAULT_HISTORY_FILE})",
    )
    parser.add_argument(
        "--no-history", action="store_true",
        help="Do not read or write the history file",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command")

    # ── generate ───────────────────────────────────────────────────────
    gen_p = sub.add_parser("generate", help="Generate a password")
    _add_generation_options(gen_p)

    # ── passphrase ─────────────────────────────────────────────────────
    phrase_p = sub.add_parser("passphrase", help="Generate a passphrase")
    phrase_p.add_argument(
        "-w", "--words", type=_positive_int, default=4,
        help="Number of words (default: 4)",
    )

    # ── preset ─────────────────────────────────────────────────────────
    preset_p = sub.add_parser(
        "preset", help="Generate with a preset (pin, simple, strong, ultra, passphrase)",
    )
    preset_p.add_argument("name")
    preset_p.add_argument("-a", "--exclude-ambiguous", action="store_true")
    preset_p.add_argument("-x", "--exclude", default="", metavar="CHARS")

    # ── bulk ───────────────────────────────────────────────────────────
    bulk_p = sub.add_parser("bulk", help="Generate several passwords at once")
    _add_generation_options(bulk_p)
    bulk_p.add_argument(
        "-c", "--count", type=int, default=5,
        help="Number of passwords (default: 5)",
    )

    # ── score ──────────────────────────────────────────────────────────
    score_p = sub.add_parser("score", help="Score password strength")
    score_p.add_argument("passwords", nargs="+")

    # ── history ────────────────────────────────────────────────────────
    hist_p = sub.add_parser("history", help="Show recently generated passwords")
    hist_p.add_argument("--clear", action="store_true", help="Forget all entries")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "score":
        return _cmd_score(args)
    if args.command in ("generate", "passphrase", "preset", "bulk", "history"):
        try:
            state = AppState(history=_load_history(args))
        except (OSError, ValueError) as exc:
            print(f"Error: cannot read history: {exc}", file=sys.stderr)
            return 1
        return _dispatch(args, state)

    parser.print_help()
    return 0


def _load_history(args: argparse.Namespace) -> History:
    if args.no_history:
        return History()
    return History.load(args.history_file)


def _save_history(args: argparse.Namespace, before: AppState, after: AppState) -> None:
    if args.no_history or after.history == before.history:
        return
    after.history.save(args.history_file)


def _options_from(args: argparse.Namespace) -> GenerationOptions:
    return GenerationOptions(
        length=args.length,
        uppercase=not args.no_uppercase,
        lowercase=not args.no_lowercase,
        numbers=not args.no_numbers,
        symbols=not args.no_symbols,
        exclude_ambiguous=args.exclude_ambiguous,
        exclude_chars=args.exclude,
    )


def _dispatch(args: argparse.Namespace, state: AppState) -> int:
    if args.command == "generate":
        new = generate(AppState(options=_options_from(args), history=state.history))
    elif args.command == "passphrase":
        new = generate_phrase(state, args.words)
    elif args.command == "preset":
        state = AppState(
            options=GenerationOptions(
                exclude_ambiguous=args.exclude_ambiguous, exclude_chars=args.exclude,
            ),
            history=state.history,
        )
        new = apply_preset(state, args.name)
        if new is state:
            logger.warning("unknown preset %r, nothing generated", args.name)
            return 0
    elif args.command == "bulk":
        return _cmd_bulk(args, AppState(options=_options_from(args)))
    else:
        return _cmd_history(args, state)

    if new.message:
        print(f"Error: {new.message}", file=sys.stderr)
        return 1

    print(f"  {new.output}  ({new.label}, {new.score}/100)")
    try:
        _save_history(args, state, new)
    except (OSError, ValueError) as exc:
        print(f"Warning: history not saved: {exc}", file=sys.stderr)
    return 0


def _cmd_bulk(args: argparse.Namespace, state: AppState) -> int:
    new = bulk_generate(state, args.count)
    if new.message:
        print(f"Error: {new.message}", file=sys.stderr)
        return 1
    for pwd in new.bulk:
        print(f"  {pwd}")
    return 0


def _cmd_score(args: argparse.Namespace) -> int:
    for pwd in args.passwords:
        report = analyse_strength(pwd)
        filled = report["score"] // 10
        bar = "#" * filled + "-" * (10 - filled)
        print(f"  [{bar}] {report['score']:3d}/100 {report['label']:<6}  '{pwd}'")
    return 0


def _cmd_history(args: argparse.Namespace, state: AppState) -> int:
    if args.clear:
        new = clear_history(state)
        try:
            _save_history(args, state, new)
        except (OSError, ValueError) as exc:
            print(f"Error: cannot write history: {exc}", file=sys.stderr)
            return 1
        print(f"  Cleared {len(state.history)} entries")
        return 0

    if not state.history:
        print("  Generated passwords will appear here")
        return 0
    for i, pwd in enumerate(state.history, 1):
        print(f"  {i:2d}. {pwd}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
