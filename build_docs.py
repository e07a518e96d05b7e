"""Build docs/index.html for GitHub Pages (PyScript / Pyodide).

Extracts the core, history and state modules from the passgen package via
the ast module, wraps them in a PyScript-powered HTML page, and writes to
docs/.  History is kept in the browser's localStorage.

Usage:
    python build_docs.py
"""

import ast
from pathlib import Path

ROOT = Path(__file__).parent
SOURCES = [
    ROOT / "passgen" / "__init__.py",
    ROOT / "passgen" / "history.py",
    ROOT / "passgen" / "state.py",
]
OUT = ROOT / "docs" / "index.html"

PYSCRIPT_VERSION = "2024.9.2"


# ── AST extraction ────────────────────────────────────────────────────────


def _extract(source: str, tree: ast.Module) -> str:
    """Return every top-level statement except imports and the docstring.

    Decorators are kept with the class or function they belong to.
    """
    lines = source.splitlines()
    chunks = []
    for i, node in enumerate(tree.body):
        if isinstance(node, (ast.Import, ast.ImportFrom)):
            continue
        if i == 0 and isinstance(node, ast.Expr) and isinstance(node.value, ast.Constant):
            continue
        decorators = getattr(node, "decorator_list", [])
        start = min([node.lineno] + [d.lineno for d in decorators])
        chunks.append("\n".join(lines[start - 1 : node.end_lineno]))
    return "\n\n".join(chunks)


# ── Python code that runs inside PyScript ─────────────────────────────────

_PY_IMPORTS = """\
import html
import json
import logging
import re
import secrets
import string
from dataclasses import dataclass, field, replace
from pathlib import Path

from pyscript import when, document, window
"""

_PY_BROWSER = r'''
# ── Browser shell ──

def _load_state():
    saved = window.localStorage.getItem(HISTORY_KEY)
    history = History.from_json(saved) if saved else History()
    return AppState(history=history)


state = _load_state()


def _read_options():
    return dict(
        length=int(document.querySelector("#length").value),
        uppercase=document.querySelector("#uppercase").checked,
        lowercase=document.querySelector("#lowercase").checked,
        numbers=document.querySelector("#numbers").checked,
        symbols=document.querySelector("#symbols").checked,
        exclude_ambiguous=document.querySelector("#exclude-ambiguous").checked,
        exclude_chars=document.querySelector("#exclude-chars").value,
    )


def _write_options(options):
    document.querySelector("#length").value = options.length
    document.querySelector("#length-value").textContent = str(options.length)
    for name in CATEGORIES:
        document.querySelector(f"#{name}").checked = getattr(options, name)


def _render():
    out = document.querySelector("#password-output")
    fill = document.querySelector("#strength-fill")
    text = document.querySelector("#strength-text")

    if state.message:
        out.value = state.message
        fill.className = "strength-fill"
        text.textContent = ""
    else:
        out.value = state.output
        fill.className = f"strength-fill {state.label.lower()}"
        text.textContent = state.label

    window.localStorage.setItem(HISTORY_KEY, state.history.to_json())
    items = document.querySelector("#history-list")
    if not state.history:
        items.innerHTML = '<p class="empty-state">Generated passwords will appear here</p>'
    else:
        items.innerHTML = "".join(
            f'<div class="history-item"><span class="password">{html.escape(p)}</span></div>'
            for p in state.history
        )


def _apply(handler, *args):
    global state
    state = handler(state, *args)
    _render()


@when("click", "#generate-btn")
@when("click", "#refresh-btn")
@when("change", "#length")
@when("change", ".option")
@when("input", "#exclude-chars")
def on_generate(event):
    global state
    state = update_options(state, **_read_options())
    _apply(generate)


@when("input", "#length")
def on_length(event):
    document.querySelector("#length-value").textContent = event.target.value


@when("click", ".preset-btn")
def on_preset(event):
    global state
    state = update_options(state, **_read_options())
    _apply(apply_preset, event.target.dataset.preset)
    _write_options(state.options)


@when("click", "#bulk-generate")
def on_bulk(event):
    global state
    raw = document.querySelector("#bulk-count").value
    count = int(raw) if raw.isdigit() else None
    state = bulk_generate(update_options(state, **_read_options()), count)
    box = document.querySelector("#bulk-output")
    if state.message:
        box.innerHTML = f'<p class="empty-state">{html.escape(state.message)}</p>'
    else:
        box.innerHTML = "".join(
            f'<div class="bulk-item">{html.escape(p)}</div>' for p in state.bulk
        )


@when("click", "#copy-btn")
async def on_copy(event):
    await window.navigator.clipboard.writeText(
        document.querySelector("#password-output").value
    )


@when("click", "#clear-history")
def on_clear(event):
    _apply(clear_history)


document.querySelector("#loading").style.display = "none"
_write_options(state.options)
on_generate(None)
'''


# ── HTML template ─────────────────────────────────────────────────────────
# Uses __PYSCRIPT_VERSION__ and __PYSCRIPT_CODE__ as placeholders
# (no f-strings or .format to avoid escaping CSS braces).

HTML_TEMPLATE = r'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>PassGen</title>
    <link rel="stylesheet" href="https://pyscript.net/releases/__PYSCRIPT_VERSION__/core.css">
    <script type="module" src="https://pyscript.net/releases/__PYSCRIPT_VERSION__/core.js"></script>
    <style>
        :root { --bg: #0f1115; --panel: #181b22; --muted: #7a7f8c; --accent: #4f8cff; }
        * { box-sizing: border-box; }
        body {
            margin: 0; padding: 2rem 1rem;
            background: var(--bg); color: #eee;
            font-family: -apple-system, 'Segoe UI', sans-serif;
            display: flex; justify-content: center;
        }
        main { width: 100%; max-width: 560px; }
        section { background: var(--panel); border-radius: 12px; padding: 1.25rem; margin-bottom: 1rem; }
        h1 { font-size: 1.5rem; margin: 0 0 1rem; }
        h2 { font-size: 0.8rem; text-transform: uppercase; letter-spacing: 2px; color: var(--muted); margin: 0 0 .75rem; }
        .output-row { display: flex; gap: .5rem; }
        #password-output {
            flex: 1; padding: .7rem; font: 1rem monospace;
            background: #0b0d11; color: #fff; border: 1px solid #2a2e38; border-radius: 8px;
        }
        button { background: #2a2e38; color: #eee; border: none; border-radius: 8px; padding: .6rem .9rem; cursor: pointer; }
        button.primary { background: var(--accent); width: 100%; margin-top: .75rem; }
        .strength { height: 6px; background: #2a2e38; border-radius: 3px; margin-top: .75rem; overflow: hidden; }
        .strength-fill { height: 100%; width: 0; transition: width .3s; }
        .strength-fill.weak { width: 25%; background: #e5484d; }
        .strength-fill.fair { width: 50%; background: #f5a524; }
        .strength-fill.good { width: 75%; background: #e5d124; }
        .strength-fill.strong { width: 100%; background: #30a46c; }
        #strength-text { font-size: .85rem; color: var(--muted); }
        .presets { display: flex; flex-wrap: wrap; gap: .5rem; }
        label { display: block; margin: .35rem 0; }
        input[type=text], input[type=number] { background: #0b0d11; color: #eee; border: 1px solid #2a2e38; border-radius: 6px; padding: .4rem; }
        .history-item, .bulk-item { font-family: monospace; padding: .35rem 0; border-bottom: 1px solid #22252d; word-break: break-all; }
        .empty-state { color: var(--muted); font-size: .85rem; }
        #loading { position: fixed; inset: 0; background: var(--bg); display: flex; align-items: center; justify-content: center; color: var(--muted); }
    </style>
</head>
<body>
    <div id="loading">Loading Python&hellip;</div>
    <main>
        <h1>PassGen</h1>

        <section>
            <div class="output-row">
                <input id="password-output" type="text" readonly>
                <button id="copy-btn" title="Copy">Copy</button>
                <button id="refresh-btn" title="New password">&#8635;</button>
            </div>
            <div class="strength"><div id="strength-fill" class="strength-fill"></div></div>
            <span id="strength-text"></span>
        </section>

        <section>
            <h2>Presets</h2>
            <div class="presets">
                <button class="preset-btn" data-preset="pin">PIN</button>
                <button class="preset-btn" data-preset="simple">Simple</button>
                <button class="preset-btn" data-preset="strong">Strong</button>
                <button class="preset-btn" data-preset="ultra">Ultra</button>
                <button class="preset-btn" data-preset="passphrase">Passphrase</button>
            </div>
        </section>

        <section>
            <h2>Options</h2>
            <label>Length: <span id="length-value">16</span>
                <input id="length" type="range" min="4" max="64" value="16">
            </label>
            <label><input id="uppercase" class="option" type="checkbox" checked> Uppercase</label>
            <label><input id="lowercase" class="option" type="checkbox" checked> Lowercase</label>
            <label><input id="numbers" class="option" type="checkbox" checked> Numbers</label>
            <label><input id="symbols" class="option" type="checkbox" checked> Symbols</label>
            <label><input id="exclude-ambiguous" class="option" type="checkbox"> Exclude ambiguous (l 1 I O 0)</label>
            <label>Exclude characters <input id="exclude-chars" type="text"></label>
            <button id="generate-btn" class="primary">Generate</button>
        </section>

        <section>
            <h2>Bulk</h2>
            <input id="bulk-count" type="number" min="1" max="50" value="5">
            <button id="bulk-generate">Generate list</button>
            <div id="bulk-output"></div>
        </section>

        <section>
            <h2>History</h2>
            <div id="history-list"></div>
            <button id="clear-history">Clear</button>
        </section>
    </main>

    <!-- Python logic via PyScript -->
    <script type="py">
__PYSCRIPT_CODE__
    </script>
</body>
</html>
'''


# ── Build ──────────────────────────────────────────────────────────────────


def build_html() -> str:
    parts = []
    for path in SOURCES:
        source = path.read_text(encoding="utf-8")
        parts.append(
            f"# ── Extracted from passgen/{path.name} ──\n\n"
            + _extract(source, ast.parse(source))
        )

    py_code = _PY_IMPORTS + "\n\n" + "\n\n\n".join(parts) + "\n" + _PY_BROWSER

    return (
        HTML_TEMPLATE
        .replace("__PYSCRIPT_VERSION__", PYSCRIPT_VERSION)
        .replace("__PYSCRIPT_CODE__", py_code)
    )


def build(out: Path = OUT) -> None:
    html = build_html()
    out.parent.mkdir(exist_ok=True)
    out.write_text(html, encoding="utf-8")
    print(f"Built {out}  ({len(html):,} bytes)")


if __name__ == "__main__":
    build()
