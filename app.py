"""PassGen -- Streamlit web interface."""

import html

import streamlit as st

from passgen import PRESETS
from passgen.state import (
    AppState,
    apply_preset,
    bulk_generate,
    clear_history,
    generate,
    update_options,
)

# ── Lucide icons (from lucide.dev) ────────────────────────────────────────

_LUCIDE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{s}" height="{s}" '
    'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round">{paths}</svg>'
)

ICON_KEY_ROUND = _LUCIDE.format(s=32, paths=(
    '<path d="M2.586 17.414A2 2 0 0 0 2 18.828V21a1 1 0 0 0 1 1h3'
    'a1 1 0 0 0 1-1v-1a1 1 0 0 1 1-1h1a1 1 0 0 0 1-1v-1'
    'a1 1 0 0 1 1-1h.172a2 2 0 0 0 1.414-.586l.814-.814'
    'a6.5 6.5 0 1 0-4-4z"/>'
    '<circle cx="16.5" cy="7.5" r=".5" fill="currentColor"/>'
))

ICON_HISTORY = _LUCIDE.format(s=20, paths=(
    '<path d="M3 12a9 9 0 1 0 9-9 9.75 9.75 0 0 0-6.74 2.74L3 8"/>'
    '<path d="M3 3v5h5"/><path d="M12 7v5l4 2"/>'
))

LABEL_COLORS = {
    "Weak": "#d32f2f",
    "Fair": "#f57c00",
    "Good": "#fbc02d",
    "Strong": "#388e3c",
}

# ── Page config ───────────────────────────────────────────────────────────

st.set_page_config(
    page_title="PassGen",
    page_icon="\U0001f511",
    layout="centered",
)

if "app" not in st.session_state:
    st.session_state.app = generate(AppState())


def _run(handler, *args, **kwargs) -> None:
    st.session_state.app = handler(st.session_state.app, *args, **kwargs)


# ── Header ────────────────────────────────────────────────────────────────

st.markdown(
    f'<h1 style="display:flex;align-items:center;gap:10px">'
    f'{ICON_KEY_ROUND} PassGen</h1>',
    unsafe_allow_html=True,
)
st.caption(
    "Passwords are generated locally from your operating system's "
    "cryptographic random source."
)

# ── Presets ───────────────────────────────────────────────────────────────

for col, name in zip(st.columns(len(PRESETS)), PRESETS):
    with col:
        st.button(
            name.capitalize(), key=f"preset-{name}", use_container_width=True,
            on_click=_run, args=(apply_preset, name),
        )

# ── Options ───────────────────────────────────────────────────────────────

opts = st.session_state.app.options
col1, col2 = st.columns(2)
with col1:
    length = st.slider("Length", 4, 64, opts.length)
    exclude_ambiguous = st.checkbox(
        "Exclude ambiguous (l 1 I O 0)", value=opts.exclude_ambiguous,
    )
    exclude_chars = st.text_input("Exclude characters", value=opts.exclude_chars)
with col2:
    uppercase = st.checkbox("Uppercase", value=opts.uppercase)
    lowercase = st.checkbox("Lowercase", value=opts.lowercase)
    numbers = st.checkbox("Numbers", value=opts.numbers)
    symbols = st.checkbox("Symbols", value=opts.symbols)

_run(
    update_options,
    length=length,
    uppercase=uppercase,
    lowercase=lowercase,
    numbers=numbers,
    symbols=symbols,
    exclude_ambiguous=exclude_ambiguous,
    exclude_chars=exclude_chars,
)

st.button("Generate password", type="primary", on_click=_run, args=(generate,))

# ── Result ────────────────────────────────────────────────────────────────

app = st.session_state.app
if app.message:
    st.warning(app.message, icon="⚠️")
elif app.output:
    st.code(app.output, language=None)
    st.markdown(
        f"**Strength:** <span style='color:{LABEL_COLORS[app.label]}'>"
        f"{html.escape(app.label)}</span> &nbsp;·&nbsp; {app.score}/100",
        unsafe_allow_html=True,
    )
    st.progress(app.score / 100)

# ── Bulk ──────────────────────────────────────────────────────────────────

with st.expander("Bulk generate"):
    count = st.number_input("How many", min_value=1, max_value=50, value=5)
    st.button("Generate list", on_click=_run, args=(bulk_generate, int(count)))
    for pwd in app.bulk:
        st.code(pwd, language=None)

# ── History ───────────────────────────────────────────────────────────────

st.markdown(
    f'<p style="display:flex;align-items:center;gap:6px">'
    f'{ICON_HISTORY} <strong>History</strong></p>',
    unsafe_allow_html=True,
)
if app.history:
    # Generated strings may contain <, > and & from the symbol set.
    items = "".join(
        f"<li><code>{html.escape(pwd)}</code></li>" for pwd in app.history
    )
    st.markdown(f"<ol>{items}</ol>", unsafe_allow_html=True)
    st.button("Clear history", on_click=_run, args=(clear_history,))
else:
    st.caption("Generated passwords will appear here")
