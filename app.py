# app.py — Currency Converter (open.er-api.com rates, one fetch per session)
import streamlit as st

from converter.api.exchange_rates import ExchangeRateClient
from converter.config import get_settings
from converter.engine import cross_rate
from converter.logs import configure_logging
from converter.rates import RateStore
from converter.utils import ordered_codes, rates_frame
from converter.widget import ConverterState

settings = get_settings()
configure_logging(settings.log_level)

# ================ Page config & header ================
st.set_page_config(page_title="Currency Converter", page_icon="💱", layout="centered")

# =========================================================
# Kill switch (set FETCH_ENABLED to "0" in secrets or env)
# =========================================================
if not settings.fetch_enabled:
    st.warning("⏸️ Rate fetching is disabled by server setting.")
    st.stop()

st.title("💱 Currency Converter")
st.caption("Get up-to-date foreign exchange rates.")

# ========================= Init state =========================
def ensure_session_state():
    # per browser session; nothing is shared between sessions
    if "rate_store" not in st.session_state:
        client = ExchangeRateClient(url=settings.rates_url, timeout=settings.fetch_timeout)
        st.session_state.rate_store = RateStore(client)
    if "conv" not in st.session_state:
        st.session_state.conv = ConverterState(
            source=settings.default_source,
            target=settings.default_target,
        )

ensure_session_state()
store: RateStore = st.session_state.rate_store
conv: ConverterState = st.session_state.conv

# ================= Sidebar =================
with st.sidebar:
    st.header("Rates")
    if st.button("🔄 Refresh rates", help="Fetch a fresh rate table from the API."):
        with st.spinner("Refreshing currency rates..."):
            store.refresh()

# ================= Loading / Error =================
if store.state.is_pending:
    with st.spinner("Loading currency rates..."):
        store.fetch_rates()

if store.state.is_failed:
    st.error(f"Could not load currency rates. {store.state.reason}")
    if st.button("Try again"):
        store.refresh()
        st.rerun()
    st.stop()

table = store.table
codes = ordered_codes(table.codes())
conv.ensure_codes(codes)
# table may have been replaced by a refresh
conv.recompute(table)

# ======================= Callbacks =======================
def _on_source():
    conv.set_source(st.session_state.src_sel, store.table)

def _on_target():
    conv.set_target(st.session_state.tgt_sel, store.table)

def _on_swap():
    conv.swap(store.table)

def _on_amount():
    if not conv.set_amount(st.session_state.amount_input, store.table):
        st.session_state.amount_input = conv.amount
        st.toast("Only digits and a single decimal point are allowed.", icon="⚠️")

def _on_convert():
    conv.recompute(store.table)

# widget values follow ConverterState
st.session_state.src_sel = conv.source
st.session_state.tgt_sel = conv.target
st.session_state.amount_input = conv.amount

# ====================== Currency selection ======================
c_from, c_swap, c_to = st.columns([0.45, 0.1, 0.45], vertical_alignment="bottom")
with c_from:
    st.selectbox("From", options=codes, key="src_sel", on_change=_on_source)
with c_swap:
    st.button("⇄", on_click=_on_swap, help="Swap currencies", use_container_width=True)
with c_to:
    st.selectbox("To", options=codes, key="tgt_sel", on_change=_on_target)

# ====================== Amount / result ======================
c_in, c_out = st.columns(2)
with c_in:
    st.text_input(
        f"Amount ({conv.source})",
        key="amount_input",
        placeholder="Enter amount",
        on_change=_on_amount,
    )
with c_out:
    st.text_input(f"Converted Amount ({conv.target})", value=conv.result, disabled=True)

st.button("Convert Now", type="primary", on_click=_on_convert, use_container_width=True)

rate = cross_rate(conv.source, conv.target, table)
if rate is not None:
    st.caption(f"1 {conv.source} = {rate:.4f} {conv.target}")
st.caption(f"Base {store.base} • Last update: {store.updated_at or 'n/a'}")

# ====================== All rates ======================
with st.expander(f"All rates for {conv.source}"):
    st.dataframe(rates_frame(table, conv.source, conv.amount), use_container_width=True, hide_index=True)
