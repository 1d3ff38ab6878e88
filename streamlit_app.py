from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from mandi import MarketSession
from mandi.market import view_frame

SORT_LABELS = {
    "name": "Name",
    "price": "Price (high → low)",
    "demand": "Demand (high → low)",
    "supply": "Supply (high → low)",
}

st.set_page_config(
    page_title="Mandi Market · Live Prices",
    page_icon="🌾",
    layout="wide",
    initial_sidebar_state="collapsed",
)


def get_session() -> MarketSession:
    """One market feed per browser session, started on the default district."""
    if "market" not in st.session_state:
        session = MarketSession()
        session.select_region(session.selection.district)
        st.session_state["market"] = session
    return st.session_state["market"]


def _on_state_change() -> None:
    session = get_session()
    session.select_state(st.session_state["state"])
    st.session_state["district"] = session.selection.district


def _on_district_change() -> None:
    get_session().select_region(st.session_state["district"])


def create_market_chart(df: pd.DataFrame) -> go.Figure:
    fig = go.Figure()

    fig.add_trace(go.Bar(x=df["crop"], y=df["supply"], name="Supply", marker_color="#93c5fd"))
    fig.add_trace(go.Bar(x=df["crop"], y=df["demand"], name="Demand", marker_color="#fca5a5"))
    fig.add_trace(
        go.Scatter(
            x=df["crop"],
            y=df["price"],
            name="Price (₹)",
            mode="lines+markers",
            line=dict(color="#22c55e", width=2),
            marker=dict(size=6),
            yaxis="y2",
        )
    )

    fig.update_layout(
        height=320,
        barmode="group",
        margin=dict(l=40, r=40, t=30, b=40),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        yaxis=dict(title="Index", range=[0, 100], gridcolor="rgba(148,163,184,0.15)"),
        yaxis2=dict(title="Price (₹)", overlaying="y", side="right", showgrid=False),
    )
    return fig


session = get_session()
directory = session.directory
selection = session.selection

st.session_state.setdefault("country", selection.country)
st.session_state.setdefault("state", selection.state)
st.session_state.setdefault("district", selection.district)

st.markdown("### 🌾 Market Prices")

c1, c2, c3 = st.columns(3)
with c1:
    st.selectbox("Country", directory.countries(), key="country")
with c2:
    st.selectbox(
        "State",
        directory.states(selection.country),
        key="state",
        on_change=_on_state_change,
    )
with c3:
    st.selectbox(
        "District",
        directory.districts(selection.country, selection.state),
        key="district",
        on_change=_on_district_change,
    )

s1, s2 = st.columns([2, 1])
with s1:
    st.text_input("Search crops", key="search", placeholder="e.g. tomato")
with s2:
    st.selectbox("Sort by", list(SORT_LABELS), format_func=SORT_LABELS.get, key="sort")


@st.fragment(run_every=1)
def live_market() -> None:
    market = get_session()
    market.scheduler.run_pending()

    view = market.get_view(st.session_state.get("search", ""), st.session_state.get("sort", "name"))
    df = view_frame(view)

    st.plotly_chart(create_market_chart(df), use_container_width=True, key="market_chart")

    st.markdown("#### Live trends  :red[● LIVE]")
    st.caption(f"{market.selection.district} · tick {market.ticks}")
    if df.empty:
        st.info("No crops found.")
        return

    for row in view:
        trend = "📈 High demand" if row.demand > row.supply else "📉 Volatility"
        badge = "  :green-background[BEST]" if row.favorable else ""
        left, right = st.columns([3, 1])
        left.markdown(f"**{row.name}**{badge}  \n{trend}")
        right.metric("Price", f"₹{row.price:,}", label_visibility="collapsed")


live_market()
