#!/usr/bin/env python3
"""
Live Data Dashboard - crypto prices and city weather

A Streamlit page with a view selector, animated metric cards and one chart.
The selected view refreshes automatically every minute.

Usage:
    streamlit run apps/live_dashboard.py
"""

import asyncio
import logging

import streamlit as st

from livedash.common.config import get_config
from livedash.dashboard.controller import DashboardController
from livedash.dashboard.streamlit_sink import StreamlitSink
from livedash.models import ViewMode

log = logging.getLogger("livedash")

VIEW_LABELS = {
    ViewMode.CRYPTO: "Crypto prices",
    ViewMode.WEATHER: "City weather",
}


# =============================================================================
# Page Configuration
# =============================================================================

st.set_page_config(
    page_title="Live Data Dashboard",
    layout="wide",
    initial_sidebar_state="expanded",
)


def render_sidebar(default_view: ViewMode) -> ViewMode:
    """Render the view selector and return the chosen mode."""
    st.sidebar.header("Controls")

    options = list(ViewMode)
    mode = st.sidebar.selectbox(
        "Data source",
        options=options,
        index=options.index(default_view),
        format_func=lambda m: VIEW_LABELS[m],
        help="Switching clears the cards and chart and loads the new data",
    )

    interval = get_config().get_refresh_interval()
    st.sidebar.caption(f"Auto refresh every {interval:g}s")
    return mode


def main():
    """Main dashboard application."""
    if not log.handlers:
        logging.basicConfig(
            level=logging.INFO, format="%(asctime)s [%(levelname)-7s] %(message)s"
        )

    config = get_config()
    for problem in config.validate():
        log.warning(f"Config: {problem}")

    mode = render_sidebar(ViewMode.parse(config.get_default_view()))

    st.title("Live Data Dashboard")

    controller = DashboardController(StreamlitSink(), config=config, mode=mode)

    # Blocks for the life of this script run; a widget change makes Streamlit
    # stop the run and start a new one with the new selection.
    asyncio.run(controller.run())


if __name__ == "__main__":
    main()
