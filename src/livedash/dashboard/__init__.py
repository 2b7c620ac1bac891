"""Dashboard controller, card/chart builders and render sinks.

StreamlitSink lives in livedash.dashboard.streamlit_sink and is imported
explicitly by the app so the rest of the package does not pull in Streamlit.
"""
from livedash.dashboard.animation import ValueAnimator
from livedash.dashboard.controller import ERROR_MESSAGES, DashboardController, RefreshResult
from livedash.dashboard.sink import MemorySink, RenderSink

__all__ = [
    "DashboardController",
    "RefreshResult",
    "ERROR_MESSAGES",
    "ValueAnimator",
    "RenderSink",
    "MemorySink",
]
