"""Live Data Dashboard: crypto prices and city weather as animated cards plus a chart."""

__version__ = "0.1.0"
