"""Retirement savings projections and drawdown simulations."""

__version__ = "0.1.0"
