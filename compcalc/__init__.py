"""Comp Calc - South Carolina workers' compensation calculators."""

__version__ = "0.3.0"
