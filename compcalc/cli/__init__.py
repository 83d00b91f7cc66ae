"""Comp Calc command-line interface."""
