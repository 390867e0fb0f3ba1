"""Structural node highlighter: select one element, propagate to every structurally similar one."""

__version__ = "0.1.0"
