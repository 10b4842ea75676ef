"""Scaffolding commands, configuration loading and admin helpers for gojang projects."""

__version__ = "0.1.0"