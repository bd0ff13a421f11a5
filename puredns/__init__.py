"""Subdomain resolution helpers and DNS wildcard filtering."""

__version__ = "2.0.0"