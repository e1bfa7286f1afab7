"""Blind two-party secret comparison over a held-request rendezvous server."""

__version__ = "0.1.0"
