"""VC Scout: company enrichment backend for venture research."""

__version__ = "0.1.0"
