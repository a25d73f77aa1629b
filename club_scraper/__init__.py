"""Crawl the hollandsevelden.nl club directory into structured records."""

__version__ = "0.1.0"
