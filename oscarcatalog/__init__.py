"""OSCAR class schedule scraper: fetch a term's "Sections Found" page and parse it into course records."""

from oscarcatalog.parse import parse_catalog

__all__ = ["parse_catalog"]
