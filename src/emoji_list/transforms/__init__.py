"""Parsers and extractors for the Unicode emoji tables and CLDR annotations."""
