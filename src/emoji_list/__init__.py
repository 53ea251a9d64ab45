"""Sorted, annotated emoji list generator built from Unicode and CLDR data."""
from emoji_list.version import __version__

__all__ = ['__version__']
