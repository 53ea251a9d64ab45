"""
Single source of truth for the package version and the upstream data releases.

Default source URLs are derived from the Unicode and CLDR release numbers
here. Bump UNICODE_VERSION / CLDR_VERSION together when a new emoji release
ships, then regenerate the list.
"""

import re
from typing import Dict

__version__ = "1.0.0"

UNICODE_VERSION = "16.0.0"
CLDR_VERSION = "46"

EMOJI_DATA_URL_TEMPLATE = "https://www.unicode.org/Public/{unicode}/ucd/emoji/emoji-data.txt"
EMOJI_SEQUENCES_URL_TEMPLATE = "https://www.unicode.org/Public/emoji/{emoji}/emoji-sequences.txt"
EMOJI_ZWJ_SEQUENCES_URL_TEMPLATE = "https://www.unicode.org/Public/emoji/{emoji}/emoji-zwj-sequences.txt"
CLDR_URL_TEMPLATE = "https://unicode.org/Public/cldr/{cldr}/cldr-common-{cldr}.0.zip"


def get_version() -> str:
    """Get current package version."""
    return __version__


def emoji_version(unicode_version: str) -> str:
    """
    Emoji data directories are named by major.minor only.

    Args:
        unicode_version: Full Unicode version, e.g. "16.0.0"

    Returns:
        The emoji directory version, e.g. "16.0"
    """
    return ".".join(unicode_version.split(".")[:2])


def default_urls(unicode_version: str = UNICODE_VERSION, cldr_version: str = CLDR_VERSION) -> Dict[str, str]:
    """
    Build the default source URLs for a Unicode/CLDR release pair.

    Args:
        unicode_version: Unicode version (X.Y.Z)
        cldr_version: CLDR major release number

    Returns:
        Dictionary with emoji_data, emoji_sequences, emoji_zwj_sequences and cldr URLs
    """
    emoji = emoji_version(unicode_version)
    return {
        'emoji_data': EMOJI_DATA_URL_TEMPLATE.format(unicode=unicode_version),
        'emoji_sequences': EMOJI_SEQUENCES_URL_TEMPLATE.format(emoji=emoji),
        'emoji_zwj_sequences': EMOJI_ZWJ_SEQUENCES_URL_TEMPLATE.format(emoji=emoji),
        'cldr': CLDR_URL_TEMPLATE.format(cldr=cldr_version),
    }


def validate_version_format(version: str) -> bool:
    """
    Validate version follows semantic versioning format (X.Y.Z).

    Args:
        version: Version string to validate

    Returns:
        True if valid, False otherwise
    """
    return bool(re.match(r'^\d+\.\d+\.\d+$', version))


def validate_cldr_version_format(version: str) -> bool:
    """CLDR releases are numbered by a single major number."""
    return bool(re.match(r'^\d+$', version))
