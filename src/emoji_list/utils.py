"""Utility modules: config, logging, error taxonomy, presentation selectors."""
import os
import logging
import sys
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from emoji_list.version import (
    CLDR_VERSION,
    UNICODE_VERSION,
    default_urls,
    validate_cldr_version_format,
    validate_version_format,
)

# Load .env file for local development
load_dotenv()

logger = logging.getLogger(__name__)

PRESENTATION_SELECTOR = '\ufe0f'


# ============================================================================
# ERRORS
# ============================================================================

class EmojiListError(Exception):
    """Base class for every fatal condition of a generator run."""
    pass


class ConfigError(EmojiListError):
    """Raised when configuration is invalid or missing."""
    pass


class FetchError(EmojiListError):
    """Raised when a source file cannot be downloaded."""
    pass


class FormatError(EmojiListError):
    """Raised when a table line, XML document or collation rule is malformed."""
    pass


class MissingAnnotationError(EmojiListError):
    """Raised when an emoji in the built set has no CLDR annotation."""

    def __init__(self, emoji: str):
        self.emoji = emoji
        super().__init__(f"emoji {emoji!r} has no annotation")


class CacheError(EmojiListError):
    """Raised when a cache file cannot be created or written."""
    pass


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class EmojiListConfig:
    """Source locations for one generator run."""
    emoji_data_url: str
    emoji_sequences_url: str
    emoji_zwj_sequences_url: str
    cldr_url: str
    cache_dir: Optional[str] = None

    @classmethod
    def for_versions(cls, unicode_version: str = UNICODE_VERSION, cldr_version: str = CLDR_VERSION,
                     cache_dir: Optional[str] = None) -> 'EmojiListConfig':
        """Build a config pointing at the default URLs of a data release."""
        if not validate_version_format(unicode_version):
            raise ConfigError(f"Invalid Unicode version {unicode_version!r}, expected X.Y.Z")
        if not validate_cldr_version_format(cldr_version):
            raise ConfigError(f"Invalid CLDR version {cldr_version!r}, expected a release number")
        urls = default_urls(unicode_version, cldr_version)
        return cls(
            emoji_data_url=urls['emoji_data'],
            emoji_sequences_url=urls['emoji_sequences'],
            emoji_zwj_sequences_url=urls['emoji_zwj_sequences'],
            cldr_url=urls['cldr'],
            cache_dir=cache_dir,
        )

    def urls(self):
        return [self.emoji_data_url, self.emoji_sequences_url, self.emoji_zwj_sequences_url, self.cldr_url]


def validate_url(url: str) -> None:
    """A source URL must name a file, since the cache is keyed by basename."""
    parsed = urlparse(url)
    if not parsed.scheme or not os.path.basename(parsed.path):
        raise ConfigError(f"Source URL {url!r} does not name a file")


def load_config(unicode_version: Optional[str] = None, cldr_version: Optional[str] = None) -> EmojiListConfig:
    """
    Build the run configuration from environment variables.

    Unset or blank variables fall back to the default URLs of the release
    named by UNICODE_VERSION / CLDR_VERSION. Explicit URL variables win over
    release defaults.

    Args:
        unicode_version: Unicode release overriding the environment
        cldr_version: CLDR release overriding the environment

    Returns:
        Validated configuration

    Raises:
        ConfigError: If a version or URL is malformed
    """
    unicode_version = unicode_version or os.getenv('UNICODE_VERSION', '').strip() or UNICODE_VERSION
    cldr_version = cldr_version or os.getenv('CLDR_VERSION', '').strip() or CLDR_VERSION
    cache_dir = os.getenv('EMOJI_CACHE_DIR', '').strip() or None

    config = EmojiListConfig.for_versions(unicode_version, cldr_version, cache_dir)

    # Explicit URLs win over the release defaults
    overrides = {
        'emoji_data_url': 'EMOJI_DATA_URL',
        'emoji_sequences_url': 'EMOJI_SEQUENCES_URL',
        'emoji_zwj_sequences_url': 'EMOJI_ZWJ_SEQUENCES_URL',
        'cldr_url': 'CLDR_URL',
    }
    for field, env_var in overrides.items():
        value = os.getenv(env_var, '').strip()
        if value:
            setattr(config, field, value)

    for url in config.urls():
        validate_url(url)

    logger.debug(f"Configuration loaded: Unicode {unicode_version}, CLDR {cldr_version}")
    return config


# ============================================================================
# LOGGING
# ============================================================================

def setup_logging(level: str = "INFO", structured: bool = False) -> None:
    """Configure logging for the application. Logs go to stderr, the list goes to stdout."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    if structured:
        formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "name": "%(name)s", "level": "%(levelname)s", "message": "%(message)s"}',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger('urllib3').setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name."""
    return logging.getLogger(name)


# ============================================================================
# CONVERTERS
# ============================================================================

def remove_presentation_selector(emoji: str) -> str:
    """Strip every U+FE0F. CLDR stores all cp values without them."""
    return emoji.replace(PRESENTATION_SELECTOR, '')
