"""Unit tests for utility functions."""
import logging
import os
import sys
import pytest
from unittest.mock import patch

from emoji_list.utils import (
    CacheError,
    ConfigError,
    EmojiListConfig,
    EmojiListError,
    FetchError,
    FormatError,
    MissingAnnotationError,
    load_config,
    setup_logging,
    get_logger,
    validate_url,
)


class TestLoadConfig:
    """Tests for configuration loading."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        """Without environment variables the default release URLs are used."""
        config = load_config()
        assert config.emoji_data_url == 'https://www.unicode.org/Public/16.0.0/ucd/emoji/emoji-data.txt'
        assert config.emoji_sequences_url == 'https://www.unicode.org/Public/emoji/16.0/emoji-sequences.txt'
        assert config.emoji_zwj_sequences_url == 'https://www.unicode.org/Public/emoji/16.0/emoji-zwj-sequences.txt'
        assert config.cldr_url == 'https://unicode.org/Public/cldr/46/cldr-common-46.0.zip'
        assert config.cache_dir is None

    @patch.dict(os.environ, {
        'EMOJI_DATA_URL': 'https://mirror.example/emoji-data.txt',
        'EMOJI_CACHE_DIR': '/var/cache/emoji',
    }, clear=True)
    def test_environment_overrides(self):
        """URL and cache variables override the defaults."""
        config = load_config()
        assert config.emoji_data_url == 'https://mirror.example/emoji-data.txt'
        assert config.cache_dir == '/var/cache/emoji'
        assert config.cldr_url.endswith('cldr-common-46.0.zip')

    @patch.dict(os.environ, {'UNICODE_VERSION': '15.1.0', 'CLDR_VERSION': '45'}, clear=True)
    def test_version_variables(self):
        """Version variables select another data release."""
        config = load_config()
        assert '/15.1.0/' in config.emoji_data_url
        assert config.cldr_url == 'https://unicode.org/Public/cldr/45/cldr-common-45.0.zip'

    @patch.dict(os.environ, {'UNICODE_VERSION': '15.1.0'}, clear=True)
    def test_explicit_versions_win(self):
        """Arguments override version variables."""
        config = load_config(unicode_version='16.0.0')
        assert '/16.0.0/' in config.emoji_data_url

    @patch.dict(os.environ, {'EMOJI_CACHE_DIR': '   ', 'CLDR_URL': ''}, clear=True)
    def test_blank_treated_as_missing(self):
        """Empty/whitespace-only values fall back to defaults."""
        config = load_config()
        assert config.cache_dir is None
        assert config.cldr_url.endswith('.zip')

    @patch.dict(os.environ, {'UNICODE_VERSION': '16'}, clear=True)
    def test_invalid_unicode_version(self):
        """A malformed Unicode version raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            load_config()
        assert '16' in str(exc_info.value)

    @patch.dict(os.environ, {'CLDR_VERSION': '46.0'}, clear=True)
    def test_invalid_cldr_version(self):
        """A malformed CLDR version raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config()

    @patch.dict(os.environ, {'CLDR_URL': 'https://unicode.org/Public/cldr/46/'}, clear=True)
    def test_url_without_filename(self):
        """A URL that names no file raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config()


class TestValidateUrl:
    """Tests for validate_url."""

    def test_valid(self):
        validate_url('https://unicode.org/Public/cldr/46/core.zip')

    def test_no_scheme(self):
        with pytest.raises(ConfigError):
            validate_url('emoji-data.txt')


class TestEmojiListConfig:
    """Tests for the configuration object."""

    def test_for_versions(self):
        """Config built for a release points at its files."""
        config = EmojiListConfig.for_versions('15.0.0', '43', cache_dir='cache')
        assert config.emoji_zwj_sequences_url.endswith('/emoji/15.0/emoji-zwj-sequences.txt')
        assert config.cache_dir == 'cache'
        assert len(config.urls()) == 4


class TestErrors:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize('error_class', [ConfigError, FetchError, FormatError, CacheError])
    def test_hierarchy(self, error_class):
        """Every fatal condition is an EmojiListError."""
        assert issubclass(error_class, EmojiListError)

    def test_missing_annotation_message(self):
        """The consistency error names the emoji."""
        error = MissingAnnotationError('\U0001F600')
        assert isinstance(error, EmojiListError)
        assert error.emoji == '\U0001F600'
        assert str(error) == "emoji '\U0001F600' has no annotation"


class TestLogging:
    """Tests for logging setup."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_setup_logging_level(self):
        """Root logger gets the requested level and a single stderr handler."""
        setup_logging(level='DEBUG')
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr

    def test_setup_logging_structured(self):
        """Structured logging uses a JSON-shaped format."""
        setup_logging(level='INFO', structured=True)
        handler = logging.getLogger().handlers[0]
        assert handler.formatter._fmt.startswith('{"timestamp"')

    def test_unknown_level_defaults_to_info(self):
        """Unknown level names fall back to INFO."""
        setup_logging(level='chatty')
        assert logging.getLogger().level == logging.INFO

    def test_get_logger(self):
        """get_logger returns a named logger."""
        assert get_logger('emoji_list.test').name == 'emoji_list.test'
