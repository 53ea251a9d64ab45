"""Emoji list generator - command line entry point."""
import argparse
import io
import sys
from contextlib import closing

from pipeline import run_local_pipeline, run_pipeline
from emoji_list.version import get_version
from emoji_list.utils import ConfigError, EmojiListConfig, EmojiListError, load_config, setup_logging, get_logger, validate_url

logger = get_logger(__name__)


class OutputFile:
    """Text output that is only created on first write, so an early failure leaves no file."""

    def __init__(self, path: str):
        self.path = path
        self._file = None

    def write(self, text: str) -> int:
        if self._file is None:
            self._file = open(self.path, 'w', encoding='utf-8')
        return self._file.write(text)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Generate a sorted, annotated emoji list from Unicode and CLDR data')
    parser.add_argument('mode', nargs='?', default='generate', choices=['generate', 'local'],
                        help='generate (fetch real sources) or local (bundled sample data). Default: generate')
    parser.add_argument('--emoji-data', help='URL for emoji data file')
    parser.add_argument('--emoji-sequences', help='URL for emoji sequences file')
    parser.add_argument('--emoji-zwj-sequences', help='URL for emoji ZWJ sequences file')
    parser.add_argument('--cldr', help='URL for CLDR data')
    parser.add_argument('--cache-dir', help='Directory to cache downloads in. Default: temporary directory')
    parser.add_argument('--unicode-version', help='Unicode release to build default URLs for, e.g. 16.0.0')
    parser.add_argument('--cldr-version', help='CLDR release to build default URLs for, e.g. 46')
    parser.add_argument('--output', help='Write the list to this file instead of stdout')
    parser.add_argument('--log-level', default='WARNING', help='Logging level. Default: WARNING')
    parser.add_argument('--structured-logs', action='store_true', help='Emit JSON-shaped log lines')
    parser.add_argument('--version', action='version', version=f'%(prog)s {get_version()}')
    return parser


def apply_overrides(config: EmojiListConfig, args: argparse.Namespace) -> EmojiListConfig:
    """CLI flags win over environment configuration."""
    overrides = {
        'emoji_data_url': args.emoji_data,
        'emoji_sequences_url': args.emoji_sequences,
        'emoji_zwj_sequences_url': args.emoji_zwj_sequences,
        'cldr_url': args.cldr,
        'cache_dir': args.cache_dir,
    }
    for field, value in overrides.items():
        if value:
            setattr(config, field, value)

    for url in config.urls():
        validate_url(url)
    return config


def main():
    """Entry point with mode selection."""
    args = build_parser().parse_args()
    setup_logging(level=args.log_level, structured=args.structured_logs)
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(encoding='utf-8')

    try:
        if args.mode == 'local':
            run_local_pipeline()
            return

        config = apply_overrides(load_config(args.unicode_version, args.cldr_version), args)
        if args.output:
            with closing(OutputFile(args.output)) as out:
                run_pipeline(config, out)
                # An empty list still produces a file
                out.write('')
        else:
            run_pipeline(config)

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except EmojiListError as e:
        logger.error(f"Generation failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Generator failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
