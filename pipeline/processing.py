"""Generator pipeline: fetch sources, build the emoji set, sort and print."""
import logging
import sys
import tempfile
import zipfile
from contextlib import ExitStack
from pathlib import Path
from typing import Dict, Iterator, List, Optional, TextIO

import requests

from emoji_list.collation import collation_order, load_collation
from emoji_list.fetch import fetch
from emoji_list.transforms.extractors import Annotation, load_annotations, render_annotation
from emoji_list.transforms.filters import build_emoji_set
from emoji_list.utils import EmojiListConfig, FormatError, MissingAnnotationError, remove_presentation_selector

logger = logging.getLogger(__name__)


def read_lines(path: Path) -> List[str]:
    """Read a Unicode table as text lines split on newlines only."""
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise FormatError(f"read {path.name!r}: {e}") from e
    return [line.rstrip('\r') for line in text.split('\n')]


def sort_emojis(emojis: List[str], collation: Dict[str, int]) -> List[str]:
    """Order by collation rank, then by codepoint sequence."""
    return sorted(emojis, key=lambda emoji: (collation_order(emoji, collation), emoji))


def render_lines(emojis: List[str], annotations: Dict[str, Annotation]) -> Iterator[str]:
    """
    Yield one output line per emoji.

    Annotations are looked up without presentation selectors, matching how
    CLDR publishes its cp values.

    Raises:
        MissingAnnotationError: When an emoji has no annotation. Lines yielded
            before it have already been handed to the caller.
    """
    for emoji in emojis:
        annotation = annotations.get(remove_presentation_selector(emoji))
        if annotation is None:
            raise MissingAnnotationError(emoji)
        yield f"{emoji} {render_annotation(annotation)}"


def run_pipeline(config: EmojiListConfig, out: Optional[TextIO] = None) -> int:
    """
    Run the generator end to end.

    Lines are written as they are rendered, so a failure on a late emoji
    leaves the earlier lines in out.

    Args:
        config: Source URLs and cache directory
        out: Text stream for the list, stdout by default

    Returns:
        Number of lines written
    """
    out = out or sys.stdout
    logger.info("🚀 Generating emoji list")

    with ExitStack() as stack:
        cache_dir = config.cache_dir
        if cache_dir is None:
            cache_dir = stack.enter_context(tempfile.TemporaryDirectory(prefix='emoji-list-'))
            logger.debug(f"No cache directory configured, using {cache_dir}")
        session = stack.enter_context(requests.Session())

        emojis = build_emoji_set(
            read_lines(fetch(config.emoji_data_url, cache_dir, session)),
            read_lines(fetch(config.emoji_sequences_url, cache_dir, session)),
            read_lines(fetch(config.emoji_zwj_sequences_url, cache_dir, session)),
        )

        cldr_path = fetch(config.cldr_url, cache_dir, session)
        try:
            archive = stack.enter_context(zipfile.ZipFile(cldr_path))
        except zipfile.BadZipFile as e:
            raise FormatError(f"read CLDR data {cldr_path.name!r}: {e}") from e
        annotations = load_annotations(archive)
        collation = load_collation(archive)

        count = 0
        for line in render_lines(sort_emojis(emojis, collation), annotations):
            out.write(line + '\n')
            count += 1

    logger.info(f"✅ Wrote {count} emoji")
    return count
