"""Build the emoji set from the Unicode tables, filtering out standalone modifiers."""
import logging
from typing import Iterable, List, Set

from .parsers import parse_emoji_table

logger = logging.getLogger(__name__)

EMOJI_MODIFIER_TAG = 'Emoji_Modifier'


def emoji_modifiers(lines: Iterable[str]) -> Set[str]:
    """
    Collect every codepoint tagged Emoji_Modifier in emoji-data.txt.

    Args:
        lines: Lines of the emoji property table

    Returns:
        Set of single-codepoint modifier emoji (the skin tones)
    """
    modifiers = set()
    for emojis, tag in parse_emoji_table(lines):
        if tag == EMOJI_MODIFIER_TAG:
            modifiers.update(emojis)
    return modifiers


def emojis_in_table(lines: Iterable[str], modifiers: Set[str]) -> List[str]:
    """
    Collect every emoji of a sequence table except standalone modifiers.

    Args:
        lines: Lines of emoji-sequences.txt or emoji-zwj-sequences.txt
        modifiers: Modifier set from emoji_modifiers()

    Returns:
        Emoji in table order
    """
    return [
        emoji
        for emojis, _ in parse_emoji_table(lines)
        for emoji in emojis
        if emoji not in modifiers
    ]


def build_emoji_set(data_lines: Iterable[str], sequence_lines: Iterable[str],
                    zwj_sequence_lines: Iterable[str]) -> List[str]:
    """
    Union of sequence and ZWJ-sequence emoji, without standalone modifiers.

    Modifiers still appear inside sequences such as 👍🏻.
    """
    modifiers = emoji_modifiers(data_lines)
    sequences = emojis_in_table(sequence_lines, modifiers)
    zwj_sequences = emojis_in_table(zwj_sequence_lines, modifiers)
    logger.info(f"Emoji set: {len(sequences)} sequences, {len(zwj_sequences)} ZWJ sequences, "
                f"{len(modifiers)} modifiers excluded")
    return sequences + zwj_sequences
