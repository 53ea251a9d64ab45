"""Line parser for Unicode emoji data tables (emoji-data.txt, emoji-sequences.txt, ...)."""
import logging
import re
from typing import Iterable, Iterator, List, Tuple

from emoji_list.utils import FormatError

logger = logging.getLogger(__name__)

HEX_CODEPOINT = re.compile(r'^[0-9A-Fa-f]+$')


def parse_codepoint(value: str, line: str) -> int:
    """
    Decode one hexadecimal codepoint.

    Args:
        value: Hex digits, e.g. "1F600"
        line: Source line, quoted in the error message

    Raises:
        FormatError: If value is not hex or not a Unicode scalar
    """
    if not HEX_CODEPOINT.match(value):
        raise FormatError(f"failed to parse line {line!r}: invalid codepoint {value!r}")
    codepoint = int(value, 16)
    if codepoint > 0x10FFFF:
        raise FormatError(f"failed to parse line {line!r}: codepoint {value!r} out of range")
    return codepoint


def parse_emoji_data_line(line: str) -> Tuple[List[str], str]:
    """
    Parse one line of a Unicode emoji table.

    The format is:
    <codepoints> | <start>..<end> ; <tag> [; <more fields>] # <comment>

    A range yields one emoji per codepoint; a space-separated codepoint list
    yields a single emoji made of all of them.

    Args:
        line: Raw table line

    Returns:
        (emojis, tag); ([], '') for blank and comment-only lines

    Raises:
        FormatError: If the line has fewer than two fields or bad codepoints
    """
    data, _, _ = line.partition('#')
    if not data.strip():
        return [], ''

    parts = data.split(';', 2)
    if len(parts) < 2:
        raise FormatError(f"parse line {line!r}: expected at least 2 fields")

    codepoints_str = parts[0].strip()
    tag = parts[1].strip()

    if '..' in codepoints_str:
        start_str, _, end_str = codepoints_str.partition('..')
        start = parse_codepoint(start_str.strip(), line)
        end = parse_codepoint(end_str.strip(), line)
        return [chr(cp) for cp in range(start, end + 1)], tag

    codepoints = codepoints_str.split()
    if not codepoints:
        raise FormatError(f"failed to parse line {line!r}: no codepoints")
    emoji = ''.join(chr(parse_codepoint(cp, line)) for cp in codepoints)
    return [emoji], tag


def parse_emoji_table(lines: Iterable[str]) -> Iterator[Tuple[List[str], str]]:
    """Yield (emojis, tag) for every data line of a table, skipping blank ones."""
    for line in lines:
        emojis, tag = parse_emoji_data_line(line)
        if emojis:
            yield emojis, tag
