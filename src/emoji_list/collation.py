"""Emoji ordering from the CLDR root collation rules."""

import logging
import re
import zipfile
from typing import BinaryIO, Dict
from xml.etree import ElementTree

from emoji_list.utils import FormatError, remove_presentation_selector

logger = logging.getLogger(__name__)

COLLATION_PATH = 'common/collation/root.xml'
EMOJI_COLLATION_TYPE = 'emoji'

UNKNOWN_RANK = -1

# "<😀<😃", "<👨‍❤‍👨=💑🏻", "<'#'" ...
RULE_DELIMITERS = re.compile(r"[ <=']+")

# "& [last primary ignorable]<<*🏻🏼🏽🏾🏿"
LAST_PRIMARY_IGNORABLE = re.compile(r'^&\s*\[last primary ignorable\]\s*<+\*(?P<chars>.*)$')


# ============================================================================
# RULE LOADER
# ============================================================================

def collation_rules(source: BinaryIO) -> str:
    """
    Extract the emoji collation rule text from a CLDR collation document.

    Args:
        source: Readable binary file object for common/collation/root.xml

    Returns:
        Contents of the cr element of the emoji collation

    Raises:
        FormatError: If the XML is malformed or has no emoji collation
    """
    try:
        root = ElementTree.parse(source).getroot()
    except ElementTree.ParseError as e:
        raise FormatError(f"parse CLDR collation data: {e}") from e

    for collation in root.findall('./collations/collation'):
        if collation.get('type') == EMOJI_COLLATION_TYPE:
            rules = collation.findtext('cr') or ''
            if rules:
                return rules
            break
    raise FormatError(f"no {EMOJI_COLLATION_TYPE} collation found in {COLLATION_PATH}")


def parse_collation_rules(rules: str, start: int = 1) -> Dict[str, int]:
    """
    Turn collation rule text into a rank table.

    Every key gets the next integer rank in file order; only relative order matters.
    Keys are stored without presentation selectors.

    Args:
        rules: Collation rule text
        start: First rank to assign

    Returns:
        Dictionary mapping emoji to rank

    Raises:
        FormatError: On a line that is not a comment, reset or relation
    """
    table = {}
    count = start

    def assign(key: str) -> None:
        nonlocal count
        key = remove_presentation_selector(key)
        if not key:
            return
        table[key] = count
        count += 1

    for raw_line in rules.splitlines():
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('&'):
            match = LAST_PRIMARY_IGNORABLE.match(line)
            if match:
                for char in match.group('chars'):
                    assign(char)
            continue
        if line.startswith('<*'):
            for char in line[2:]:
                assign(char)
        elif line.startswith('<'):
            for token in RULE_DELIMITERS.split(line[1:]):
                if token:
                    assign(token)
        else:
            raise FormatError(f"unexpected line format {line!r}")

    logger.debug(f"Parsed {len(table)} collation keys")
    return table


def load_collation(archive: zipfile.ZipFile) -> Dict[str, int]:
    """Load the emoji rank table from a CLDR archive."""
    try:
        with archive.open(COLLATION_PATH) as f:
            rules = collation_rules(f)
    except KeyError as e:
        raise FormatError(f"read CLDR data: {COLLATION_PATH} not found in archive") from e
    table = parse_collation_rules(rules)
    logger.info(f"Loaded {len(table)} collation ranks")
    return table


# ============================================================================
# LOOKUP
# ============================================================================

def collation_order(emoji: str, table: Dict[str, int]) -> int:
    """
    Rank of an emoji, falling back to its longest ranked prefix.

    Sequences that the rules do not list (most skin tone variants) sort
    next to their base emoji. Unranked emoji get UNKNOWN_RANK and sort first.
    """
    while emoji:
        rank = table.get(remove_presentation_selector(emoji))
        if rank is not None:
            return rank
        emoji = emoji[:-1]
    return UNKNOWN_RANK
