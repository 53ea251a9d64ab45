"""Name and keyword extraction from CLDR annotation files."""
import logging
import zipfile
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, List
from xml.etree import ElementTree

from emoji_list.utils import FormatError

logger = logging.getLogger(__name__)

ANNOTATIONS_PATH = 'common/annotations/en.xml'
ANNOTATIONS_DERIVED_PATH = 'common/annotationsDerived/en.xml'

TTS_TYPE = 'tts'


@dataclass
class Annotation:
    """CLDR name and keywords of one emoji."""
    name: str = ''
    keywords: List[str] = field(default_factory=list)


def split_keywords(text: str) -> List[str]:
    """Split a CLDR keyword list ("face | grin | smile") into trimmed keywords."""
    return [keyword.strip() for keyword in text.split('|') if keyword.strip()]


def annotations_in_file(source: BinaryIO) -> Dict[str, Annotation]:
    """
    Parse one CLDR annotation XML document.

    Entries are keyed by the raw cp attribute. CLDR already publishes cp values
    without presentation selectors, so nothing is stripped here.

    Args:
        source: Readable binary file object

    Returns:
        Dictionary mapping cp to its Annotation

    Raises:
        FormatError: If the document is not well-formed XML
    """
    try:
        root = ElementTree.parse(source).getroot()
    except ElementTree.ParseError as e:
        raise FormatError(f"parse CLDR data: {e}") from e

    annotations = {}
    for element in root.findall('./annotations/annotation'):
        cp = element.get('cp', '')
        annotation = annotations.setdefault(cp, Annotation())
        text = element.text or ''
        if element.get('type') == TTS_TYPE:
            annotation.name = text
        else:
            # Repeated keyword elements overwrite, they do not merge
            annotation.keywords = split_keywords(text)
    return annotations


def _annotations_in_member(archive: zipfile.ZipFile, member: str) -> Dict[str, Annotation]:
    try:
        with archive.open(member) as f:
            return annotations_in_file(f)
    except KeyError as e:
        raise FormatError(f"read CLDR data: {member} not found in archive") from e


def load_annotations(archive: zipfile.ZipFile) -> Dict[str, Annotation]:
    """
    Load English annotations from a CLDR archive.

    Derived annotations (skin tones, gendered sequences, ...) overwrite the
    primary ones key by key.
    """
    annotations = _annotations_in_member(archive, ANNOTATIONS_PATH)
    derived = _annotations_in_member(archive, ANNOTATIONS_DERIVED_PATH)
    annotations.update(derived)
    logger.info(f"Loaded {len(annotations)} annotations ({len(derived)} derived)")
    return annotations


def render_annotation(annotation: Annotation) -> str:
    """
    Render the annotation field of an output line.

    Keywords already contained in the name are dropped. This is a plain
    case-sensitive substring test, so "cat" is dropped for "cat face" but
    "face" is dropped for "facepalm" too.
    """
    keywords = [keyword for keyword in annotation.keywords if keyword not in annotation.name]
    return ' '.join([annotation.name] + keywords)
