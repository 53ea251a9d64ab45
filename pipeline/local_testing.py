"""Local pipeline testing with sample data."""
import io
import tempfile
import zipfile
from pathlib import Path
from typing import Optional, TextIO

from emoji_list.collation import COLLATION_PATH
from emoji_list.fetch import cache_filename
from emoji_list.transforms.extractors import ANNOTATIONS_DERIVED_PATH, ANNOTATIONS_PATH
from emoji_list.utils import EmojiListConfig, get_logger

from .processing import run_pipeline

logger = get_logger(__name__)

ZWJ = '\u200d'
VS16 = '\ufe0f'

SAMPLE_EMOJI_DATA = """\
# emoji-data.txt (sample)
1F600         ; Emoji                # E1.0   [1] (😀)       grinning face
1F44D         ; Emoji                # E0.6   [1] (👍)       thumbs up
2764          ; Emoji                # E0.6   [1] (❤)       red heart

1F3FB..1F3FF  ; Emoji_Modifier       # E1.0   [5] (🏻..🏿)    light skin tone..dark skin tone
"""

SAMPLE_EMOJI_SEQUENCES = """\
# emoji-sequences.txt (sample)
1F600         ; Basic_Emoji                  ; grinning face                 # E1.0   [1] (😀)
1F3FB..1F3FF  ; Basic_Emoji                  ; light skin tone..dark skin tone # E1.0 [5] (🏻..🏿)
2764 FE0F     ; Basic_Emoji                  ; red heart                     # E0.6   [1] (❤️)
1F44D 1F3FB   ; RGI_Emoji_Modifier_Sequence  ; thumbs up: light skin tone    # E1.0   [1] (👍🏻)
1F44D         ; Basic_Emoji                  ; thumbs up                     # E0.6   [1] (👍)
"""

SAMPLE_EMOJI_ZWJ_SEQUENCES = """\
# emoji-zwj-sequences.txt (sample)
1F469 200D 2764 FE0F 200D 1F468 ; RGI_Emoji_ZWJ_Sequence ; couple with heart: woman, man # E2.0 [1]
"""

COUPLE_WITH_HEART = f'👩{ZWJ}❤{ZWJ}👨'

SAMPLE_ANNOTATIONS = """\
<?xml version="1.0" encoding="UTF-8" ?>
<ldml>
    <identity>
        <language type="en"/>
    </identity>
    <annotations>
        <annotation cp="😀">face | grin | grinning face</annotation>
        <annotation cp="😀" type="tts">grinning face</annotation>
        <annotation cp="👍">+1 | hand | thumb | thumbs up | up</annotation>
        <annotation cp="👍" type="tts">thumbs up</annotation>
        <annotation cp="❤">emotion | heart | love | red heart</annotation>
        <annotation cp="❤" type="tts">red heart</annotation>
    </annotations>
</ldml>
"""

SAMPLE_ANNOTATIONS_DERIVED = f"""\
<?xml version="1.0" encoding="UTF-8" ?>
<ldml>
    <identity>
        <language type="en"/>
    </identity>
    <annotations>
        <annotation cp="👍🏻">+1 | hand | light skin tone | thumb | thumbs up | up</annotation>
        <annotation cp="👍🏻" type="tts">thumbs up: light skin tone</annotation>
        <annotation cp="{COUPLE_WITH_HEART}">couple | couple with heart | love | man | woman</annotation>
        <annotation cp="{COUPLE_WITH_HEART}" type="tts">couple with heart: woman, man</annotation>
    </annotations>
</ldml>
"""

SAMPLE_COLLATION = f"""\
<?xml version="1.0" encoding="UTF-8" ?>
<ldml>
    <collations>
        <collation type="standard">
            <cr><![CDATA[&a<b]]></cr>
        </collation>
        <collation type="emoji">
            <cr><![CDATA[
# START AUTOGENERATED EMOJI ORDER
& [last primary ignorable]<<*🏻🏼🏽🏾🏿
& [before 1]\\uFDD1€
<😀
<👍
<❤{VS16}
<👩{ZWJ}❤{VS16}{ZWJ}👨
# END AUTOGENERATED EMOJI ORDER
]]></cr>
        </collation>
    </collations>
</ldml>
"""

# What run_local_pipeline prints for the sample sources
SAMPLE_OUTPUT = (
    "😀 grinning face\n"
    "👍 thumbs up +1 hand\n"
    "👍🏻 thumbs up: light skin tone +1 hand\n"
    f"❤{VS16} red heart emotion love\n"
    f"👩{ZWJ}❤{VS16}{ZWJ}👨 couple with heart: woman, man love\n"
)


def create_sample_cldr_archive(annotations: str = SAMPLE_ANNOTATIONS,
                               annotations_derived: str = SAMPLE_ANNOTATIONS_DERIVED,
                               collation: str = SAMPLE_COLLATION) -> bytes:
    """Build an in-memory CLDR zip holding the three members the pipeline reads."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as archive:
        archive.writestr(ANNOTATIONS_PATH, annotations.encode('utf-8'))
        archive.writestr(ANNOTATIONS_DERIVED_PATH, annotations_derived.encode('utf-8'))
        archive.writestr(COLLATION_PATH, collation.encode('utf-8'))
    return buffer.getvalue()


def write_sample_sources(config: EmojiListConfig, cache_dir: Path) -> None:
    """Pre-populate a cache directory so the pipeline never touches the network."""
    cache_dir.mkdir(parents=True, exist_ok=True)
    tables = {
        config.emoji_data_url: SAMPLE_EMOJI_DATA,
        config.emoji_sequences_url: SAMPLE_EMOJI_SEQUENCES,
        config.emoji_zwj_sequences_url: SAMPLE_EMOJI_ZWJ_SEQUENCES,
    }
    for url, content in tables.items():
        (cache_dir / cache_filename(url)).write_text(content, encoding='utf-8')
    (cache_dir / cache_filename(config.cldr_url)).write_bytes(create_sample_cldr_archive())


def run_local_pipeline(out: Optional[TextIO] = None) -> int:
    """Run the pipeline on the bundled sample sources."""
    logger.info("Running local pipeline with sample data...")
    with tempfile.TemporaryDirectory(prefix='emoji-list-sample-') as tmp:
        config = EmojiListConfig.for_versions(cache_dir=tmp)
        write_sample_sources(config, Path(tmp))
        return run_pipeline(config, out)
