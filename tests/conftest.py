"""Pytest configuration and shared fixtures."""
import io
import sys
import os
import zipfile
import pytest

# Add src and the repository root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from emoji_list.utils import EmojiListConfig
from pipeline.local_testing import (
    SAMPLE_ANNOTATIONS,
    SAMPLE_ANNOTATIONS_DERIVED,
    SAMPLE_COLLATION,
    create_sample_cldr_archive,
    write_sample_sources,
)


# ============================================================================
# Common test fixtures
# ============================================================================

@pytest.fixture
def annotations_xml():
    """Primary English annotation document."""
    return io.BytesIO(SAMPLE_ANNOTATIONS.encode('utf-8'))


@pytest.fixture
def annotations_derived_xml():
    """Derived English annotation document (skin tones, ZWJ sequences)."""
    return io.BytesIO(SAMPLE_ANNOTATIONS_DERIVED.encode('utf-8'))


@pytest.fixture
def collation_xml():
    """Root collation document with an emoji collation."""
    return io.BytesIO(SAMPLE_COLLATION.encode('utf-8'))


@pytest.fixture
def cldr_archive():
    """Open in-memory CLDR zip with the sample members."""
    with zipfile.ZipFile(io.BytesIO(create_sample_cldr_archive())) as archive:
        yield archive


@pytest.fixture
def sample_config(tmp_path):
    """Config whose cache directory already holds every sample source."""
    config = EmojiListConfig.for_versions(cache_dir=str(tmp_path))
    write_sample_sources(config, tmp_path)
    return config
