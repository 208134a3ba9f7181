import pytest
from dmcache.cache.mode import CacheMode, WRITE_BACK, WRITE_THROUGH
from dmcache.cache.state import CacheState
from dmcache.cache.stats import CacheStats
from dmcache.cache.engine import CacheEngine


def make_engine(block_size=16, block_count=8, write_policy=WRITE_BACK, mode_id=1):
    mode = CacheMode(mode_id=mode_id, block_size=block_size, block_count=block_count,
                     write_policy=write_policy)
    return CacheEngine(mode, CacheState(mode), CacheStats(mode_id))


@pytest.fixture
def wb_engine():
    """16 words x 8 blocks, write-back (mode 1)."""
    return make_engine(write_policy=WRITE_BACK, mode_id=1)


@pytest.fixture
def wt_engine():
    """16 words x 8 blocks, write-through (mode 9)."""
    return make_engine(write_policy=WRITE_THROUGH, mode_id=9)


@pytest.fixture
def trace_file(tmp_path):
    path = tmp_path / "test_file.trc"
    path.write_text("R 0000\nR 0000\nW 0000\nR 0040\n")
    return path


@pytest.fixture
def engine_factory():
    return make_engine
