from dmcache.cache.mode import generate_modes
from dmcache.cache.state import CacheState, CacheBlock, BlockState


def test_state_sized_to_block_count():
    for mode in generate_modes():
        assert len(CacheState(mode)) == mode.block_count


def test_blocks_start_invalid():
    state = CacheState(generate_modes()[0])
    assert all(b.state is BlockState.INVALID for b in state.blocks)
    assert all((b.tag, b.valid, b.dirty) == (0, False, False) for b in state.blocks)


def test_block_transitions():
    block = CacheBlock()
    assert not block.matches(0)  # tag 0 but not valid

    block.fill(7)
    assert block.state is BlockState.VALID_CLEAN
    assert block.matches(7)
    assert not block.matches(8)

    block.dirty = True
    assert block.state is BlockState.VALID_DIRTY

    block.reset()
    assert block.state is BlockState.INVALID


def test_reset_clears_all_blocks():
    state = CacheState(generate_modes()[1])
    state[3].fill(1, dirty=True)
    state[5].fill(2)
    assert state.valid_blocks() == 2
    assert state.dirty_blocks() == 1

    state.reset()
    assert state.valid_blocks() == 0
    assert state.dirty_blocks() == 0
