import dataclasses
import pytest
from dmcache.cache.mode import (
    CacheMode, ConfigurationError, generate_modes, BASE_ORGANIZATIONS,
    WRITE_BACK, WRITE_THROUGH, ADDRESS_BITS,
)


def test_generate_modes_order_and_policies():
    """Modes 1-8 are write-back, 9-16 write-through, sharing one base table."""
    modes = generate_modes()

    assert [m.mode_id for m in modes] == list(range(1, 17))
    assert all(m.write_policy == WRITE_BACK for m in modes[:8])
    assert all(m.write_policy == WRITE_THROUGH for m in modes[8:])
    for i, mode in enumerate(modes):
        assert (mode.block_size, mode.block_count) == BASE_ORGANIZATIONS[i % 8]


def test_generate_modes_is_deterministic():
    assert generate_modes() == generate_modes()


def test_mode_bit_widths_partition_address():
    for mode in generate_modes():
        assert mode.tag_bits + mode.index_bits + mode.offset_bits == ADDRESS_BITS
        assert 1 << mode.offset_bits == mode.block_size
        assert 1 << mode.index_bits == mode.block_count
        assert mode.cache_size == mode.block_size * mode.block_count


def test_mode_widths_for_first_mode():
    mode = generate_modes()[0]
    assert (mode.offset_bits, mode.index_bits, mode.tag_bits) == (4, 3, 9)


@pytest.mark.parametrize("block_size, block_count", [(12, 8), (16, 6), (0, 8), (16, 128)])
def test_invalid_organization_fails_fast(block_size, block_count):
    with pytest.raises(ConfigurationError):
        CacheMode(mode_id=1, block_size=block_size, block_count=block_count)


def test_organization_wider_than_address_is_rejected():
    with pytest.raises(ConfigurationError, match="16-bit"):
        CacheMode(mode_id=1, block_size=1 << 12, block_count=64)


def test_unknown_write_policy_is_rejected():
    with pytest.raises(ConfigurationError, match="write policy"):
        CacheMode(mode_id=1, block_size=16, block_count=8, write_policy="Write-Around")


def test_mode_is_immutable():
    mode = generate_modes()[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        mode.block_size = 32


def test_describe_mentions_widths():
    text = generate_modes()[8].describe()
    assert "mode  9" in text
    assert "Write-Through" in text
    assert "9/3/4" in text
