from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Literal, Tuple

WritePolicy = Literal["Write-Back", "Write-Through"]

WRITE_BACK: WritePolicy = "Write-Back"
WRITE_THROUGH: WritePolicy = "Write-Through"

ADDRESS_BITS = 16
MAX_BLOCKS = 64

# (block size in words, number of blocks); modes 1-8 and 9-16 share this table
BASE_ORGANIZATIONS: Tuple[Tuple[int, int], ...] = (
    (16, 8),
    (16, 16),
    (16, 32),
    (16, 64),
    (4, 64),
    (8, 32),
    (32, 8),
    (64, 4),
)


class ConfigurationError(ValueError):
    """Raised when a cache organization or run configuration is inconsistent."""


def is_power_of_two(n: int) -> bool:
    return (n > 0) and (n & (n - 1) == 0)


@dataclass(frozen=True)
class CacheMode:
    """One direct-mapped cache organization the controller can run in."""
    mode_id: int
    block_size: int  # words per block
    block_count: int
    write_policy: WritePolicy = WRITE_BACK

    # Derived properties
    cache_size: int = field(init=False)
    offset_bits: int = field(init=False)
    index_bits: int = field(init=False)
    tag_bits: int = field(init=False)

    def __post_init__(self):
        if not is_power_of_two(self.block_size):
            raise ConfigurationError(
                f"Mode {self.mode_id}: block size {self.block_size} must be a power of two.")
        if not is_power_of_two(self.block_count):
            raise ConfigurationError(
                f"Mode {self.mode_id}: block count {self.block_count} must be a power of two.")
        if self.block_count > MAX_BLOCKS:
            raise ConfigurationError(
                f"Mode {self.mode_id}: block count {self.block_count} exceeds {MAX_BLOCKS} blocks.")
        if self.write_policy not in (WRITE_BACK, WRITE_THROUGH):
            raise ConfigurationError(f"Mode {self.mode_id}: unknown write policy {self.write_policy!r}.")

        offset_bits = self.block_size.bit_length() - 1
        index_bits = self.block_count.bit_length() - 1
        if offset_bits + index_bits > ADDRESS_BITS:
            raise ConfigurationError(
                f"Mode {self.mode_id}: offset and index fields do not fit in a {ADDRESS_BITS}-bit address.")

        # frozen dataclass, so derived fields go through object.__setattr__
        object.__setattr__(self, "cache_size", self.block_size * self.block_count)
        object.__setattr__(self, "offset_bits", offset_bits)
        object.__setattr__(self, "index_bits", index_bits)
        object.__setattr__(self, "tag_bits", ADDRESS_BITS - index_bits - offset_bits)

    @property
    def is_write_back(self) -> bool:
        return self.write_policy == WRITE_BACK

    @property
    def is_write_through(self) -> bool:
        return self.write_policy == WRITE_THROUGH

    def describe(self) -> str:
        return (f"mode {self.mode_id:>2}: {self.block_count:>2} blocks x {self.block_size:>2} words "
                f"({self.cache_size} words), {self.write_policy}, "
                f"tag/index/offset = {self.tag_bits}/{self.index_bits}/{self.offset_bits}")


def generate_modes() -> List[CacheMode]:
    """
    Builds the sixteen cache modes in order.

    Mode i (1-based) uses BASE_ORGANIZATIONS[(i - 1) % 8]; modes 1-8 are
    write-back and modes 9-16 are write-through.
    """
    modes = []
    n_base = len(BASE_ORGANIZATIONS)
    for i in range(2 * n_base):
        block_size, block_count = BASE_ORGANIZATIONS[i % n_base]
        policy = WRITE_BACK if i < n_base else WRITE_THROUGH
        modes.append(CacheMode(mode_id=i + 1, block_size=block_size,
                               block_count=block_count, write_policy=policy))
    return modes
