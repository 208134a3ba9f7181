from __future__ import annotations
from enum import Enum
from typing import Union
from .mode import CacheMode
from .address import AddressFields, ADDRESS_MASK, decode
from .state import CacheState, CacheBlock
from .stats import CacheStats
from ..utils.logging import get_logger

logger = get_logger("dmcache.engine")


class AccessKind(str, Enum):
    READ = "R"
    WRITE = "W"


class MalformedAccessError(ValueError):
    """Raised for an access whose kind or address the controller cannot serve."""


def parse_kind(kind: Union[AccessKind, str]) -> AccessKind:
    try:
        return AccessKind(kind)
    except ValueError:
        raise MalformedAccessError(f"Unknown access kind {kind!r}, expected 'R' or 'W'.") from None


def check_address(address: int) -> int:
    if not isinstance(address, int) or isinstance(address, bool):
        raise MalformedAccessError(f"Address {address!r} is not an integer.")
    if address < 0 or address > ADDRESS_MASK:
        raise MalformedAccessError(f"Address {address:#x} is outside the 16-bit address space.")
    return address


class CacheEngine:
    """
    Direct-mapped cache controller for one mode.

    Applies the hit/miss state machine to each access and accounts the
    backing-memory traffic the write policy implies. Nothing is timed; the
    engine only counts. Both ``state`` and ``stats`` belong to the run that
    created the engine.
    """
    def __init__(self, mode: CacheMode, state: CacheState, stats: CacheStats):
        if len(state) != mode.block_count:
            raise ValueError(
                f"Cache state has {len(state)} blocks but mode {mode.mode_id} needs {mode.block_count}.")
        self.mode = mode
        self.state = state
        self.stats = stats

    def access(self, kind: Union[AccessKind, str], address: int) -> bool:
        """
        Processes one access and returns its hit status.
        Raises MalformedAccessError before touching any state if the access is invalid.
        """
        kind = parse_kind(kind)
        fields = decode(check_address(address), self.mode)
        if kind is AccessKind.READ:
            hit = self.read(fields)
        else:
            hit = self.write(fields)
        logger.debug("mode %d: %s addr=%#06x tag=%d index=%d offset=%d -> %s",
                     self.mode.mode_id, kind.value, fields.address, fields.tag,
                     fields.index, fields.offset, "hit" if hit else "miss")
        return hit

    def probe(self, fields: AddressFields) -> tuple[bool, CacheBlock]:
        """Returns (hit, block) for the slot the address maps to."""
        block = self.state[fields.index]
        return block.matches(fields.tag), block

    def read(self, fields: AddressFields) -> bool:
        hit, block = self.probe(fields)

        if hit:
            self.stats.record_read_hit()
            return True

        # Handle Miss
        self.stats.record_read_miss()
        if self.mode.is_write_back and block.valid and block.dirty:
            self.stats.add_write_traffic(self.mode.block_size)

        block.fill(fields.tag, dirty=False)
        self.stats.add_read_traffic(self.mode.block_size)
        return False

    def write(self, fields: AddressFields) -> bool:
        hit, block = self.probe(fields)

        if hit:
            self.stats.record_write_hit()
            if self.mode.is_write_through:
                self.stats.add_write_traffic(1)
            # Marked dirty under write-through as well; the flag is never read there.
            block.dirty = True
            return True

        # Handle Miss (Write-Allocate)
        self.stats.record_write_miss()
        self.stats.add_read_traffic(self.mode.block_size)

        if self.mode.is_write_back and block.valid and block.dirty:
            self.stats.add_write_traffic(self.mode.block_size)
        elif self.mode.is_write_through:
            self.stats.add_write_traffic(1)

        block.fill(fields.tag, dirty=True)
        return False
