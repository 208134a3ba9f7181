from __future__ import annotations
from enum import Enum, auto
from typing import List
from .mode import CacheMode


class BlockState(Enum):
    INVALID = auto()
    VALID_CLEAN = auto()
    VALID_DIRTY = auto()


class CacheBlock:
    """One slot of the direct-mapped cache."""
    def __init__(self):
        self.tag = 0
        self.valid = False
        self.dirty = False

    @property
    def state(self) -> BlockState:
        if not self.valid:
            return BlockState.INVALID
        return BlockState.VALID_DIRTY if self.dirty else BlockState.VALID_CLEAN

    def matches(self, tag: int) -> bool:
        return self.valid and self.tag == tag

    def fill(self, tag: int, dirty: bool = False):
        self.tag = tag
        self.valid = True
        self.dirty = dirty

    def reset(self):
        self.tag = 0
        self.valid = False
        self.dirty = False

    def __repr__(self):
        return f"CacheBlock(tag={self.tag}, valid={self.valid}, dirty={self.dirty})"


class CacheState:
    """The block array for a single mode's run, one block per index."""
    def __init__(self, mode: CacheMode):
        self.mode = mode
        self.blocks: List[CacheBlock] = [CacheBlock() for _ in range(mode.block_count)]

    def __len__(self):
        return len(self.blocks)

    def __getitem__(self, index: int) -> CacheBlock:
        return self.blocks[index]

    def reset(self):
        for block in self.blocks:
            block.reset()

    def valid_blocks(self) -> int:
        return sum(1 for block in self.blocks if block.valid)

    def dirty_blocks(self) -> int:
        return sum(1 for block in self.blocks if block.valid and block.dirty)
