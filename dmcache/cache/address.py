from __future__ import annotations
from dataclasses import dataclass
from .mode import CacheMode, ADDRESS_BITS

ADDRESS_MASK = (1 << ADDRESS_BITS) - 1


@dataclass(frozen=True)
class AddressFields:
    """Tag/index/offset partition of one 16-bit address."""
    address: int
    tag: int
    index: int
    offset: int


def decode(address: int, mode: CacheMode) -> AddressFields:
    """
    Splits an address into tag, index and offset for the given mode.

    The caller guarantees the address fits in 16 bits; range checks belong
    to whoever builds the access.
    """
    offset_mask = (1 << mode.offset_bits) - 1
    index_mask = ((1 << mode.index_bits) - 1) << mode.offset_bits

    offset = address & offset_mask
    index = (address & index_mask) >> mode.offset_bits
    tag = address >> (mode.offset_bits + mode.index_bits)
    return AddressFields(address=address, tag=tag, index=index, offset=offset)


def encode(tag: int, index: int, offset: int, mode: CacheMode) -> int:
    """Reconstructs the address from its fields."""
    return (tag << (mode.index_bits + mode.offset_bits)) | (index << mode.offset_bits) | offset


def block_address(fields: AddressFields, mode: CacheMode) -> int:
    """Address of the first word of the block holding ``fields``."""
    return encode(fields.tag, fields.index, 0, mode)
