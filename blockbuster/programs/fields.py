"""Field readers shared by the program state modules."""

from __future__ import annotations

from enum import IntEnum
from typing import TypeVar

from borsh_incremental import BorshError, IncrementalReader
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

E = TypeVar("E", bound=IntEnum)


def read_pubkey(r: IncrementalReader) -> Pubkey:
    return Pubkey.from_bytes(r.read_pubkey_raw())


def read_enum(r: IncrementalReader, enum_cls: type[E]) -> E:
    """Read a 1-byte Borsh enum ordinal with no payload."""
    at = r.offset
    v = r.read_u8()
    try:
        return enum_cls(v)
    except ValueError:
        raise BorshError(f"invalid {enum_cls.__name__} variant {v}", at) from None
