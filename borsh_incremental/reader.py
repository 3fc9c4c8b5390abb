"""Borsh incremental deserialization reader.

Provides cursor-based reading of Borsh-serialized binary data. Every strict
read checks the remaining length before touching the buffer and raises
BorshError instead of reading past the end. Trailing fields added by newer
schema versions are left unread; callers decide whether to reject them.
"""

from __future__ import annotations

import struct
from typing import Callable, TypeVar

T = TypeVar("T")


class BorshError(ValueError):
    """Raised when the buffer does not hold a valid Borsh encoding."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"borsh: {message} at offset {offset}")
        self.offset = offset


class IncrementalReader:
    """Cursor-based Borsh binary reader with incremental deserialization."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _require(self, n: int, what: str) -> None:
        if n < 0 or self._offset + n > len(self._data):
            raise BorshError(f"not enough data for {what}", self._offset)

    def _unpack(self, fmt: str, size: int, what: str) -> int:
        self._require(size, what)
        (v,) = struct.unpack_from(fmt, self._data, self._offset)
        self._offset += size
        return v

    # --- Strict read methods (raise on insufficient or invalid data) ---

    def read_u8(self) -> int:
        self._require(1, "u8")
        v = self._data[self._offset]
        self._offset += 1
        return v

    def read_bool(self) -> bool:
        at = self._offset
        v = self.read_u8()
        if v > 1:
            raise BorshError(f"invalid bool value {v}", at)
        return v == 1

    def read_u16(self) -> int:
        return self._unpack("<H", 2, "u16")

    def read_u32(self) -> int:
        return self._unpack("<I", 4, "u32")

    def read_u64(self) -> int:
        return self._unpack("<Q", 8, "u64")

    def read_i64(self) -> int:
        return self._unpack("<q", 8, "i64")

    def read_bytes(self, n: int) -> bytes:
        self._require(n, f"{n} bytes")
        v = self._data[self._offset : self._offset + n]
        self._offset += n
        return v

    def read_pubkey_raw(self) -> bytes:
        """Read a 32-byte public key as raw bytes."""
        return self.read_bytes(32)

    def read_string(self) -> str:
        at = self._offset
        length = self.read_u32()
        if length > self.remaining:
            raise BorshError(f"string length {length} exceeds remaining data", at)
        raw = self.read_bytes(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BorshError(f"invalid utf-8 in string ({e.reason})", at) from e

    def read_option(self, read_fn: Callable[[IncrementalReader], T]) -> T | None:
        """Read a 1-byte presence tag followed by the value when present."""
        at = self._offset
        tag = self.read_u8()
        if tag == 0:
            return None
        if tag != 1:
            raise BorshError(f"invalid option tag {tag}", at)
        return read_fn(self)

    def read_vec(
        self,
        read_fn: Callable[[IncrementalReader], T],
        min_elem_size: int = 1,
    ) -> list[T]:
        """Read a u32 element count followed by that many elements.

        The count is checked against the remaining bytes before any element
        is read, so an oversized length prefix fails without iterating.
        """
        at = self._offset
        count = self.read_u32()
        if count * min_elem_size > self.remaining:
            raise BorshError(
                f"vector length {count} exceeds remaining data ({self.remaining} bytes)",
                at,
            )
        return [read_fn(self) for _ in range(count)]
