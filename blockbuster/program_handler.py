"""Parser interface shared by every supported program.

A program is supported by subclassing ProgramParser (usually through one of
the two discriminator strategies below) and registering an instance with a
ProgramRegistry.

DiscriminatorParser
    Anchor-style accounts: the first DISCRIMINATOR_SIZE bytes are matched
    against a table and the remaining bytes hold the Borsh-encoded record.

OrdinalParser
    Accounts whose first byte is an enum ordinal naming the record kind. The
    ordinal is also the record's own leading field, so the whole buffer is
    decoded.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable, ClassVar, Mapping

from borsh_incremental import BorshError, IncrementalReader
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from blockbuster.error import (
    DeserializationError,
    MalformedAccountDataError,
    UninitializedAccountError,
    UnknownDiscriminatorError,
)
from blockbuster.instruction import InstructionBundle

LOGGER = logging.getLogger("blockbuster.program_handler")

Decoder = Callable[[IncrementalReader], Any]


class ProgramParseResult(Enum):
    UNKNOWN = "unknown"
    CANDY_MACHINE = "candy_machine"
    TOKEN_METADATA = "token_metadata"

    def __str__(self) -> str:
        return self.value


class ParseResult(ABC):
    """Value returned by every parser.

    Callers classify a result through ``result_type()`` and ``variant()``
    and only reach for the concrete record via ``result()`` once they know
    what they hold.
    """

    @abstractmethod
    def result_type(self) -> ProgramParseResult: ...

    def variant(self) -> Enum | None:
        return None

    def classification(self) -> tuple[ProgramParseResult, Enum | None]:
        return self.result_type(), self.variant()

    def result(self) -> Any:
        return self


@dataclass(frozen=True)
class NotUsed(ParseResult):
    """Marker for decode paths that intentionally produce no data."""

    def result_type(self) -> ProgramParseResult:
        return ProgramParseResult.UNKNOWN


def decode_record(decode: Decoder, r: IncrementalReader, kind: Enum) -> Any:
    """Run a record decoder, surfacing field errors as DeserializationError."""
    try:
        return decode(r)
    except BorshError as e:
        LOGGER.debug("failed to decode %s: %s", kind.name, e)
        raise DeserializationError(f"{kind.name}: {e}") from e


def _account_bytes(data: bytes | None) -> bytes:
    if data is None:
        raise DeserializationError("account has no data")
    return bytes(data)


class ProgramParser(ABC):
    """The four operations every supported program provides."""

    PROGRAM_ID: ClassVar[str]

    def __init__(self) -> None:
        self._key = Pubkey.from_string(self.PROGRAM_ID)
        self._key_bytes = bytes(self._key)

    def key(self) -> Pubkey:
        return self._key

    def key_match(self, key: Pubkey | bytes) -> bool:
        return bytes(key) == self._key_bytes

    @abstractmethod
    def handle_account(self, data: bytes | None) -> ParseResult: ...

    def handle_instruction(self, bundle: InstructionBundle) -> ParseResult:
        return NotUsed()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._key})"


class DiscriminatorParser(ProgramParser):
    """Account decoding keyed on a fixed-width byte tag."""

    DISCRIMINATOR_SIZE: ClassVar[int] = 8
    ACCOUNTS: ClassVar[Mapping[bytes, tuple[Enum, Decoder]]]

    def __init__(self) -> None:
        super().__init__()
        for disc in self.ACCOUNTS:
            if len(disc) != self.DISCRIMINATOR_SIZE:
                raise ValueError(
                    f"{type(self).__name__}: discriminator {disc.hex()} is not "
                    f"{self.DISCRIMINATOR_SIZE} bytes"
                )

    @abstractmethod
    def wrap(self, kind: Enum, record: Any) -> ParseResult: ...

    def handle_account(self, data: bytes | None) -> ParseResult:
        data = _account_bytes(data)
        if len(data) < self.DISCRIMINATOR_SIZE:
            raise MalformedAccountDataError(len(data), self.DISCRIMINATOR_SIZE)
        disc = data[: self.DISCRIMINATOR_SIZE]
        entry = self.ACCOUNTS.get(disc)
        if entry is None:
            raise UnknownDiscriminatorError(disc)
        kind, decode = entry
        r = IncrementalReader(data[self.DISCRIMINATOR_SIZE :])
        return self.wrap(kind, decode_record(decode, r, kind))


class OrdinalParser(ProgramParser):
    """Account decoding keyed on a leading 1-byte enum ordinal."""

    DISCRIMINATOR_SIZE: ClassVar[int] = 1
    ACCOUNT_KIND: ClassVar[type[IntEnum]]
    UNINITIALIZED: ClassVar[IntEnum]
    ACCOUNTS: ClassVar[Mapping[IntEnum, Decoder]]

    @abstractmethod
    def wrap(self, kind: IntEnum, record: Any) -> ParseResult: ...

    def handle_account(self, data: bytes | None) -> ParseResult:
        data = _account_bytes(data)
        if len(data) < self.DISCRIMINATOR_SIZE:
            raise MalformedAccountDataError(len(data), self.DISCRIMINATOR_SIZE)
        try:
            kind = self.ACCOUNT_KIND(data[0])
        except ValueError:
            raise UnknownDiscriminatorError(data[:1]) from None
        if kind == self.UNINITIALIZED:
            raise UninitializedAccountError()
        decode = self.ACCOUNTS.get(kind)
        if decode is None:
            raise UnknownDiscriminatorError(data[:1])
        return self.wrap(kind, decode_record(decode, IncrementalReader(data), kind))
