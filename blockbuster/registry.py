"""Program registry and dispatch.

The registry maps program ids to parsers. It is populated once at startup,
then frozen; after that it is only read, so a single instance can be shared
by any number of threads without locking.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, Iterable, Iterator

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from blockbuster.error import (
    DuplicateProgramError,
    RegistryFrozenError,
    UnknownProgramError,
)
from blockbuster.instruction import AccountInfo, InstructionBundle
from blockbuster.program_handler import ParseResult, ProgramParser
from blockbuster.programs.candy_machine import CandyMachineParser
from blockbuster.programs.token_metadata import TokenMetadataParser

LOGGER = logging.getLogger("blockbuster.registry")

# Built-in programs, in registration order.
BUILTIN_PARSERS: tuple[Callable[[], ProgramParser], ...] = (
    CandyMachineParser,
    TokenMetadataParser,
)


def _as_pubkey(key: object) -> Pubkey | None:
    """Normalize a lookup key; anything but a Pubkey or 32 raw bytes is None."""
    if isinstance(key, Pubkey):
        return key
    if not isinstance(key, (bytes, bytearray, memoryview)):
        return None
    raw = bytes(key)
    if len(raw) != 32:
        return None
    return Pubkey.from_bytes(raw)


class ProgramRegistry:
    """Process-wide table of program parsers."""

    def __init__(self, parsers: Iterable[ProgramParser] = ()) -> None:
        self._parsers: dict[Pubkey, ProgramParser] = {}
        self._frozen = False
        for parser in parsers:
            self.register(parser)

    def register(self, parser: ProgramParser) -> None:
        if self._frozen:
            raise RegistryFrozenError()
        key = parser.key()
        if key in self._parsers:
            raise DuplicateProgramError(key)
        self._parsers[key] = parser
        LOGGER.debug("registered %r", parser)

    def freeze(self) -> ProgramRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def find_parser(self, key: object) -> ProgramParser | None:
        """Return the parser registered for ``key``, or None."""
        pubkey = _as_pubkey(key)
        if pubkey is None:
            return None
        return self._parsers.get(pubkey)

    def get_parser(self, key: Pubkey | bytes) -> ProgramParser:
        parser = self.find_parser(key)
        if parser is None:
            LOGGER.debug("no parser for program %s", key)
            raise UnknownProgramError(key)
        return parser

    def dispatch_account(self, key: Pubkey | bytes, data: bytes | None) -> ParseResult:
        """Decode account data owned by program ``key``."""
        return self.get_parser(key).handle_account(data)

    def dispatch_account_info(self, info: AccountInfo) -> ParseResult:
        return self.dispatch_account(info.owner, info.data)

    def dispatch_instruction(self, bundle: InstructionBundle) -> ParseResult:
        return self.get_parser(bundle.program).handle_instruction(bundle)

    def programs(self) -> list[Pubkey]:
        return list(self._parsers)

    def __contains__(self, key: object) -> bool:
        return self.find_parser(key) is not None

    def __len__(self) -> int:
        return len(self._parsers)

    def __iter__(self) -> Iterator[ProgramParser]:
        return iter(self._parsers.values())


@lru_cache(maxsize=None)
def default_registry() -> ProgramRegistry:
    """Frozen registry holding every built-in parser."""
    return ProgramRegistry(ctor() for ctor in BUILTIN_PARSERS).freeze()
