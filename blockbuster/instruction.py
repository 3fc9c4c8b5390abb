"""Inputs handed to the parsers by the ingestion layer.

Both types are built by the caller and only read by the parsers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from solders.pubkey import Pubkey  # type: ignore[import-untyped]


@dataclass(frozen=True)
class InnerInstruction:
    program: Pubkey
    keys: tuple[Pubkey, ...]
    data: bytes


@dataclass(frozen=True)
class InstructionBundle:
    """One instruction invocation together with its transaction context."""

    program: Pubkey
    keys: tuple[Pubkey, ...] = ()
    data: bytes = b""
    slot: int = 0
    txn_id: str = ""
    instruction_index: int = 0
    inner_ix: tuple[InnerInstruction, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AccountInfo:
    """Account state as delivered by the ingestion layer.

    ``data`` is None when the source did not include account data.
    """

    pubkey: Pubkey
    owner: Pubkey
    data: bytes | None
    slot: int = 0
    lamports: int = 0
