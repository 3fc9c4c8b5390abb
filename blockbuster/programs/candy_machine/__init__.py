"""Candy Machine v2 account parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from blockbuster.config import CANDY_MACHINE_PROGRAM_ID
from blockbuster.program_handler import (
    DiscriminatorParser,
    ParseResult,
    ProgramParseResult,
)
from blockbuster.programs.candy_machine.state import (
    CandyMachine,
    CandyMachineData,
    CollectionPDA,
    Creator,
    EndSettings,
    EndSettingType,
    FreezePDA,
    GatekeeperConfig,
    HiddenSettings,
    WhitelistMintMode,
    WhitelistMintSettings,
)

# Anchor account discriminators.
CANDY_MACHINE_DISCRIMINATOR = bytes([51, 173, 177, 113, 25, 241, 109, 189])
COLLECTION_PDA_DISCRIMINATOR = bytes([203, 128, 119, 125, 234, 89, 232, 157])
FREEZE_PDA_DISCRIMINATOR = bytes([154, 58, 148, 24, 101, 200, 243, 127])


class CandyMachineAccountKind(Enum):
    CANDY_MACHINE = "candy_machine"
    COLLECTION_PDA = "collection_pda"
    FREEZE_PDA = "freeze_pda"


@dataclass
class CandyMachineAccountData(ParseResult):
    kind: CandyMachineAccountKind
    data: CandyMachine | CollectionPDA | FreezePDA

    def result_type(self) -> ProgramParseResult:
        return ProgramParseResult.CANDY_MACHINE

    def variant(self) -> CandyMachineAccountKind:
        return self.kind

    def result(self) -> CandyMachine | CollectionPDA | FreezePDA:
        return self.data


class CandyMachineParser(DiscriminatorParser):
    PROGRAM_ID = CANDY_MACHINE_PROGRAM_ID
    ACCOUNTS = {
        CANDY_MACHINE_DISCRIMINATOR: (
            CandyMachineAccountKind.CANDY_MACHINE,
            CandyMachine.from_reader,
        ),
        COLLECTION_PDA_DISCRIMINATOR: (
            CandyMachineAccountKind.COLLECTION_PDA,
            CollectionPDA.from_reader,
        ),
        FREEZE_PDA_DISCRIMINATOR: (
            CandyMachineAccountKind.FREEZE_PDA,
            FreezePDA.from_reader,
        ),
    }

    def wrap(self, kind: Enum, record: object) -> CandyMachineAccountData:
        return CandyMachineAccountData(kind, record)  # type: ignore[arg-type]


__all__ = [
    "CANDY_MACHINE_DISCRIMINATOR",
    "COLLECTION_PDA_DISCRIMINATOR",
    "FREEZE_PDA_DISCRIMINATOR",
    "CandyMachine",
    "CandyMachineAccountData",
    "CandyMachineAccountKind",
    "CandyMachineData",
    "CandyMachineParser",
    "CollectionPDA",
    "Creator",
    "EndSettingType",
    "EndSettings",
    "FreezePDA",
    "GatekeeperConfig",
    "HiddenSettings",
    "WhitelistMintMode",
    "WhitelistMintSettings",
]
