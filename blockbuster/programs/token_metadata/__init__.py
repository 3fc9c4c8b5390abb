"""Token Metadata account parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from blockbuster.config import TOKEN_METADATA_PROGRAM_ID
from blockbuster.program_handler import OrdinalParser, ParseResult, ProgramParseResult
from blockbuster.programs.token_metadata.state import (
    Collection,
    CollectionAuthorityRecord,
    Creator,
    Data,
    Edition,
    EditionMarker,
    Key,
    MasterEditionV1,
    MasterEditionV2,
    Metadata,
    Reservation,
    ReservationListV1,
    ReservationListV2,
    ReservationV1,
    TokenStandard,
    UseAuthorityRecord,
    UseMethod,
    Uses,
)

TokenMetadataAccountData = (
    Edition
    | MasterEditionV1
    | MasterEditionV2
    | Metadata
    | EditionMarker
    | UseAuthorityRecord
    | CollectionAuthorityRecord
    | ReservationListV1
    | ReservationListV2
)


@dataclass
class TokenMetadataAccountState(ParseResult):
    key: Key
    data: TokenMetadataAccountData

    def result_type(self) -> ProgramParseResult:
        return ProgramParseResult.TOKEN_METADATA

    def variant(self) -> Key:
        return self.key

    def result(self) -> TokenMetadataAccountData:
        return self.data


class TokenMetadataParser(OrdinalParser):
    PROGRAM_ID = TOKEN_METADATA_PROGRAM_ID
    ACCOUNT_KIND = Key
    UNINITIALIZED = Key.UNINITIALIZED
    # Each key decodes the layout of the same name.
    ACCOUNTS = {
        Key.EDITION_V1: Edition.from_reader,
        Key.MASTER_EDITION_V1: MasterEditionV1.from_reader,
        Key.RESERVATION_LIST_V1: ReservationListV1.from_reader,
        Key.METADATA_V1: Metadata.from_reader,
        Key.RESERVATION_LIST_V2: ReservationListV2.from_reader,
        Key.MASTER_EDITION_V2: MasterEditionV2.from_reader,
        Key.EDITION_MARKER: EditionMarker.from_reader,
        Key.USE_AUTHORITY_RECORD: UseAuthorityRecord.from_reader,
        Key.COLLECTION_AUTHORITY_RECORD: CollectionAuthorityRecord.from_reader,
    }

    def wrap(self, kind: IntEnum, record: object) -> TokenMetadataAccountState:
        return TokenMetadataAccountState(Key(kind), record)  # type: ignore[arg-type]


__all__ = [
    "Collection",
    "CollectionAuthorityRecord",
    "Creator",
    "Data",
    "Edition",
    "EditionMarker",
    "Key",
    "MasterEditionV1",
    "MasterEditionV2",
    "Metadata",
    "Reservation",
    "ReservationListV1",
    "ReservationListV2",
    "ReservationV1",
    "TokenMetadataAccountState",
    "TokenMetadataParser",
    "TokenStandard",
    "UseAuthorityRecord",
    "UseMethod",
    "Uses",
]
