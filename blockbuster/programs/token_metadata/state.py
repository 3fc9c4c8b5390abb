"""Account data structures for the Token Metadata program.

Every account starts with a 1-byte Key ordinal which is also the first field
of the record, so decoders read the whole account buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from borsh_incremental import IncrementalReader
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from blockbuster.programs.fields import read_enum, read_pubkey

# ---------------------------------------------------------------------------
# Account type discriminants
# ---------------------------------------------------------------------------


class Key(IntEnum):
    UNINITIALIZED = 0
    EDITION_V1 = 1
    MASTER_EDITION_V1 = 2
    RESERVATION_LIST_V1 = 3
    METADATA_V1 = 4
    RESERVATION_LIST_V2 = 5
    MASTER_EDITION_V2 = 6
    EDITION_MARKER = 7
    USE_AUTHORITY_RECORD = 8
    COLLECTION_AUTHORITY_RECORD = 9


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TokenStandard(IntEnum):
    NON_FUNGIBLE = 0
    FUNGIBLE_ASSET = 1
    FUNGIBLE = 2
    NON_FUNGIBLE_EDITION = 3

    def __str__(self) -> str:
        _names = {
            0: "non_fungible",
            1: "fungible_asset",
            2: "fungible",
            3: "non_fungible_edition",
        }
        return _names.get(self.value, "unknown")


class UseMethod(IntEnum):
    BURN = 0
    MULTIPLE = 1
    SINGLE = 2

    def __str__(self) -> str:
        _names = {0: "burn", 1: "multiple", 2: "single"}
        return _names.get(self.value, "unknown")


# ---------------------------------------------------------------------------
# Nested structs
# ---------------------------------------------------------------------------


@dataclass
class Creator:
    address: Pubkey
    verified: bool
    share: int  # u8

    STRUCT_SIZE = 34

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> Creator:
        return cls(read_pubkey(r), r.read_bool(), r.read_u8())


def _read_creators(r: IncrementalReader) -> list[Creator]:
    return r.read_vec(Creator.from_reader, Creator.STRUCT_SIZE)


@dataclass
class Data:
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int  # u16
    creators: list[Creator] | None  # Option<Vec<Creator>>

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> Data:
        return cls(
            name=r.read_string(),
            symbol=r.read_string(),
            uri=r.read_string(),
            seller_fee_basis_points=r.read_u16(),
            creators=r.read_option(_read_creators),
        )


@dataclass
class Collection:
    verified: bool
    key: Pubkey

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> Collection:
        return cls(r.read_bool(), read_pubkey(r))


@dataclass
class Uses:
    use_method: UseMethod
    remaining: int  # u64
    total: int  # u64

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> Uses:
        return cls(read_enum(r, UseMethod), r.read_u64(), r.read_u64())


@dataclass
class ReservationV1:
    address: Pubkey
    spots_remaining: int  # u8
    total_spots: int  # u8

    STRUCT_SIZE = 34

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> ReservationV1:
        return cls(read_pubkey(r), r.read_u8(), r.read_u8())


@dataclass
class Reservation:
    address: Pubkey
    spots_remaining: int  # u64
    total_spots: int  # u64

    STRUCT_SIZE = 48

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> Reservation:
        return cls(read_pubkey(r), r.read_u64(), r.read_u64())


# ---------------------------------------------------------------------------
# Top-level account types
# ---------------------------------------------------------------------------


@dataclass
class Edition:
    key: Key
    parent: Pubkey
    edition: int  # u64

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> Edition:
        return cls(read_enum(r, Key), read_pubkey(r), r.read_u64())


@dataclass
class MasterEditionV1:
    key: Key
    supply: int  # u64
    max_supply: int | None  # Option<u64>
    printing_mint: Pubkey
    one_time_printing_authorization_mint: Pubkey

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> MasterEditionV1:
        return cls(
            key=read_enum(r, Key),
            supply=r.read_u64(),
            max_supply=r.read_option(IncrementalReader.read_u64),
            printing_mint=read_pubkey(r),
            one_time_printing_authorization_mint=read_pubkey(r),
        )


@dataclass
class MasterEditionV2:
    key: Key
    supply: int  # u64
    max_supply: int | None  # Option<u64>

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> MasterEditionV2:
        return cls(
            key=read_enum(r, Key),
            supply=r.read_u64(),
            max_supply=r.read_option(IncrementalReader.read_u64),
        )


@dataclass
class ReservationListV1:
    key: Key
    master_edition: Pubkey
    supply_snapshot: int | None  # Option<u64>
    reservations: list[ReservationV1]

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> ReservationListV1:
        return cls(
            key=read_enum(r, Key),
            master_edition=read_pubkey(r),
            supply_snapshot=r.read_option(IncrementalReader.read_u64),
            reservations=r.read_vec(ReservationV1.from_reader, ReservationV1.STRUCT_SIZE),
        )


@dataclass
class ReservationListV2:
    key: Key
    master_edition: Pubkey
    supply_snapshot: int | None  # Option<u64>
    reservations: list[Reservation]
    total_reservation_spots: int  # u64
    current_reservation_spots: int  # u64

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> ReservationListV2:
        return cls(
            key=read_enum(r, Key),
            master_edition=read_pubkey(r),
            supply_snapshot=r.read_option(IncrementalReader.read_u64),
            reservations=r.read_vec(Reservation.from_reader, Reservation.STRUCT_SIZE),
            total_reservation_spots=r.read_u64(),
            current_reservation_spots=r.read_u64(),
        )


@dataclass
class Metadata:
    key: Key
    update_authority: Pubkey
    mint: Pubkey
    data: Data
    primary_sale_happened: bool
    is_mutable: bool
    edition_nonce: int | None  # Option<u8>
    token_standard: TokenStandard | None
    collection: Collection | None
    uses: Uses | None

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> Metadata:
        return cls(
            key=read_enum(r, Key),
            update_authority=read_pubkey(r),
            mint=read_pubkey(r),
            data=Data.from_reader(r),
            primary_sale_happened=r.read_bool(),
            is_mutable=r.read_bool(),
            edition_nonce=r.read_option(IncrementalReader.read_u8),
            token_standard=r.read_option(lambda rr: read_enum(rr, TokenStandard)),
            collection=r.read_option(Collection.from_reader),
            uses=r.read_option(Uses.from_reader),
        )


@dataclass
class EditionMarker:
    key: Key
    ledger: bytes  # [u8; 31]

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> EditionMarker:
        return cls(read_enum(r, Key), r.read_bytes(31))


@dataclass
class UseAuthorityRecord:
    key: Key
    allowed_uses: int  # u64
    bump: int  # u8

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> UseAuthorityRecord:
        return cls(read_enum(r, Key), r.read_u64(), r.read_u8())


@dataclass
class CollectionAuthorityRecord:
    key: Key
    bump: int  # u8

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> CollectionAuthorityRecord:
        return cls(read_enum(r, Key), r.read_u8())
