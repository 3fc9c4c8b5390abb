"""Account data structures for the Candy Machine v2 program.

Bodies are Borsh-encoded and follow the 8-byte Anchor discriminator; the
discriminator is stripped by the parser before these decoders run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from borsh_incremental import IncrementalReader
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from blockbuster.programs.fields import read_enum, read_pubkey


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class EndSettingType(IntEnum):
    DATE = 0
    AMOUNT = 1


class WhitelistMintMode(IntEnum):
    BURN_EVERY_TIME = 0
    NEVER_BURN = 1


# ---------------------------------------------------------------------------
# Nested structs
# ---------------------------------------------------------------------------


@dataclass
class EndSettings:
    end_setting_type: EndSettingType
    number: int  # u64

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> EndSettings:
        return cls(read_enum(r, EndSettingType), r.read_u64())


@dataclass
class Creator:
    address: Pubkey
    verified: bool
    share: int  # u8

    STRUCT_SIZE = 34

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> Creator:
        return cls(read_pubkey(r), r.read_bool(), r.read_u8())


@dataclass
class HiddenSettings:
    name: str
    uri: str
    hash: bytes  # [u8; 32]

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> HiddenSettings:
        return cls(r.read_string(), r.read_string(), r.read_bytes(32))


@dataclass
class WhitelistMintSettings:
    mode: WhitelistMintMode
    mint: Pubkey
    presale: bool
    discount_price: int | None  # Option<u64>

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> WhitelistMintSettings:
        return cls(
            mode=read_enum(r, WhitelistMintMode),
            mint=read_pubkey(r),
            presale=r.read_bool(),
            discount_price=r.read_option(IncrementalReader.read_u64),
        )


@dataclass
class GatekeeperConfig:
    gatekeeper_network: Pubkey
    expire_on_use: bool

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> GatekeeperConfig:
        return cls(read_pubkey(r), r.read_bool())


@dataclass
class CandyMachineData:
    uuid: str
    price: int  # u64
    symbol: str
    seller_fee_basis_points: int  # u16
    max_supply: int  # u64
    is_mutable: bool
    retain_authority: bool
    go_live_date: int | None  # Option<i64>
    end_settings: EndSettings | None
    creators: list[Creator] = field(default_factory=list)
    hidden_settings: HiddenSettings | None = None
    whitelist_mint_settings: WhitelistMintSettings | None = None
    items_available: int = 0  # u64
    gatekeeper: GatekeeperConfig | None = None

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> CandyMachineData:
        return cls(
            uuid=r.read_string(),
            price=r.read_u64(),
            symbol=r.read_string(),
            seller_fee_basis_points=r.read_u16(),
            max_supply=r.read_u64(),
            is_mutable=r.read_bool(),
            retain_authority=r.read_bool(),
            go_live_date=r.read_option(IncrementalReader.read_i64),
            end_settings=r.read_option(EndSettings.from_reader),
            creators=r.read_vec(Creator.from_reader, Creator.STRUCT_SIZE),
            hidden_settings=r.read_option(HiddenSettings.from_reader),
            whitelist_mint_settings=r.read_option(WhitelistMintSettings.from_reader),
            items_available=r.read_u64(),
            gatekeeper=r.read_option(GatekeeperConfig.from_reader),
        )


# ---------------------------------------------------------------------------
# Top-level account types
# ---------------------------------------------------------------------------


@dataclass
class CandyMachine:
    authority: Pubkey
    wallet: Pubkey
    token_mint: Pubkey | None
    items_redeemed: int  # u64
    data: CandyMachineData

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> CandyMachine:
        return cls(
            authority=read_pubkey(r),
            wallet=read_pubkey(r),
            token_mint=r.read_option(read_pubkey),
            items_redeemed=r.read_u64(),
            data=CandyMachineData.from_reader(r),
        )


@dataclass
class CollectionPDA:
    mint: Pubkey
    candy_machine: Pubkey

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> CollectionPDA:
        return cls(mint=read_pubkey(r), candy_machine=read_pubkey(r))


@dataclass
class FreezePDA:
    candy_machine: Pubkey
    allow_thaw: bool
    frozen_count: int  # u64
    mint_start: int | None  # Option<i64>
    freeze_time: int  # i64
    freeze_fee: int  # u64

    @classmethod
    def from_reader(cls, r: IncrementalReader) -> FreezePDA:
        return cls(
            candy_machine=read_pubkey(r),
            allow_thaw=r.read_bool(),
            frozen_count=r.read_u64(),
            mint_start=r.read_option(IncrementalReader.read_i64),
            freeze_time=r.read_i64(),
            freeze_fee=r.read_u64(),
        )
