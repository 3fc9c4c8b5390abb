"""RPC client that fetches accounts and runs them through the registry."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import base58  # type: ignore[import-untyped]
from solders.pubkey import Pubkey  # type: ignore[import-untyped]
from solders.rpc.responses import GetAccountInfoResp  # type: ignore[import-untyped]

from blockbuster.config import SOLANA_RPC_URLS
from blockbuster.error import BlockbusterError
from blockbuster.instruction import AccountInfo
from blockbuster.program_handler import ParseResult
from blockbuster.registry import ProgramRegistry, default_registry
from blockbuster.rpc import new_rpc_client

LOGGER = logging.getLogger("blockbuster.client")


class SolanaClient(Protocol):
    def get_account_info(self, pubkey: Pubkey) -> GetAccountInfoResp: ...

    def get_program_accounts(self, pubkey: Pubkey, **kwargs: Any) -> Any: ...


class ProgramAccounts:
    """Decode outcome for every account owned by one program."""

    def __init__(self, program_id: Pubkey) -> None:
        self.program_id = program_id
        self.parsed: list[tuple[Pubkey, ParseResult]] = []
        self.errors: list[tuple[Pubkey, BlockbusterError]] = []


class Client:
    """Read-only client that decodes fetched accounts with a ProgramRegistry."""

    def __init__(
        self,
        solana_rpc: SolanaClient,
        registry: ProgramRegistry | None = None,
    ) -> None:
        self._solana_rpc = solana_rpc
        self._registry = registry if registry is not None else default_registry()

    @classmethod
    def from_env(cls, env: str) -> Client:
        """Create a client configured for the given environment.

        Args:
            env: Environment name ("mainnet-beta", "testnet", "devnet", "localnet")
        """
        return cls(new_rpc_client(SOLANA_RPC_URLS[env]))

    @classmethod
    def mainnet_beta(cls) -> Client:
        return cls.from_env("mainnet-beta")

    @classmethod
    def devnet(cls) -> Client:
        return cls.from_env("devnet")

    @property
    def registry(self) -> ProgramRegistry:
        return self._registry

    def fetch_account_info(self, addr: Pubkey) -> AccountInfo:
        resp = self._solana_rpc.get_account_info(addr)
        if resp.value is None:
            raise ValueError(f"account not found: {addr}")
        acct = resp.value
        return AccountInfo(
            pubkey=addr,
            owner=acct.owner,
            data=bytes(acct.data),
            slot=resp.context.slot,
            lamports=acct.lamports,
        )

    def fetch_account(self, addr: Pubkey) -> ParseResult:
        """Fetch one account and decode it with the parser for its owner."""
        return self._registry.dispatch_account_info(self.fetch_account_info(addr))

    def fetch_program_accounts(
        self,
        program_id: Pubkey,
        discriminator: bytes | None = None,
    ) -> ProgramAccounts:
        """Fetch and decode every account owned by ``program_id``.

        Accounts are decoded independently; one that fails to decode is
        recorded in ``errors`` and does not stop the others.
        """
        from solana.rpc.types import MemcmpOpts  # type: ignore[import-untyped]

        parser = self._registry.get_parser(program_id)
        filters = []
        if discriminator is not None:
            filters.append(
                MemcmpOpts(offset=0, bytes=base58.b58encode(discriminator).decode())
            )
        resp = self._solana_rpc.get_program_accounts(
            program_id,
            encoding="base64",
            filters=filters,
        )

        out = ProgramAccounts(program_id)
        for acct in resp.value:
            try:
                out.parsed.append((acct.pubkey, parser.handle_account(bytes(acct.account.data))))
            except BlockbusterError as e:
                LOGGER.debug("skipping %s: %s", acct.pubkey, e)
                out.errors.append((acct.pubkey, e))
        return out
