"""Client tests against an in-memory RPC, plus opt-in mainnet checks.

Run the mainnet checks with:
    BLOCKBUSTER_COMPAT_TEST=1 pytest -k compat -v
"""

import os
from types import SimpleNamespace

import httpx
import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from blockbuster.client import Client
from blockbuster.config import CANDY_MACHINE_PROGRAM_ID, TOKEN_METADATA_PROGRAM_ID
from blockbuster.error import UnknownDiscriminatorError, UnknownProgramError
from blockbuster.programs.candy_machine import CANDY_MACHINE_DISCRIMINATOR, CandyMachineAccountKind
from blockbuster.programs.token_metadata import Key
from blockbuster.rpc import BackoffTransport, new_rpc_client, retry_after_seconds
from blockbuster.tests.builders import candy_machine_blob, metadata_blob, pubkey_bytes

CANDY_MACHINE = Pubkey.from_string(CANDY_MACHINE_PROGRAM_ID)
TOKEN_METADATA = Pubkey.from_string(TOKEN_METADATA_PROGRAM_ID)


class FakeRpc:
    def __init__(self, accounts=None, program_accounts=None):
        self.accounts = accounts or {}
        self.program_accounts = program_accounts or []
        self.program_calls = []

    def get_account_info(self, pubkey):
        value = None
        if pubkey in self.accounts:
            owner, data = self.accounts[pubkey]
            value = SimpleNamespace(owner=owner, data=data, lamports=1_000)
        return SimpleNamespace(value=value, context=SimpleNamespace(slot=77))

    def get_program_accounts(self, pubkey, **kwargs):
        self.program_calls.append((pubkey, kwargs))
        value = [
            SimpleNamespace(pubkey=addr, account=SimpleNamespace(data=data))
            for addr, data in self.program_accounts
        ]
        return SimpleNamespace(value=value)


class TestFetchAccount:
    def test_dispatches_on_owner(self):
        addr = Pubkey.from_bytes(pubkey_bytes(40))
        client = Client(FakeRpc({addr: (TOKEN_METADATA, metadata_blob())}))

        res = client.fetch_account(addr)
        assert res.variant() == Key.METADATA_V1
        assert res.result().data.symbol == "BBX"

    def test_account_info(self):
        addr = Pubkey.from_bytes(pubkey_bytes(41))
        client = Client(FakeRpc({addr: (CANDY_MACHINE, candy_machine_blob())}))

        info = client.fetch_account_info(addr)
        assert info.pubkey == addr
        assert info.owner == CANDY_MACHINE
        assert info.slot == 77
        assert info.lamports == 1_000
        assert info.data == candy_machine_blob()

    def test_not_found(self):
        client = Client(FakeRpc())
        with pytest.raises(ValueError, match="account not found"):
            client.fetch_account(Pubkey.from_bytes(pubkey_bytes(42)))

    def test_unknown_owner(self):
        addr = Pubkey.from_bytes(pubkey_bytes(43))
        client = Client(FakeRpc({addr: (Pubkey.default(), b"\x01\x02")}))
        with pytest.raises(UnknownProgramError):
            client.fetch_account(addr)


class TestFetchProgramAccounts:
    def test_collects_parsed_and_errors(self):
        good = Pubkey.from_bytes(pubkey_bytes(50))
        bad = Pubkey.from_bytes(pubkey_bytes(51))
        rpc = FakeRpc(
            program_accounts=[(good, candy_machine_blob()), (bad, bytes(8) + b"junk")]
        )

        out = Client(rpc).fetch_program_accounts(CANDY_MACHINE)

        assert out.program_id == CANDY_MACHINE
        assert [addr for addr, _ in out.parsed] == [good]
        assert out.parsed[0][1].variant() == CandyMachineAccountKind.CANDY_MACHINE
        assert [addr for addr, _ in out.errors] == [bad]
        assert isinstance(out.errors[0][1], UnknownDiscriminatorError)

    def test_discriminator_filter(self):
        rpc = FakeRpc()
        Client(rpc).fetch_program_accounts(CANDY_MACHINE, CANDY_MACHINE_DISCRIMINATOR)

        (program, kwargs), = rpc.program_calls
        assert program == CANDY_MACHINE
        assert kwargs["encoding"] == "base64"
        (memcmp,) = kwargs["filters"]
        assert memcmp.offset == 0

    def test_no_filter(self):
        rpc = FakeRpc()
        Client(rpc).fetch_program_accounts(TOKEN_METADATA)
        assert rpc.program_calls[0][1]["filters"] == []

    def test_unknown_program_skips_rpc(self):
        rpc = FakeRpc()
        with pytest.raises(UnknownProgramError):
            Client(rpc).fetch_program_accounts(Pubkey.default())
        assert rpc.program_calls == []


class _ScriptedTransport(httpx.BaseTransport):
    """Replays a fixed list of responses; entries are a status or (status, headers)."""

    def __init__(self, script):
        self.script = list(script)
        self.calls = 0

    def handle_request(self, request):
        self.calls += 1
        step = self.script.pop(0)
        status, headers = step if isinstance(step, tuple) else (step, {})
        return httpx.Response(status, headers=headers, request=request)


def _transport(inner, **kwargs):
    delays = []
    kwargs.setdefault("backoff", 1.0)
    return BackoffTransport(inner, sleep=delays.append, **kwargs), delays


class TestBackoffTransport:
    def _request(self):
        return httpx.Request("POST", "http://rpc.invalid")

    def test_retries_until_success(self):
        inner = _ScriptedTransport([429, 429, 200])
        transport, delays = _transport(inner, max_retries=5)
        assert transport.handle_request(self._request()).status_code == 200
        assert inner.calls == 3
        assert delays == [1.0, 2.0]

    def test_gives_up_after_max_retries(self):
        inner = _ScriptedTransport([429] * 3)
        transport, delays = _transport(inner, max_retries=2)
        assert transport.handle_request(self._request()).status_code == 429
        assert inner.calls == 3
        assert len(delays) == 2

    @pytest.mark.parametrize("status", [502, 503, 504])
    def test_unavailable_is_retried(self, status):
        inner = _ScriptedTransport([status, 200])
        transport, _ = _transport(inner)
        assert transport.handle_request(self._request()).status_code == 200
        assert inner.calls == 2

    @pytest.mark.parametrize("status", [200, 400, 404, 500])
    def test_other_statuses_not_retried(self, status):
        inner = _ScriptedTransport([status, 200])
        transport, delays = _transport(inner)
        assert transport.handle_request(self._request()).status_code == status
        assert inner.calls == 1
        assert delays == []

    def test_retry_after_overrides_backoff(self):
        inner = _ScriptedTransport([(429, {"Retry-After": "7"}), 200])
        transport, delays = _transport(inner, backoff=1.0)
        transport.handle_request(self._request())
        assert delays == [7.0]

    def test_retry_after_is_capped(self):
        inner = _ScriptedTransport([(503, {"Retry-After": "3600"}), 200])
        transport, delays = _transport(inner, max_delay=10.0)
        transport.handle_request(self._request())
        assert delays == [10.0]

    def test_zero_retries(self):
        inner = _ScriptedTransport([429, 200])
        transport, delays = _transport(inner, max_retries=0)
        assert transport.handle_request(self._request()).status_code == 429
        assert delays == []

    def test_rpc_client_uses_backoff_transport(self):
        client = new_rpc_client("http://rpc.invalid", max_retries=3)
        transport = client._provider.session._transport
        assert isinstance(transport, BackoffTransport)


class TestRetryAfter:
    @pytest.mark.parametrize(
        "headers,expected",
        [
            ({}, None),
            ({"Retry-After": "5"}, 5.0),
            ({"Retry-After": " 1.5 "}, 1.5),
            ({"Retry-After": "-1"}, None),
            ({"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}, None),
        ],
    )
    def test_parse(self, headers, expected):
        assert retry_after_seconds(httpx.Response(429, headers=headers)) == expected


def skip_unless_compat() -> None:
    if not os.environ.get("BLOCKBUSTER_COMPAT_TEST"):
        pytest.skip("set BLOCKBUSTER_COMPAT_TEST=1 to run compatibility tests against mainnet")


def test_compat_token_metadata_program_accounts():
    skip_unless_compat()
    client = Client.from_env(os.environ.get("BLOCKBUSTER_ENV", "mainnet-beta"))
    # Collection authority records are few enough to list in one call.
    out = client.fetch_program_accounts(TOKEN_METADATA, bytes([Key.COLLECTION_AUTHORITY_RECORD]))
    assert out.parsed
    for _, res in out.parsed:
        assert res.variant() == Key.COLLECTION_AUTHORITY_RECORD
