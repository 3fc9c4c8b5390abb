"""Error taxonomy for account and instruction decoding.

Every decode failure is raised as a subclass of BlockbusterError, which is a
ValueError so callers that already handle malformed-data errors keep working.
Callers that only care about the category can branch on ``err.kind``.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    UNKNOWN_PROGRAM = "unknown_program"
    MALFORMED_ACCOUNT_DATA = "malformed_account_data"
    UNKNOWN_DISCRIMINATOR = "unknown_discriminator"
    UNINITIALIZED_ACCOUNT = "uninitialized_account"
    DESERIALIZATION = "deserialization"
    CONFIGURATION = "configuration"

    def __str__(self) -> str:
        return self.value


class BlockbusterError(ValueError):
    kind: ErrorKind


class UnknownProgramError(BlockbusterError):
    """No parser is registered for the program id."""

    kind = ErrorKind.UNKNOWN_PROGRAM

    def __init__(self, program: object) -> None:
        super().__init__(f"no parser registered for program {program}")
        self.program = program


class MalformedAccountDataError(BlockbusterError):
    """Account data is too short to hold the discriminator."""

    kind = ErrorKind.MALFORMED_ACCOUNT_DATA

    def __init__(self, length: int, need: int) -> None:
        super().__init__(
            f"account data too short: {length} bytes, need at least {need}"
        )
        self.length = length
        self.need = need


class UnknownDiscriminatorError(BlockbusterError):
    """The discriminator does not name any record kind the program knows."""

    kind = ErrorKind.UNKNOWN_DISCRIMINATOR

    def __init__(self, discriminator: bytes) -> None:
        super().__init__(f"unknown account discriminator {discriminator.hex()}")
        self.discriminator = discriminator


class UninitializedAccountError(BlockbusterError):
    """The account carries the uninitialized sentinel; there is nothing to decode.

    This is an expected outcome for freshly allocated accounts and is usually
    skipped rather than reported.
    """

    kind = ErrorKind.UNINITIALIZED_ACCOUNT

    def __init__(self) -> None:
        super().__init__("account is uninitialized")


class DeserializationError(BlockbusterError):
    """The discriminator matched but the record body could not be decoded."""

    kind = ErrorKind.DESERIALIZATION


class DuplicateProgramError(BlockbusterError):
    kind = ErrorKind.CONFIGURATION

    def __init__(self, program: object) -> None:
        super().__init__(f"a parser is already registered for program {program}")
        self.program = program


class RegistryFrozenError(BlockbusterError):
    kind = ErrorKind.CONFIGURATION

    def __init__(self) -> None:
        super().__init__("program registry is frozen; register parsers before first use")
