from blockbuster.config import (
    CANDY_MACHINE_PROGRAM_ID,
    SOLANA_RPC_URLS,
    TOKEN_METADATA_PROGRAM_ID,
)
from blockbuster.error import (
    BlockbusterError,
    DeserializationError,
    DuplicateProgramError,
    ErrorKind,
    MalformedAccountDataError,
    RegistryFrozenError,
    UninitializedAccountError,
    UnknownDiscriminatorError,
    UnknownProgramError,
)
from blockbuster.instruction import AccountInfo, InnerInstruction, InstructionBundle
from blockbuster.program_handler import (
    DiscriminatorParser,
    NotUsed,
    OrdinalParser,
    ParseResult,
    ProgramParser,
    ProgramParseResult,
)
from blockbuster.programs.candy_machine import (
    CandyMachineAccountData,
    CandyMachineAccountKind,
    CandyMachineParser,
)
from blockbuster.programs.token_metadata import (
    TokenMetadataAccountState,
    TokenMetadataParser,
)
from blockbuster.registry import ProgramRegistry, default_registry

__all__ = [
    "AccountInfo",
    "BlockbusterError",
    "CANDY_MACHINE_PROGRAM_ID",
    "CandyMachineAccountData",
    "CandyMachineAccountKind",
    "CandyMachineParser",
    "DeserializationError",
    "DiscriminatorParser",
    "DuplicateProgramError",
    "ErrorKind",
    "InnerInstruction",
    "InstructionBundle",
    "MalformedAccountDataError",
    "NotUsed",
    "OrdinalParser",
    "ParseResult",
    "ProgramParseResult",
    "ProgramParser",
    "ProgramRegistry",
    "RegistryFrozenError",
    "SOLANA_RPC_URLS",
    "TOKEN_METADATA_PROGRAM_ID",
    "TokenMetadataAccountState",
    "TokenMetadataParser",
    "UninitializedAccountError",
    "UnknownDiscriminatorError",
    "UnknownProgramError",
    "default_registry",
]
