from borsh_incremental.reader import BorshError, IncrementalReader

__all__ = ["BorshError", "IncrementalReader"]
