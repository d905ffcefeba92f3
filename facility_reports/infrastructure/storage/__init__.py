from .key_value import KeyValueStorage, MemoryKeyValueStorage, SqlKeyValueStorage

__all__ = ["KeyValueStorage", "MemoryKeyValueStorage", "SqlKeyValueStorage"]
