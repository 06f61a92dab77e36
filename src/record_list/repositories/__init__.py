from .memory import MemoryQuery, MemoryRepository, limit, offset, order_by, where

__all__ = [
    "MemoryQuery",
    "MemoryRepository",
    "limit",
    "offset",
    "order_by",
    "where",
]
