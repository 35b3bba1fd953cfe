"""Infrastructure interface exports."""

from aliyun_storage.infrastructure.interfaces.storage import (
    ChunkSink,
    Expiry,
    StorageService,
)

__all__ = [
    "ChunkSink",
    "Expiry",
    "StorageService",
]
