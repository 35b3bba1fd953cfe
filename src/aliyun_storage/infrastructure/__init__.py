"""Infrastructure layer exports."""

from aliyun_storage.infrastructure.aliyun_service import AliyunStorageService

__all__ = [
    "AliyunStorageService",
]
