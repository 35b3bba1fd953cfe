"""Composition of the storage service from configuration."""

import logging
from collections.abc import Iterable

from aliyun_storage.config import OssConfig, load_config
from aliyun_storage.infrastructure import AliyunStorageService
from aliyun_storage.infrastructure.aliyun_service import SERVICE_NAME
from aliyun_storage.infrastructure.interfaces import StorageService
from aliyun_storage.instrumentation import Instrumenter, Subscriber

logger = logging.getLogger(__name__)


def build_storage_service(
    config: OssConfig | None = None, subscribers: Iterable[Subscriber] = ()
) -> StorageService:
    """
    Returns a configured storage service.

    Args:
        config: Connection settings. Loaded from the environment when omitted.
        subscribers: Callables notified of every instrumentation event.

    Raises:
        ConfigurationError: If the environment configuration is incomplete.
    """
    config = config or load_config()
    service = AliyunStorageService(config, Instrumenter(SERVICE_NAME, subscribers))
    logger.info(
        "Storage service configured",
        extra={"bucket": config.bucket, "path": config.path, "cname": config.cname},
    )
    return service
