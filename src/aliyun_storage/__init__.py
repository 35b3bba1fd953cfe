from aliyun_storage.config import DEFAULT_ENDPOINT, OssConfig, load_config
from aliyun_storage.dependencies import build_storage_service
from aliyun_storage.domain import DirectUpload, KeyResolver, RequestSigner
from aliyun_storage.exceptions import (
    ConfigurationError,
    NotFoundError,
    SigningError,
    StorageError,
    TransportError,
)
from aliyun_storage.infrastructure import AliyunStorageService
from aliyun_storage.infrastructure.interfaces import StorageService
from aliyun_storage.instrumentation import InstrumentationEvent, Instrumenter, Outcome
from aliyun_storage.logging import setup_logging, silence_sdk_logging

__all__ = [
    "setup_logging",
    "silence_sdk_logging",
    "AliyunStorageService",
    "StorageService",
    "build_storage_service",
    "OssConfig",
    "load_config",
    "DEFAULT_ENDPOINT",
    "DirectUpload",
    "KeyResolver",
    "RequestSigner",
    "Instrumenter",
    "InstrumentationEvent",
    "Outcome",
    "StorageError",
    "ConfigurationError",
    "NotFoundError",
    "TransportError",
    "SigningError",
]
