import logging
import threading
from collections.abc import Callable
from urllib.parse import quote, urlsplit

import oss2
from oss2.exceptions import ClientError

from aliyun_storage.config import DEFAULT_ENDPOINT, OssConfig
from aliyun_storage.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

BucketFactory = Callable[[OssConfig], oss2.Bucket]


def get_oss_bucket(config: OssConfig) -> oss2.Bucket:
    """
    Initialize and return an OSS bucket handle.

    Args:
        config: Connection settings (endpoint, credentials, bucket, cname).

    Returns:
        oss2.Bucket: Configured bucket handle.

    Raises:
        ConfigurationError: If the SDK rejects the endpoint or bucket name.
    """
    endpoint = config.endpoint or DEFAULT_ENDPOINT
    try:
        auth = oss2.Auth(
            config.access_key_id, config.access_key_secret.get_secret_value()
        )
        return oss2.Bucket(auth, endpoint, config.bucket, is_cname=config.cname)
    except ClientError as e:
        logger.exception(
            "OSS Bucket Initialization Failed",
            extra={"endpoint": endpoint, "bucket": config.bucket},
        )
        raise ConfigurationError("connection", str(e), cause=e) from e


def object_url(config: OssConfig, path: str) -> str:
    """
    Builds the unsigned URL addressing an object, as the SDK does for requests.

    A custom domain (cname) is used as the host directly; otherwise the bucket
    name is prepended to the endpoint host.
    """
    endpoint = config.endpoint or DEFAULT_ENDPOINT
    if "://" not in endpoint:
        endpoint = f"http://{endpoint}"
    parts = urlsplit(endpoint)
    host = parts.netloc if config.cname else f"{config.bucket}.{parts.netloc}"
    return f"{parts.scheme}://{host}/{quote(path, safe='/')}"


class LazyBucket:
    """Builds the bucket handle on first use and reuses it afterwards."""

    def __init__(self, config: OssConfig, factory: BucketFactory = get_oss_bucket):
        self._config = config
        self._factory = factory
        self._lock = threading.Lock()
        self._bucket: oss2.Bucket | None = None

    def get(self) -> oss2.Bucket:
        """Returns the cached handle, building it exactly once under a lock."""
        if self._bucket is None:
            with self._lock:
                if self._bucket is None:
                    self._bucket = self._factory(self._config)
                    logger.info(
                        "OSS bucket handle created",
                        extra={
                            "bucket": self._config.bucket,
                            "endpoint": self._config.endpoint or DEFAULT_ENDPOINT,
                            "cname": self._config.cname,
                        },
                    )
        return self._bucket
