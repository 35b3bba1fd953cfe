"""Aliyun OSS implementation of the StorageService interface."""

import logging
import time
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from datetime import timedelta
from email.utils import formatdate
from typing import Any, BinaryIO

import oss2
from oss2.exceptions import NoSuchKey, OssError

from aliyun_storage.config import OssConfig
from aliyun_storage.domain import DATE_HEADER, DirectUpload, KeyResolver, RequestSigner
from aliyun_storage.exceptions import NotFoundError, TransportError
from aliyun_storage.infrastructure.interfaces import ChunkSink, Expiry, StorageService
from aliyun_storage.instrumentation import Instrumenter, Outcome
from aliyun_storage.logging import silence_sdk_logging
from aliyun_storage.oss import BucketFactory, LazyBucket, get_oss_bucket, object_url

logger = logging.getLogger(__name__)

SERVICE_NAME = "Aliyun"
IMAGE_PROCESS_MARKER = "x-oss-process"
# Without this OSS answers an unsatisfiable range with the whole object.
STANDARD_RANGE_HEADERS = {"x-oss-range-behavior": "standard"}
# OSS rejects DeleteMultipleObjects requests with more keys than this.
MAX_BATCH_DELETE = 1000


def _seconds(expires_in: Expiry) -> int:
    if isinstance(expires_in, timedelta):
        return int(expires_in.total_seconds())
    return int(expires_in)


def _https(url: str) -> str:
    if url.startswith("http://"):
        return "https://" + url[len("http://") :]
    return url


class AliyunStorageService(StorageService):
    """Stores blobs in an Aliyun OSS bucket, optionally under a root path."""

    def __init__(
        self,
        config: OssConfig,
        instrumenter: Instrumenter | None = None,
        bucket_factory: BucketFactory = get_oss_bucket,
        clock: Callable[[], float] = time.time,
    ):
        if config.quiet_sdk_logging:
            silence_sdk_logging()
        self._config = config
        self._resolver = KeyResolver(config.path)
        self._bucket = LazyBucket(config, bucket_factory)
        self._signer = RequestSigner(
            config.access_key_id,
            config.access_key_secret.get_secret_value(),
            config.bucket,
            self._resolver,
        )
        self._instrumenter = instrumenter or Instrumenter(SERVICE_NAME)
        self._clock = clock

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Any], **kwargs: Any
    ) -> "AliyunStorageService":
        """Builds the service from a plain configuration mapping."""
        return cls(OssConfig.from_mapping(mapping), **kwargs)

    @property
    def config(self) -> OssConfig:
        return self._config

    @property
    def bucket(self) -> oss2.Bucket:
        return self._bucket.get()

    def path_for(self, key: str) -> str:
        return self._resolver.resolve(key)

    def upload(
        self, key: str, io: BinaryIO | bytes, checksum: str | None = None
    ) -> None:
        def body() -> None:
            path = self.path_for(key)
            with self._translate_errors("upload", key):
                self.bucket.put_object(path, io)
            logger.info(
                "File uploaded to OSS",
                extra={"object_name": path, "bucket": self._config.bucket},
            )

        self._instrumenter.instrument("upload", body, key=key, checksum=checksum)

    def download(self, key: str, sink: ChunkSink | None = None) -> bytes | None:
        def body() -> bytes | None:
            with self._translate_errors("download", key):
                with self.bucket.get_object(self.path_for(key)) as result:
                    if sink is None:
                        return b"".join(result)
                    for chunk in result:
                        sink(chunk)
            return None

        return self._instrumenter.instrument(
            "download", body, key=key, streaming=sink is not None
        )

    def download_chunk(self, key: str, byte_range: range) -> bytes:
        def body() -> bytes:
            if len(byte_range) == 0:
                return b""
            with self._translate_errors("download_chunk", key):
                with self.bucket.get_object(
                    self.path_for(key),
                    byte_range=(byte_range.start, byte_range.stop - 1),
                    headers=dict(STANDARD_RANGE_HEADERS),
                ) as result:
                    return b"".join(result)

        return self._instrumenter.instrument(
            "download_chunk", body, key=key, range=[byte_range.start, byte_range.stop]
        )

    def delete(self, key: str) -> None:
        def body() -> None:
            path = self.path_for(key)
            try:
                with self._translate_errors("delete", key):
                    self.bucket.delete_object(path)
            except NotFoundError:
                logger.info("Object already absent", extra={"object_name": path})

        self._instrumenter.instrument("delete", body, key=key)

    def delete_prefixed(self, prefix: str) -> None:
        def body() -> Outcome:
            path = self.path_for(prefix)
            with self._translate_errors("delete_prefixed", prefix):
                keys = [
                    obj.key
                    for obj in oss2.ObjectIterator(
                        self.bucket, prefix=path, max_keys=MAX_BATCH_DELETE
                    )
                ]
                # The SDK always requests per-key confirmations; they are ignored.
                for start in range(0, len(keys), MAX_BATCH_DELETE):
                    self.bucket.batch_delete_objects(
                        keys[start : start + MAX_BATCH_DELETE]
                    )
            logger.info(
                "Prefix deleted from OSS",
                extra={"prefix": path, "deleted": len(keys)},
            )
            return Outcome(None, {"deleted": len(keys)})

        self._instrumenter.instrument("delete_prefixed", body, prefix=prefix)

    def exists(self, key: str) -> bool:
        def body() -> Outcome:
            with self._translate_errors("exist", key):
                answer = self.bucket.object_exists(self.path_for(key))
            return Outcome(answer, {"exist": answer})

        return self._instrumenter.instrument("exist", body, key=key)

    def url(
        self,
        key: str,
        expires_in: Expiry,
        filename: str | None = None,
        content_type: str | None = None,
        disposition: str | None = None,
    ) -> str:
        def body() -> Outcome:
            with self._translate_errors("url", key):
                generated_url = self.bucket.sign_url(
                    "GET", self.path_for(key), _seconds(expires_in), slash_safe=True
                )
            generated_url = _https(generated_url)
            if filename and IMAGE_PROCESS_MARKER in str(filename):
                generated_url = f"{generated_url}?{filename}"
            return Outcome(generated_url, {"url": generated_url})

        return self._instrumenter.instrument("url", body, key=key)

    def url_for_direct_upload(
        self,
        key: str,
        expires_in: Expiry,
        content_type: str,
        content_length: int,
        checksum: str,
    ) -> str:
        def body() -> Outcome:
            generated_url = object_url(self._config, self.path_for(key))
            return Outcome(generated_url, {"url": generated_url})

        return self._instrumenter.instrument(
            "url",
            body,
            key=key,
            expires_in=_seconds(expires_in),
            content_type=content_type,
            content_length=content_length,
            checksum=checksum,
        )

    def headers_for_direct_upload(
        self, key: str, content_type: str, checksum: str, **kwargs
    ) -> dict[str, str]:
        def body() -> Outcome:
            date = formatdate(self._clock(), usegmt=True)
            headers = {
                "Content-Type": content_type,
                "Content-MD5": checksum,
                "Authorization": self._signer.authorize(
                    key, content_type, checksum, date
                ),
                DATE_HEADER: date,
            }
            return Outcome(headers, {"date": date})

        return self._instrumenter.instrument(
            "headers_for_direct_upload",
            body,
            key=key,
            content_type=content_type,
            checksum=checksum,
        )

    def direct_upload(
        self,
        key: str,
        expires_in: Expiry,
        content_type: str,
        content_length: int,
        checksum: str,
    ) -> DirectUpload:
        """Returns the URL and headers for a browser-side PUT in one value."""
        return DirectUpload(
            url=self.url_for_direct_upload(
                key,
                expires_in=expires_in,
                content_type=content_type,
                content_length=content_length,
                checksum=checksum,
            ),
            headers=self.headers_for_direct_upload(
                key, content_type=content_type, checksum=checksum
            ),
        )

    @contextmanager
    def _translate_errors(self, operation: str, key: str) -> Iterator[None]:
        try:
            yield
        except NoSuchKey as e:
            raise NotFoundError(key, cause=e) from e
        except OssError as e:
            logger.exception(
                "OSS request failed",
                extra={"operation": operation, "key": key, "bucket": self._config.bucket},
            )
            raise TransportError(operation, key, cause=e) from e
