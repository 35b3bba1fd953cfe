import logging
from types import SimpleNamespace

import pytest
from oss2.exceptions import ClientError, NoSuchKey, ServerError

from aliyun_storage import AliyunStorageService, Instrumenter, OssConfig

OSS_HOST = "oss-cn-hangzhou.aliyuncs.com"


class FakeObjectResult:
    """Chunked object body that, like oss2.GetObjectResult, must be closed."""

    def __init__(self, chunks: list[bytes]):
        self.chunks = chunks
        self.closed = False

    def __iter__(self):
        return iter(self.chunks)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


class FakeBucket:
    """In-memory stand-in for the parts of oss2.Bucket the service uses."""

    def __init__(self, bucket_name: str = "b", chunk_size: int = 4):
        self.bucket_name = bucket_name
        self.chunk_size = chunk_size
        self.page_size: int | None = None
        self.objects: dict[str, bytes] = {}
        self.batch_calls: list[list[str]] = []
        self.list_calls = 0
        self.results: list[FakeObjectResult] = []
        self.failure: Exception | None = None

    def _check(self):
        if self.failure is not None:
            raise self.failure

    def put_object(self, key, data, headers=None, progress_callback=None):
        self._check()
        self.objects[key] = data.read() if hasattr(data, "read") else bytes(data)

    def get_object(self, key, byte_range=None, headers=None, **kwargs):
        self._check()
        if key not in self.objects:
            raise NoSuchKey(
                404,
                {},
                b"",
                {"Code": "NoSuchKey", "Message": "The specified key does not exist."},
            )
        data = self.objects[key]
        if byte_range is not None:
            start, end = byte_range
            standard = (headers or {}).get("x-oss-range-behavior") == "standard"
            if start < len(data):
                data = data[start : end + 1]
            elif standard:
                raise ServerError(
                    416,
                    {},
                    b"",
                    {"Code": "InvalidRange", "Message": "The requested range is not satisfiable"},
                )
        result = FakeObjectResult(
            [data[i : i + self.chunk_size] for i in range(0, len(data), self.chunk_size)]
        )
        self.results.append(result)
        return result

    def delete_object(self, key, params=None, headers=None):
        self._check()
        self.objects.pop(key, None)

    def batch_delete_objects(self, key_list, headers=None):
        self._check()
        if not key_list:
            raise ClientError("key_list should not be empty")
        if len(key_list) > 1000:
            raise ClientError("key_list is too long")
        self.batch_calls.append(list(key_list))
        for key in key_list:
            self.objects.pop(key, None)
        return SimpleNamespace(deleted_keys=list(key_list))

    def list_objects(
        self, prefix="", delimiter="", marker="", max_keys=100, headers=None, **kwargs
    ):
        self._check()
        self.list_calls += 1
        size = min(max_keys, self.page_size or max_keys)
        keys = sorted(k for k in self.objects if k.startswith(prefix) and k > marker)
        page = keys[:size]
        truncated = len(keys) > size
        return SimpleNamespace(
            object_list=[SimpleNamespace(key=k) for k in page],
            prefix_list=[],
            is_truncated=truncated,
            next_marker=page[-1] if truncated else "",
        )

    def object_exists(self, key, headers=None):
        self._check()
        return key in self.objects

    def sign_url(self, method, key, expires, headers=None, params=None, slash_safe=False):
        self._check()
        return (
            f"http://{self.bucket_name}.{OSS_HOST}/{key}"
            f"?OSSAccessKeyId=AK&Expires={expires}&Signature=c2lnbmF0dXJl"
        )


@pytest.fixture
def config() -> OssConfig:
    return OssConfig(
        access_key_id="AK",
        access_key_secret="SECRET",
        bucket="b",
        path="uploads",
    )


@pytest.fixture
def fake_bucket() -> FakeBucket:
    return FakeBucket()


@pytest.fixture
def events() -> list:
    return []


@pytest.fixture
def service(config, fake_bucket, events) -> AliyunStorageService:
    return AliyunStorageService(
        config,
        instrumenter=Instrumenter("Aliyun", [events.append]),
        bucket_factory=lambda _config: fake_bucket,
        clock=lambda: 0.0,
    )


@pytest.fixture(autouse=True)
def restore_sdk_logger():
    sdk = logging.getLogger("oss2")
    saved = (sdk.handlers[:], sdk.propagate)
    yield
    sdk.handlers, sdk.propagate = saved
