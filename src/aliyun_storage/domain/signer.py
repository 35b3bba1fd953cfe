"""OSS header signature for direct-upload PUT requests."""

import base64
import hashlib
import hmac
import logging
import posixpath

from aliyun_storage.domain.keys import KeyResolver
from aliyun_storage.domain.models import SignedRequest
from aliyun_storage.exceptions import SigningError

logger = logging.getLogger(__name__)

AUTH_SCHEME = "OSS"


class RequestSigner:
    """Computes the Authorization header value for a single direct-upload PUT."""

    def __init__(
        self,
        access_key_id: str,
        access_key_secret: str,
        bucket_name: str,
        resolver: KeyResolver,
    ):
        self._access_key_id = access_key_id
        self._access_key_secret = access_key_secret
        self._bucket_name = bucket_name
        self._resolver = resolver

    def canonical_resource(self, key: str) -> str:
        """Returns the normalized absolute /bucket/path resource for a key."""
        return posixpath.normpath(f"/{self._bucket_name}/{self._resolver.resolve(key)}")

    def signed_request(
        self, key: str, content_type: str | None, checksum: str | None, date: str
    ) -> SignedRequest:
        return SignedRequest(
            checksum=checksum or "",
            content_type=content_type or "",
            date=date,
            canonical_resource=self.canonical_resource(key),
        )

    def authorize(
        self, key: str, content_type: str | None, checksum: str | None, date: str
    ) -> str:
        """
        Builds the Authorization header value for a PUT of the given key.

        Args:
            key: The logical object key.
            content_type: Content-Type the client will send.
            checksum: Base64 Content-MD5 the client will send.
            date: HTTP date sent in the x-oss-date header.

        Returns:
            "OSS <access_key_id>:<base64 HMAC-SHA1 signature>".

        Raises:
            SigningError: If the key material cannot be encoded.
        """
        request = self.signed_request(key, content_type, checksum, date)
        try:
            digest = hmac.new(
                self._access_key_secret.encode("utf-8"),
                request.string_to_sign.encode("utf-8"),
                hashlib.sha1,
            ).digest()
        except (AttributeError, TypeError, UnicodeEncodeError) as e:
            logger.exception("Request signing failed", extra={"key": key})
            raise SigningError(key, cause=e) from e
        signature = base64.b64encode(digest).decode("ascii")
        return f"{AUTH_SCHEME} {self._access_key_id}:{signature}"
