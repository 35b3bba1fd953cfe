"""Abstract interface for storage service operations."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import timedelta
from typing import BinaryIO

ChunkSink = Callable[[bytes], None]
Expiry = int | timedelta


class StorageService(ABC):
    """Abstract base class for blob storage services."""

    @abstractmethod
    def upload(
        self, key: str, io: BinaryIO | bytes, checksum: str | None = None
    ) -> None:
        """
        Uploads the readable content of a stream under a key.

        Args:
            key: The object key.
            io: File-like object or bytes holding the content.
            checksum: Base64 Content-MD5 of the content, if known.

        Raises:
            TransportError: If the upload fails.
        """

    @abstractmethod
    def download(self, key: str, sink: ChunkSink | None = None) -> bytes | None:
        """
        Downloads an object, buffered or chunk by chunk.

        Args:
            key: The object key.
            sink: Optional callable receiving each chunk as it arrives.

        Returns:
            The full content when no sink is given, otherwise None.

        Raises:
            NotFoundError: If the object does not exist.
            TransportError: If the download fails.
        """

    @abstractmethod
    def download_chunk(self, key: str, byte_range: range) -> bytes:
        """
        Downloads part of an object.

        Args:
            key: The object key.
            byte_range: Half-open range of byte offsets to read.

        Returns:
            The requested bytes.

        Raises:
            NotFoundError: If the object does not exist.
            TransportError: If the download fails.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Deletes an object. Deleting a missing object is not an error.

        Raises:
            TransportError: If the delete fails.
        """

    @abstractmethod
    def delete_prefixed(self, prefix: str) -> None:
        """
        Deletes every object whose key starts with the prefix.

        Raises:
            TransportError: If listing or deleting fails.
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """
        Checks whether an object exists.

        Returns:
            True if present, False otherwise.

        Raises:
            TransportError: If the check itself fails.
        """

    @abstractmethod
    def url(
        self,
        key: str,
        expires_in: Expiry,
        filename: str | None = None,
        content_type: str | None = None,
        disposition: str | None = None,
    ) -> str:
        """
        Generates a time-limited URL for reading an object.

        Args:
            key: The object key.
            expires_in: URL lifetime in seconds or as a timedelta.
            filename: Requested filename, or an image-processing directive.
            content_type: Requested content type.
            disposition: Requested content disposition.

        Returns:
            An https URL.
        """

    @abstractmethod
    def url_for_direct_upload(
        self,
        key: str,
        expires_in: Expiry,
        content_type: str,
        content_length: int,
        checksum: str,
    ) -> str:
        """
        Generates the URL a client uploads to directly.

        Returns:
            The object URL. Authorization is carried by the direct-upload headers.
        """

    @abstractmethod
    def headers_for_direct_upload(
        self, key: str, content_type: str, checksum: str, **kwargs
    ) -> dict[str, str]:
        """
        Generates the headers a client must send with a direct upload.

        Returns:
            Mapping of header name to value.
        """
