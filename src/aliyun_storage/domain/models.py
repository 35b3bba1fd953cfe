"""Domain models for the OSS storage adapter."""

from pydantic import BaseModel

DATE_HEADER = "x-oss-date"


class SignedRequest(BaseModel, frozen=True):
    """The canonical fields of a single PUT that get signed for direct upload."""

    method: str = "PUT"
    checksum: str = ""
    content_type: str = ""
    date: str
    canonical_resource: str

    @property
    def canonical_headers(self) -> str:
        return f"{DATE_HEADER}:{self.date}"

    @property
    def string_to_sign(self) -> str:
        return "\n".join(
            [
                self.method,
                self.checksum,
                self.content_type,
                self.date,
                self.canonical_headers,
                self.canonical_resource,
            ]
        )


class DirectUpload(BaseModel, frozen=True):
    """URL and headers a browser client needs to PUT an object straight to OSS."""

    url: str
    headers: dict[str, str]
