"""Domain layer exports."""

from .keys import KeyResolver
from .models import DATE_HEADER, DirectUpload, SignedRequest
from .signer import RequestSigner

__all__ = ["DATE_HEADER", "DirectUpload", "KeyResolver", "RequestSigner", "SignedRequest"]
