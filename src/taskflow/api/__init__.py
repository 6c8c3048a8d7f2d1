"""Record service client and authentication adapter."""

from .auth import AuthAdapter, RecordServiceAuthAdapter
from .client import RecordServiceClient

__all__ = ["RecordServiceClient", "AuthAdapter", "RecordServiceAuthAdapter"]
