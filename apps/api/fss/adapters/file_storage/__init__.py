"""File storage client adapters."""

from fss.core.config import Settings
from fss.errors import SetupError

from .base import FileStorageClient
from .http_client import HttpFileStorageClient
from .in_process import InProcessFileStorageClient


def build_client(settings: Settings) -> FileStorageClient:
    """Resolve the client adapter from configuration."""
    if settings.client_backend == "http":
        if not settings.endpoint:
            raise SetupError("FSS_ENDPOINT is required when FSS_CLIENT_BACKEND=http")
        return HttpFileStorageClient.from_endpoint(
            settings.endpoint,
            timeout_seconds=settings.request_timeout_seconds,
        )
    return InProcessFileStorageClient()


__all__ = [
    "FileStorageClient",
    "HttpFileStorageClient",
    "InProcessFileStorageClient",
    "build_client",
]
