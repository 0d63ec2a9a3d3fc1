from ._config import (
    ApiKeyConfig,
    BasicAuthConfig,
    ConnectionConfig,
    ElasticClientBuilder,
    ExplorerConfig,
    SslConfig,
)
from ._finder import Finder
from ._transport import AsyncTransport, ElasticTransport, Transport

__all__ = [
    "ApiKeyConfig",
    "AsyncTransport",
    "BasicAuthConfig",
    "ConnectionConfig",
    "ElasticClientBuilder",
    "ElasticTransport",
    "ExplorerConfig",
    "Finder",
    "SslConfig",
    "Transport",
]
