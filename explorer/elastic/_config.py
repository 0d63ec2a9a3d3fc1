from __future__ import annotations

import ssl
from typing import Any

from elasticsearch import AsyncElasticsearch, Elasticsearch

from explorer.core import DataModel, YamlLoader
from explorer.core.exceptions import BadRequestError


class ApiKeyConfig(DataModel):
    """API key credentials."""

    id: str
    key: str


class BasicAuthConfig(DataModel):
    """Basic authentication credentials."""

    username: str
    password: str


class SslConfig(DataModel):
    """TLS settings.

    Attributes:
        verify: Verify the server certificate.
        cert: Client certificate path, or [path, passphrase].
        key: Client key path, or [path, passphrase].
    """

    verify: bool | None = None
    cert: str | list[str] | None = None
    key: str | list[str] | None = None


class ConnectionConfig(DataModel):
    """Connection settings.

    Attributes:
        hosts: Elasticsearch hosts.
        elastic_cloud_id: Elastic Cloud id.
        api: API key credentials.
        auth: Basic authentication credentials.
        ssl: TLS settings.
        nparams: Native parameters to the Elasticsearch client.
    """

    hosts: list[str] = []
    elastic_cloud_id: str | None = None
    api: ApiKeyConfig | None = None
    auth: BasicAuthConfig | None = None
    ssl: SslConfig | None = None
    nparams: dict[str, Any] = {}


class ExplorerConfig(DataModel):
    """Explorer config.

    Attributes:
        connection: Connection settings.
        additional_connections: Hosts appended after the connection hosts.
    """

    connection: ConnectionConfig = ConnectionConfig()
    additional_connections: list[str] = []

    @classmethod
    def load(cls, path: str) -> ExplorerConfig:
        return cls.from_dict(YamlLoader.load(path))


class ElasticClientBuilder:
    @staticmethod
    def get_config(config: dict | ExplorerConfig | None) -> ExplorerConfig:
        if config is None:
            return ExplorerConfig()
        if isinstance(config, dict):
            return ExplorerConfig.from_dict(config)
        if isinstance(config, ExplorerConfig):
            return config
        raise BadRequestError("Explorer config format error")

    @staticmethod
    def from_config(config: dict | ExplorerConfig | None) -> dict[str, Any]:
        """Convert config into Elasticsearch client parameters.

        Args:
            config: Explorer config.

        Returns:
            Keyword arguments for the Elasticsearch client.
        """

        def _add_if_not_none(key, value):
            return {key: value} if value is not None else {}

        config = ElasticClientBuilder.get_config(config)
        connection = config.connection
        hosts = [*connection.hosts, *config.additional_connections]

        args = {
            **_add_if_not_none("hosts", hosts or None),
            **_add_if_not_none("cloud_id", connection.elastic_cloud_id),
        }
        if connection.api is not None:
            args["api_key"] = (connection.api.id, connection.api.key)
        if connection.auth is not None:
            args["basic_auth"] = (
                connection.auth.username,
                connection.auth.password,
            )
        if connection.ssl is not None:
            args.update(ElasticClientBuilder._get_ssl_params(connection.ssl))

        args.update(connection.nparams)
        return args

    @staticmethod
    def build(config: dict | ExplorerConfig | None) -> Elasticsearch:
        return Elasticsearch(**ElasticClientBuilder.from_config(config))

    @staticmethod
    def abuild(
        config: dict | ExplorerConfig | None,
    ) -> AsyncElasticsearch:
        return AsyncElasticsearch(**ElasticClientBuilder.from_config(config))

    @staticmethod
    def _get_ssl_params(ssl_config: SslConfig) -> dict[str, Any]:
        cert, cert_password = _get_path_and_password(ssl_config.cert)
        key, key_password = _get_path_and_password(ssl_config.key)
        password = cert_password or key_password

        # The client has no passphrase option, only an SSL context.
        if password is not None and cert is not None:
            context = ssl.create_default_context()
            if ssl_config.verify is False:
                context.check_hostname = False
                context.verify_mode = ssl.CERT_NONE
            context.load_cert_chain(cert, key, password=password)
            return {"ssl_context": context}

        args: dict[str, Any] = {}
        if ssl_config.verify is not None:
            args["verify_certs"] = ssl_config.verify
        if cert is not None:
            args["client_cert"] = cert
        if key is not None:
            args["client_key"] = key
        return args


def _get_path_and_password(
    value: str | list[str] | None,
) -> tuple[str | None, str | None]:
    if value is None:
        return None, None
    if isinstance(value, str):
        return value, None
    if len(value) == 1:
        return value[0], None
    return value[0], value[1]
