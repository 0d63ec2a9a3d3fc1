"""
Elasticsearch transport.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from elasticsearch import ApiError, AsyncElasticsearch, Elasticsearch
from elasticsearch import TransportError as ESTransportError

from explorer.core import debug, error
from explorer.core.exceptions import BadRequestError, TransportError

from ._config import ElasticClientBuilder, ExplorerConfig


class Transport(Protocol):
    def execute(
        self, document: Mapping[str, Any], index: str
    ) -> dict[str, Any]: ...


class AsyncTransport(Protocol):
    async def aexecute(
        self, document: Mapping[str, Any], index: str
    ) -> dict[str, Any]: ...


class ElasticTransport:
    config: ExplorerConfig | None

    _client: Elasticsearch
    _aclient: AsyncElasticsearch

    _init: bool
    _ainit: bool

    def __init__(
        self,
        config: dict | ExplorerConfig | None = None,
        client: Elasticsearch | None = None,
        aclient: AsyncElasticsearch | None = None,
    ):
        """Initialize.

        Args:
            config:
                Explorer config used to create the clients.
            client:
                Existing sync client. Takes precedence over config.
            aclient:
                Existing async client. Takes precedence over config.
        """
        self.config = (
            ElasticClientBuilder.get_config(config)
            if config is not None
            else None
        )
        self._init = False
        self._ainit = False
        if client is not None:
            self._client = client
            self._init = True
        if aclient is not None:
            self._aclient = aclient
            self._ainit = True

    @property
    def client(self) -> Elasticsearch:
        if not self._init:
            self._client = ElasticClientBuilder.build(self._get_config())
            self._init = True
        return self._client

    @property
    def aclient(self) -> AsyncElasticsearch:
        if not self._ainit:
            self._aclient = ElasticClientBuilder.abuild(self._get_config())
            self._ainit = True
        return self._aclient

    def execute(
        self,
        document: Mapping[str, Any],
        index: str,
    ) -> dict[str, Any]:
        args = self._convert_search_args(document, index)
        debug("Searching index %s", index)
        try:
            resp = self.client.search(**args)
        except (ApiError, ESTransportError) as e:
            error("Search on index %s failed: %s", index, e)
            raise TransportError(str(e)) from e
        return self._convert_response(resp)

    async def aexecute(
        self,
        document: Mapping[str, Any],
        index: str,
    ) -> dict[str, Any]:
        args = self._convert_search_args(document, index)
        debug("Searching index %s (async)", index)
        try:
            resp = await self.aclient.search(**args)
        except (ApiError, ESTransportError) as e:
            error("Search on index %s failed: %s", index, e)
            raise TransportError(str(e)) from e
        return self._convert_response(resp)

    def close(self) -> None:
        if self._init:
            self.client.close()
            self._init = False

    async def aclose(self) -> None:
        if self._ainit:
            await self.aclient.close()
            self._ainit = False

    def _get_config(self) -> ExplorerConfig:
        if self.config is None:
            raise BadRequestError("Elasticsearch connection is not configured")
        return self.config

    def _convert_search_args(
        self,
        document: Mapping[str, Any],
        index: str,
    ) -> dict[str, Any]:
        renames = {"from": "from_", "_source": "source"}
        args: dict[str, Any] = {"index": index}
        for key, value in document.items():
            args[renames.get(key, key)] = value
        return args

    def _convert_response(self, resp: Any) -> dict[str, Any]:
        body = getattr(resp, "body", resp)
        return dict(body)
