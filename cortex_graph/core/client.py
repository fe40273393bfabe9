"""
Neuron Graph Query Client - public entry point.

Every operation follows the same flow:
    build path + query string → retry policy → request provider (GET + JSON)
    → QueryResult → unescape tags → caller

Usage:
    client = NeuronGraphQueryClient.from_config(Config.from_env())
    result = await client.get_neurons(
        "http://cortex.local/",
        query=NeuronQuery(tag_contains=["cat"], limit=50),
    )
    for neuron in result.neurons:
        print(neuron.id, neuron.tag)
"""

import asyncio
import logging
from typing import Optional

from .config import Config
from .exceptions import ConfigurationError
from .models import NeuronQuery, QueryResult, RelativeType
from .normalizer import normalize_result
from .paths import (
    build_query_string,
    build_request_url,
    neuron_path,
    neurons_path,
    terminal_path,
)
from .providers import HttpRequestProvider, RequestProvider, StaticTokenService, TokenService
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 1000


class NeuronGraphQueryClient:
    """
    Read-only client for the Cortex Graph service.

    Collaborators are passed in explicitly. The request provider is
    required; a missing one fails here rather than on first use.
    """

    def __init__(
        self,
        request_provider: RequestProvider,
        token_service: Optional[TokenService] = None,
        retry_policy: Optional[RetryPolicy] = None,
        default_limit: Optional[int] = DEFAULT_LIMIT,
    ):
        if request_provider is None:
            raise ConfigurationError("NeuronGraphQueryClient requires a request provider")

        self.request_provider = request_provider
        self.token_service = token_service
        self.retry_policy = retry_policy or RetryPolicy()
        self.default_limit = default_limit

    @classmethod
    def from_config(
        cls,
        config: Config,
        request_provider: Optional[RequestProvider] = None,
    ) -> 'NeuronGraphQueryClient':
        """Create client with the HTTP provider, token and retry settings from config."""
        token_service = StaticTokenService(config.access_token) if config.access_token else None
        return cls(
            request_provider=request_provider or HttpRequestProvider.from_config(config),
            token_service=token_service,
            retry_policy=RetryPolicy.from_config(config),
            default_limit=config.default_limit,
        )

    async def get_neuron_by_id(
        self,
        base_url: str,
        id: str,
        query: Optional[NeuronQuery] = None,
        central_id: Optional[str] = None,
        relative_type: RelativeType = RelativeType.NOT_SET,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> QueryResult:
        """
        Fetch one neuron, optionally as a relative of `central_id`.

        The relatives path is only used when both central_id and a relative
        type are given; otherwise the flat neuron path is queried.
        """
        relative_type = RelativeType.parse(relative_type)
        scoped = bool(central_id) and relative_type != RelativeType.NOT_SET
        path = neuron_path(id, central_id, relative_type)
        query_string = build_query_string(query, relative_type if scoped else RelativeType.NOT_SET)
        return await self._query(build_request_url(base_url, path, query_string), cancel_event)

    async def get_neurons(
        self,
        base_url: str,
        central_id: Optional[str] = None,
        query: Optional[NeuronQuery] = None,
        relative_type: RelativeType = RelativeType.NOT_SET,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> QueryResult:
        """Fetch a neuron collection, or the relatives of `central_id`."""
        relative_type = RelativeType.parse(relative_type)
        path = neurons_path(central_id)
        query_string = build_query_string(
            query,
            relative_type if central_id else RelativeType.NOT_SET,
            limit=self._limit_for(query),
        )
        return await self._query(build_request_url(base_url, path, query_string), cancel_event)

    async def get_terminal_by_id(
        self,
        base_url: str,
        id: str,
        query: Optional[NeuronQuery] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> QueryResult:
        path = terminal_path(id)
        query_string = build_query_string(query)
        return await self._query(build_request_url(base_url, path, query_string), cancel_event)

    async def get_terminals(
        self,
        base_url: str,
        query: Optional[NeuronQuery] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> QueryResult:
        path = terminal_path()
        query_string = build_query_string(query, limit=self._limit_for(query))
        return await self._query(build_request_url(base_url, path, query_string), cancel_event)

    def _limit_for(self, query: Optional[NeuronQuery]) -> Optional[int]:
        if query is not None and query.limit is not None:
            return query.limit
        return self.default_limit

    async def _query(self, url: str, cancel_event: Optional[asyncio.Event]) -> QueryResult:
        async def attempt() -> QueryResult:
            auth_token = self.token_service.get_access_token() if self.token_service else None
            data = await self.request_provider.get(url, auth_token=auth_token, cancel_event=cancel_event)
            return QueryResult.from_json(data)

        result = await self.retry_policy.execute(attempt, cancel_event=cancel_event, description=url)
        logger.debug(f"{url} -> {len(result.neurons)} neuron(s), {len(result.terminals)} terminal(s)")
        return normalize_result(result)
