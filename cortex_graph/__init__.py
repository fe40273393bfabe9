"""
Cortex Graph - read-only query client for the Cortex Graph service.

Structure:
    cortex_graph/
    ├── core/       # Foundation (config, models, paths, retry, normalizer, client)
    └── cli.py      # Command-line front end

Usage:
    from cortex_graph import Config, NeuronGraphQueryClient, NeuronQuery

    client = NeuronGraphQueryClient.from_config(Config.from_env())
    result = await client.get_neurons("http://cortex.local/", query=NeuronQuery(limit=10))
"""

from .core import (
    Config,
    CortexGraphError,
    ConfigurationError,
    QueryCancelledError,
    NeuronQuery,
    Neuron,
    Terminal,
    QueryResult,
    RelativeType,
    RetryPolicy,
    RequestProvider,
    HttpRequestProvider,
    TokenService,
    StaticTokenService,
    NeuronGraphQueryClient,
)

__version__ = "0.1.0"

__all__ = [
    # Config
    "Config",
    # Errors
    "CortexGraphError",
    "ConfigurationError",
    "QueryCancelledError",
    # Models
    "NeuronQuery",
    "Neuron",
    "Terminal",
    "QueryResult",
    "RelativeType",
    # Pipeline
    "RetryPolicy",
    "RequestProvider",
    "HttpRequestProvider",
    "TokenService",
    "StaticTokenService",
    "NeuronGraphQueryClient",
]
