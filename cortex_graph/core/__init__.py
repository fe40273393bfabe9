"""
Cortex Graph client core.

Leaf-first:
1. models     - query filters and decoded results
2. paths      - request target construction (pure)
3. retry      - exponential backoff, cancellation aware
4. normalizer - tag unescaping
5. client     - the public query operations
"""

from .config import Config
from .exceptions import CortexGraphError, ConfigurationError, QueryCancelledError
from .models import NeuronQuery, Neuron, Terminal, QueryResult, RelativeType
from .paths import build_query_string, build_request_url, neuron_path, neurons_path, terminal_path
from .retry import RetryPolicy
from .normalizer import unescape, normalize_result
from .providers import RequestProvider, HttpRequestProvider, TokenService, StaticTokenService
from .client import NeuronGraphQueryClient

__all__ = [
    'Config',
    'CortexGraphError', 'ConfigurationError', 'QueryCancelledError',
    'NeuronQuery', 'Neuron', 'Terminal', 'QueryResult', 'RelativeType',
    'build_query_string', 'build_request_url', 'neuron_path', 'neurons_path', 'terminal_path',
    'RetryPolicy',
    'unescape', 'normalize_result',
    'RequestProvider', 'HttpRequestProvider', 'TokenService', 'StaticTokenService',
    'NeuronGraphQueryClient',
]
