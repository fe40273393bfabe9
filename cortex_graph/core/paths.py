"""
Request target construction.

Pure functions: identical inputs always give an identical string. Filter
consistency (e.g. Id together with IdNot) is left to the server.
"""

from typing import List, Optional
from urllib.parse import quote

from .models import NeuronQuery, QUERY_FIELDS, RelativeType

NEURONS_PATH = "cortex/graph/neurons"
RELATIVES_PATH = "cortex/graph/neurons/{central_id}/relatives"
TERMINALS_PATH = "cortex/graph/terminals"


def neuron_path(
    id: str,
    central_id: Optional[str] = None,
    relative_type: RelativeType = RelativeType.NOT_SET,
) -> str:
    """Path of a single neuron, nested under its central neuron when scoped as a relative."""
    if central_id and relative_type != RelativeType.NOT_SET:
        return f"{RELATIVES_PATH.format(central_id=central_id)}/{id}"
    return f"{NEURONS_PATH}/{id}"


def neurons_path(central_id: Optional[str] = None) -> str:
    """Path of the neuron collection, or of a central neuron's relatives."""
    if central_id:
        return RELATIVES_PATH.format(central_id=central_id)
    return NEURONS_PATH


def terminal_path(id: Optional[str] = None) -> str:
    if id:
        return f"{TERMINALS_PATH}/{id}"
    return TERMINALS_PATH


def query_pairs(
    query: Optional[NeuronQuery] = None,
    relative_type: RelativeType = RelativeType.NOT_SET,
    limit: Optional[int] = None,
) -> List[str]:
    """
    Serialize a query into key=value pairs.

    Order: type, then the filter fields, then limit. Multi-valued fields
    repeat the key once per value. An explicit `limit` wins over query.limit.
    """
    pairs = []

    if relative_type != RelativeType.NOT_SET:
        pairs.append(f"type={relative_type.value}")

    if query is not None:
        for wire, attr in QUERY_FIELDS:
            for value in getattr(query, attr):
                pairs.append(f"{wire}={quote(value, safe='')}")

    if limit is None and query is not None:
        limit = query.limit
    if limit is not None:
        pairs.append(f"limit={limit}")

    return pairs


def build_query_string(
    query: Optional[NeuronQuery] = None,
    relative_type: RelativeType = RelativeType.NOT_SET,
    limit: Optional[int] = None,
) -> str:
    """Joined query string with a leading '?', or '' when there is nothing to send."""
    pairs = query_pairs(query, relative_type, limit)
    if not pairs:
        return ""
    return "?" + "&".join(pairs)


def build_request_url(base_url: str, path: str, query_string: str = "") -> str:
    if base_url and not base_url.endswith("/"):
        base_url += "/"
    return f"{base_url or ''}{path}{query_string}"
