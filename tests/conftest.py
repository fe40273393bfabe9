"""
Shared test fixtures.

No test touches the network: the request provider is always stubbed.
"""

import pytest

from cortex_graph.core import NeuronGraphQueryClient, RequestProvider, RetryPolicy


class StubProvider(RequestProvider):
    """
    Replays scripted responses in order.

    Each item is either a payload to return or an exception to raise.
    The last item repeats once the script runs out.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    async def get(self, url, auth_token=None, cancel_event=None):
        self.calls.append({"url": url, "auth_token": auth_token})
        index = min(len(self.calls) - 1, len(self.responses) - 1)
        response = self.responses[index]
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def stub_provider():
    return StubProvider([])


@pytest.fixture
def no_delay_policy():
    """Retry policy with the production attempt count but no backoff."""
    return RetryPolicy(retry_count=3, base_delay=0.0)


@pytest.fixture
def make_client(no_delay_policy):
    def _make(*responses, **kwargs):
        provider = StubProvider(*responses)
        kwargs.setdefault("retry_policy", no_delay_policy)
        return NeuronGraphQueryClient(provider, **kwargs), provider
    return _make
