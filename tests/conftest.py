"""Shared test doubles for the upstream HTTP services"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest


class FakeResponse:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.error is not None:
            raise self.error

    async def json(self):
        return self.payload


class FakeSession:
    """Records requests and answers them with a canned FakeResponse"""

    def __init__(self, response=None, raises=None):
        self.response = response or FakeResponse({})
        self.raises = raises
        self.closed = False
        self.requests = []

    def _request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.raises is not None:
            raise self.raises
        return self.response

    def get(self, url, **kwargs):
        return self._request('GET', url, **kwargs)

    def post(self, url, **kwargs):
        return self._request('POST', url, **kwargs)

    async def close(self):
        self.closed = True


SAMPLE_PAIR = {
    'chainId': 'solana',
    'dexId': 'raydium',
    'url': 'https://dexscreener.com/solana/pairaddr',
    'pairAddress': 'pairaddr',
    'baseToken': {
        'address': 'So11111111111111111111111111111111111111112',
        'name': 'Wrapped SOL',
        'symbol': 'SOL',
    },
    'priceNative': '1.0',
    'priceUsd': '1.2',
    'liquidity': {'usd': 1234567.5},
    'volume': {'h24': 98765.4321},
}

MINT_ADDRESS = 'EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v'


@pytest.fixture
def config():
    return {
        'rpc_url': 'https://rpc.test',
        'dexscreener_base_url': 'https://dex.test/tokens',
        'min_address_length': 30,
        'commitment': 'confirmed',
        'request_timeout': 10,
        'disable_web_page_preview': False,
    }


@pytest.fixture
def context():
    return SimpleNamespace(bot=AsyncMock())
