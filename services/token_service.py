"""
Token Service
Fetches trading pair data for a token address from DexScreener
"""

import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any

import aiohttp

logger = logging.getLogger(__name__)

DEXSCREENER_BASE_URL = "https://api.dexscreener.com/latest/dex/tokens"


@dataclass(frozen=True)
class TokenPair:
    """Snapshot of the first trading pair DexScreener reports for a token"""

    symbol: str
    name: str
    price_usd: float
    price_native: float
    liquidity_usd: Optional[float]
    volume_24h: Optional[float]
    url: str
    logo_url: Optional[str] = None
    chain_id: str = ''
    dex_id: str = ''
    pair_address: str = ''


def _to_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Convert an upstream numeric field (often a string) to float"""
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_pair(pair_data: Dict[str, Any]) -> TokenPair:
    """
    Build a TokenPair from a raw DexScreener pair record

    Args:
        pair_data: One entry of the "pairs" list

    Returns:
        Parsed TokenPair
    """
    base_token = pair_data.get('baseToken') or {}
    liquidity = pair_data.get('liquidity') or {}
    volume = pair_data.get('volume') or {}
    info = pair_data.get('info') or {}

    logo_url = base_token.get('logoURI') or info.get('imageUrl') or None

    return TokenPair(
        symbol=base_token.get('symbol') or 'N/A',
        name=base_token.get('name') or 'Unknown',
        price_usd=_to_float(pair_data.get('priceUsd')),
        price_native=_to_float(pair_data.get('priceNative')),
        liquidity_usd=_to_float(liquidity.get('usd'), default=None),
        volume_24h=_to_float(volume.get('h24'), default=None),
        url=pair_data.get('url') or '',
        logo_url=logo_url,
        chain_id=pair_data.get('chainId') or '',
        dex_id=pair_data.get('dexId') or '',
        pair_address=pair_data.get('pairAddress') or '',
    )


class TokenService:
    """Handles market data lookups against DexScreener"""

    def __init__(self, config: Dict[str, Any], session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize Token Service

        Args:
            config: Bot configuration dictionary
            session: Shared HTTP session (created on first use if omitted)
        """
        self.dexscreener_base_url = config.get('dexscreener_base_url', DEXSCREENER_BASE_URL).rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=config.get('request_timeout'))
        self.session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self.session

    async def fetch_pair(self, token_address: str) -> Optional[TokenPair]:
        """
        Fetch the first trading pair for a token address

        HTTP and transport errors propagate to the caller.

        Args:
            token_address: Token contract address

        Returns:
            TokenPair, or None if DexScreener knows no pairs for the address
        """
        url = f"{self.dexscreener_base_url}/{token_address}"
        logger.info(f"Fetching token data from: {url}")

        async with self._get_session().get(url) as response:
            response.raise_for_status()
            data = await response.json()

        pairs = (data or {}).get('pairs') or []
        if not pairs:
            logger.info(f"No pairs found for {token_address}")
            return None

        pair = parse_pair(pairs[0])
        logger.info(f"Found pair on {pair.chain_id or 'unknown'}: {pair.pair_address}")
        return pair

    async def close(self):
        """Close the HTTP session"""
        if self.session is not None and not self.session.closed:
            await self.session.close()
