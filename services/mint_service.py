"""
Mint Service
Resolves decimals and total supply of an SPL token mint via Solana RPC
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Optional, Dict, Any

import aiohttp
from solders.pubkey import Pubkey

logger = logging.getLogger(__name__)

SOLANA_RPC = "https://api.mainnet-beta.solana.com"


@dataclass(frozen=True)
class MintInfo:
    """On-chain mint metadata"""

    decimals: Optional[int]
    supply: Optional[float]


def scale_supply(raw_supply: int, decimals: Optional[int]) -> Optional[float]:
    """
    Convert a raw supply to human units

    Args:
        raw_supply: Supply in the smallest unit
        decimals: Mint decimals (0 means no scaling)

    Returns:
        Scaled supply, or None if decimals are unknown or the result is
        not a finite number
    """
    if decimals is None:
        return None

    try:
        supply = raw_supply / (10 ** decimals)
    except OverflowError:
        return None

    if not math.isfinite(supply):
        return None
    return supply


class MintService:
    """Handles read-only mint lookups on Solana"""

    def __init__(self, config: Dict[str, Any], session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize Mint Service

        Args:
            config: Bot configuration dictionary
            session: Shared HTTP session (created on first use if omitted)
        """
        self.rpc_url = config.get('rpc_url', SOLANA_RPC)
        self.commitment = config.get('commitment', 'confirmed')
        self.timeout = aiohttp.ClientTimeout(total=config.get('request_timeout'))
        self.session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self.session

    async def _get_parsed_account_info(self, mint: Pubkey) -> Optional[Dict[str, Any]]:
        payload = {
            'jsonrpc': '2.0',
            'id': 1,
            'method': 'getAccountInfo',
            'params': [
                str(mint),
                {
                    'encoding': 'jsonParsed',
                    'commitment': self.commitment
                }
            ]
        }

        async with self._get_session().post(self.rpc_url, json=payload) as response:
            response.raise_for_status()
            result = await response.json()

        if 'error' in result:
            logger.warning(f"RPC error: {result['error']}")
            return None

        return (result.get('result') or {}).get('value')

    async def get_mint_info(self, token_address: str) -> Optional[MintInfo]:
        """
        Get decimals and supply for a mint address

        Expected failures (bad address, RPC/transport error, account that is
        not a mint) are logged as warnings and reported as None.

        Args:
            token_address: Mint address (base58 public key)

        Returns:
            MintInfo, or None if unavailable
        """
        try:
            mint = Pubkey.from_string(token_address)
        except ValueError as e:
            logger.warning(f"Could not fetch decimals/supply: invalid mint address {token_address}: {e}")
            return None

        try:
            account = await self._get_parsed_account_info(mint)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"Could not fetch decimals/supply: {e}")
            return None

        data = (account or {}).get('data')
        parsed = data.get('parsed') if isinstance(data, dict) else None
        info = parsed.get('info') if isinstance(parsed, dict) else None
        if not info or parsed.get('type', 'mint') != 'mint':
            logger.warning(f"Could not fetch decimals/supply: {token_address} is not a parsed mint account")
            return None

        decimals = info.get('decimals')
        try:
            raw_supply = int(info.get('supply') or 0)
        except (TypeError, ValueError):
            logger.warning(f"Could not parse supply for {token_address}: {info.get('supply')!r}")
            return MintInfo(decimals=decimals, supply=None)

        return MintInfo(
            decimals=decimals,
            supply=scale_supply(raw_supply, decimals)
        )

    async def close(self):
        """Close the HTTP session"""
        if self.session is not None and not self.session.closed:
            await self.session.close()
