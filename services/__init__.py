"""
Services Package for the Solana Token Info Bot

Each service handles a specific concern:
- TokenService: Trading pair lookup on DexScreener
- MintService: Mint decimals/supply lookup on Solana RPC
- CallbackData: Inline button callback protocol
- message_service: Reply text and keyboard formatting
"""

from .callback_data import CallbackAction, CallbackData
from .mint_service import MintInfo, MintService
from .token_service import TokenPair, TokenService

__all__ = [
    'CallbackAction',
    'CallbackData',
    'MintInfo',
    'MintService',
    'TokenPair',
    'TokenService',
]
