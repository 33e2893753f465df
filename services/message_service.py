"""
Message Service
Builds the token info reply and its inline keyboard (no I/O)
"""

import math
from html import escape
from typing import Optional, Tuple

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from .callback_data import CallbackData
from .mint_service import MintInfo
from .token_service import TokenPair

NOT_AVAILABLE = 'N/A'

NO_DATA_MESSAGE = "❌ No token data found for this address."
ERROR_MESSAGE = "⚠️ Error fetching token info. Try again later."
COPY_CONFIRMATION = "✅ CA copied!"

HELP_MESSAGE = (
    "🪙 <b>Solana Token Info Bot</b>\n\n"
    "Paste a Solana token contract address and I'll reply with its price, "
    "liquidity, 24h volume, decimals and supply, plus a chart link."
)


def format_price(value: float) -> str:
    """Fixed 6 decimal places"""
    return f"{value:.6f}"


def format_number(value: Optional[float]) -> str:
    """
    Group thousands and keep at most 3 fraction digits

    Args:
        value: Number to format

    Returns:
        Formatted string, e.g. 5000000 -> "5,000,000", or N/A
    """
    if value is None or not math.isfinite(value):
        return NOT_AVAILABLE

    text = f"{value:,.3f}"
    return text.rstrip('0').rstrip('.')


def _usd(value: Optional[float]) -> str:
    formatted = format_number(value)
    return formatted if formatted == NOT_AVAILABLE else f"${formatted}"


def chart_url(pair: TokenPair, token_address: str) -> str:
    return pair.url or f"https://dexscreener.com/solana/{token_address}"


def build_keyboard(token_address: str, url: str) -> InlineKeyboardMarkup:
    """Copy CA + View Chart buttons"""
    keyboard = [
        [
            InlineKeyboardButton("📋 Copy CA", callback_data=CallbackData.copy(token_address).encode()),
            InlineKeyboardButton("📊 View Chart", url=url)
        ]
    ]
    return InlineKeyboardMarkup(keyboard)


def build_token_message(
    pair: TokenPair,
    mint_info: Optional[MintInfo],
    token_address: str
) -> Tuple[str, InlineKeyboardMarkup]:
    """
    Build the token info message

    Args:
        pair: Trading pair snapshot
        mint_info: On-chain mint metadata, or None if unavailable
        token_address: Address the user sent

    Returns:
        (HTML text, inline keyboard)
    """
    decimals = NOT_AVAILABLE
    supply = NOT_AVAILABLE
    if mint_info is not None:
        if mint_info.decimals is not None:
            decimals = str(mint_info.decimals)
        supply = format_number(mint_info.supply)

    url = chart_url(pair, token_address)

    message = (
        f"<b>{escape(pair.symbol)}</b> - {escape(pair.name)}\n\n"
        f"💰 <b>Price:</b> ${format_price(pair.price_usd)}\n"
        f"💎 <b>Price (SOL):</b> {format_price(pair.price_native)} SOL\n"
        f"💧 <b>Liquidity:</b> {_usd(pair.liquidity_usd)}\n"
        f"📊 <b>24h Volume:</b> {_usd(pair.volume_24h)}\n"
        f"🔢 <b>Decimals:</b> {decimals}\n"
        f"📦 <b>Supply:</b> {supply}\n\n"
        f"🔗 <a href=\"{escape(url)}\">View Chart</a>"
    )

    if pair.logo_url:
        message += f"\n<a href=\"{escape(pair.logo_url)}\">🖼️ Token Logo</a>"

    return message, build_keyboard(token_address, url)


def build_copy_message(token_address: str) -> str:
    """Contract address as monospace text for manual copying"""
    return f"📋 <b>Contract Address:</b>\n<code>{escape(token_address)}</code>"
