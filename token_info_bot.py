"""
Solana Token Info Bot
Replies to a pasted token contract address with DexScreener market data
and on-chain decimals/supply
"""

import os
import sys
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from telegram import Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import Application, CommandHandler, CallbackQueryHandler, ContextTypes, MessageHandler, filters
from dotenv import load_dotenv

from services import CallbackAction, CallbackData, MintService, TokenService
from services.message_service import (
    COPY_CONFIRMATION,
    ERROR_MESSAGE,
    HELP_MESSAGE,
    NO_DATA_MESSAGE,
    build_copy_message,
    build_token_message,
)
from services.mint_service import SOLANA_RPC
from services.token_service import DEXSCREENER_BASE_URL

# Setup logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=logging.INFO
)
# httpx logs request URLs, which contain the bot token
logging.getLogger('httpx').setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

load_dotenv()

CONFIG_FILE = Path('config.json')

# New text messages only; edits of earlier messages are not looked up again
ADDRESS_MESSAGE_FILTER = filters.UpdateType.MESSAGE & filters.TEXT & ~filters.COMMAND

DEFAULT_CONFIG = {
    'rpc_url': SOLANA_RPC,
    'dexscreener_base_url': DEXSCREENER_BASE_URL,
    'min_address_length': 30,
    'commitment': 'confirmed',
    'request_timeout': 10,
    'disable_web_page_preview': False,
}


def load_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load bot configuration from defaults, config.json and the environment"""
    config_file = config_file or CONFIG_FILE
    config = dict(DEFAULT_CONFIG)

    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                overrides = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read {config_file}: {e}. Using default configuration.")
        else:
            if isinstance(overrides, dict):
                config.update(overrides)
            else:
                logger.error(f"{config_file} must contain a JSON object. Using default configuration.")

    config['bot_token'] = os.getenv('TELEGRAM_BOT_TOKEN') or os.getenv('BOT_TOKEN')
    config['rpc_url'] = os.getenv('SOLANA_RPC') or os.getenv('RPC_URL') or config['rpc_url']
    return config


class TokenInfoBot:
    """
    Token info bot

    Delegates lookups to injected services:
    - TokenService: DexScreener trading pair
    - MintService: Solana mint decimals/supply
    """

    def __init__(self, config: Dict[str, Any], token_service: TokenService, mint_service: MintService):
        self.config = config
        self.token_service = token_service
        self.mint_service = mint_service
        self.min_address_length = config.get('min_address_length', DEFAULT_CONFIG['min_address_length'])

    def extract_candidate_address(self, text: Optional[str]) -> Optional[str]:
        """Trimmed text if it is long enough to look like an address"""
        text = (text or '').strip()
        if len(text) < self.min_address_length:
            return None
        return text

    # ============================================================
    # COMMANDS
    # ============================================================

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Handle /start and /help"""
        await context.bot.send_message(
            chat_id=update.effective_chat.id,
            text=HELP_MESSAGE,
            parse_mode=ParseMode.HTML
        )

    # ============================================================
    # MESSAGE FLOW
    # ============================================================

    async def handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Look up a pasted contract address and reply with token info"""
        message = update.effective_message
        token_address = self.extract_candidate_address(message.text if message else None)
        if token_address is None:
            return

        chat_id = update.effective_chat.id

        try:
            pair = await self.token_service.fetch_pair(token_address)
            if pair is None:
                await context.bot.send_message(chat_id=chat_id, text=NO_DATA_MESSAGE)
                return

            mint_info = await self.mint_service.get_mint_info(token_address)

            text, reply_markup = build_token_message(pair, mint_info, token_address)
            await context.bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=ParseMode.HTML,
                disable_web_page_preview=self.config.get('disable_web_page_preview', False),
                reply_markup=reply_markup
            )

        except Exception as e:
            logger.error(f"Error in message handler for {token_address}: {e}", exc_info=True)
            try:
                await context.bot.send_message(chat_id=chat_id, text=ERROR_MESSAGE)
            except TelegramError as send_error:
                logger.error(f"Could not send error message to {chat_id}: {send_error}")

    # ============================================================
    # CALLBACK FLOW
    # ============================================================

    async def button_handler(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Handle inline button callbacks"""
        query = update.callback_query

        try:
            callback = CallbackData.decode(query.data)

            if callback is None or callback.action is not CallbackAction.COPY:
                await query.answer()
                return

            await query.answer(COPY_CONFIRMATION)
            await context.bot.send_message(
                chat_id=query.message.chat.id,
                text=build_copy_message(callback.payload),
                parse_mode=ParseMode.HTML
            )

        except Exception as e:
            logger.warning(f"Callback handler error: {e}", exc_info=True)

    async def close(self):
        """Release upstream HTTP sessions"""
        await self.token_service.close()
        await self.mint_service.close()


# ============================================================
# MAIN FUNCTION
# ============================================================

def build_application(config: Dict[str, Any]) -> Application:
    """Create the Telegram application with all handlers registered"""
    bot = TokenInfoBot(config, TokenService(config), MintService(config))

    async def post_shutdown(application: Application):
        await bot.close()

    application = Application.builder().token(config['bot_token']).post_shutdown(post_shutdown).build()

    application.add_handler(CommandHandler(["start", "help"], bot.start))
    application.add_handler(CallbackQueryHandler(bot.button_handler))
    application.add_handler(MessageHandler(ADDRESS_MESSAGE_FILTER, bot.handle_message))

    return application


def main():
    """Start the bot"""
    logger.info("Starting Solana Token Info Bot")

    config = load_config()
    if not config['bot_token']:
        logger.error("TELEGRAM_BOT_TOKEN not found in environment! Exiting.")
        sys.exit(1)

    application = build_application(config)

    logger.info(f"Using Solana RPC: {config['rpc_url']}")
    logger.info("Bot is running! Press Ctrl+C to stop.")
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == '__main__':
    main()
