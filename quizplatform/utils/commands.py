"""Module for setting up bot commands."""
from aiogram import Bot
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import BotCommand, BotCommandScopeAllPrivateChats, BotCommandScopeDefault
from loguru import logger

PRIVATE_COMMANDS = [
    BotCommand(command="start", description="Botni ishga tushirish"),
    BotCommand(command="help", description="Yordam olish"),
    BotCommand(command="code", description="Tasdiqlash kodini olish"),
    BotCommand(command="results", description="Test natijalarini ko'rish"),
]


async def set_bot_commands(bot: Bot):
    """
    Sets up the commands for the bot in the Telegram UI.

    Clears previously set commands, then makes the command list
    visible only in private chats with the bot.
    """
    try:
        await bot.delete_my_commands(scope=BotCommandScopeDefault())
        await bot.delete_my_commands(scope=BotCommandScopeAllPrivateChats())
        logger.info("Старые команды бота очищены")
    except TelegramBadRequest as e:
        logger.warning(f"Ошибка при очистке команд: {e}")

    try:
        await bot.set_my_commands(PRIVATE_COMMANDS, scope=BotCommandScopeAllPrivateChats())
        logger.info("Команды бота настроены для личных сообщений")
    except TelegramBadRequest as e:
        logger.error(f"Не удалось установить команды бота: {e}")
