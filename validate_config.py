#!/usr/bin/env python3
"""
Валидация конфигурации тестовой платформы

Проверяет:
- Наличие .env
- Формат токена бота и реальное подключение к Telegram
- Секрет JWT и пароль администратора
"""

import os
import re
import sys

import requests

DEFAULT_JWT_SECRET = "your-secret-key"
DEFAULT_ADMIN_PASSWORD = "admin123"


def validate_env_file():
    """Проверяем наличие и формат .env файла"""
    if not os.path.exists('.env'):
        print("❌ .env file not found!")
        print("Please create .env file with your configuration")
        return False

    env_vars = {}
    with open('.env', 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#') and '=' in line:
                key, value = line.split('=', 1)
                env_vars[key.strip()] = value.strip().strip('"').strip("'")

    if not env_vars.get('BOT_TOKEN'):
        print("❌ Missing or empty BOT_TOKEN in .env file")
        return False

    return env_vars


def validate_telegram_token(token):
    """Проверяем формат и работоспособность Telegram токена"""
    if not re.match(r'^\d+:[a-zA-Z0-9_-]+$', token):
        print("❌ Invalid Telegram bot token format")
        print("   Should be like: 123456789:ABCdefGHI...")
        return False

    try:
        response = requests.get(f'https://api.telegram.org/bot{token}/getMe', timeout=10)
        if response.status_code == 200:
            data = response.json()
            if data.get('ok'):
                bot_info = data.get('result', {})
                print(f"✅ Bot connected successfully: @{bot_info.get('username', 'unknown')}")
                return bot_info.get('username') or True
            print("❌ Invalid bot token (API returned error)")
            return False
        elif response.status_code == 401:
            print("❌ Invalid bot token (401 Unauthorized)")
            return False
        else:
            print(f"❌ Telegram API error: {response.status_code}")
            return False
    except requests.exceptions.RequestException as e:
        print(f"❌ Network error connecting to Telegram: {e}")
        return False


def validate_bot_username(configured, actual):
    """TELEGRAM_BOT_USERNAME должен совпадать с ботом, которому принадлежит токен"""
    if not configured:
        print("⚠️  TELEGRAM_BOT_USERNAME is not set; the website will not show the bot link")
        return True
    if isinstance(actual, str) and configured.lstrip('@').lower() != actual.lower():
        print(f"❌ TELEGRAM_BOT_USERNAME is @{configured.lstrip('@')}, but the token belongs to @{actual}")
        return False
    print("✅ TELEGRAM_BOT_USERNAME is set")
    return True


def validate_secrets(env_vars):
    """Секреты по умолчанию допустимы только для локальной разработки"""
    ok = True
    secret = env_vars.get('JWT_SECRET', DEFAULT_JWT_SECRET)
    if secret == DEFAULT_JWT_SECRET:
        print("⚠️  JWT_SECRET uses the default value; set a random secret in production")
    elif len(secret) < 16:
        print("❌ JWT_SECRET is too short (at least 16 characters)")
        ok = False
    else:
        print("✅ JWT_SECRET is set")

    if env_vars.get('ADMIN_PASSWORD', DEFAULT_ADMIN_PASSWORD) == DEFAULT_ADMIN_PASSWORD:
        print("⚠️  ADMIN_PASSWORD uses the default value")
    return ok


def main():
    print("🔍 Quiz Platform - Configuration Validation")
    print("=" * 50)

    env_vars = validate_env_file()
    if not env_vars:
        sys.exit(1)

    validation_failed = False

    print("\n🔍 Validating configuration...")

    bot_username = validate_telegram_token(env_vars['BOT_TOKEN'])
    if not bot_username:
        validation_failed = True

    if not validate_bot_username(env_vars.get('TELEGRAM_BOT_USERNAME', ''), bot_username):
        validation_failed = True

    if not validate_secrets(env_vars):
        validation_failed = True

    if validation_failed:
        print("\n❌ Configuration validation failed!")
        print("Please fix the issues above before running the bot.")
        sys.exit(1)
    else:
        print("\n✅ All configuration checks passed!")
        print("Bot and API are ready to start.")


if __name__ == "__main__":
    main()
