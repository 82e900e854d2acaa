"""
Хэширование паролей и генерация кодов.

Пароли хэшируются argon2 (argon2-cffi), коды и идентификаторы
генерируются через secrets/uuid.
"""

import secrets
import uuid

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_password_hasher = PasswordHasher()

CODE_MIN = 100000
CODE_MAX = 999999


def hash_password(plain_password: str) -> str:
    return _password_hasher.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """True, если пароль подходит; False при любом несовпадении или битом хэше."""
    try:
        return _password_hasher.verify(password_hash, plain_password)
    except (VerificationError, InvalidHashError):
        return False


def generate_verification_code() -> str:
    """Равномерно случайный шестизначный код 100000–999999."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def new_id() -> str:
    return str(uuid.uuid4())
