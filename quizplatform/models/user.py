from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from .base import DocumentModel


class UserRole(str, Enum):
    ADMIN = "admin"
    STUDENT = "student"


class User(DocumentModel):
    """
    Пользователь платформы. Для студентов id совпадает с userId
    запроса на верификацию, из которого он был создан.
    """

    id: str
    username: str
    password_hash: str
    name: str
    phone: Optional[str] = None
    role: UserRole = UserRole.STUDENT
    telegram: Optional[str] = None
    created_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def public_view(self) -> Dict[str, Any]:
        """Представление без хэша пароля."""
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "role": self.role.value,
        }

    def admin_view(self) -> Dict[str, Any]:
        """Карточка пользователя для списка в админке."""
        view = self.public_view()
        view.update({
            "telegram": self.telegram,
            "phone": self.phone,
            "createdAt": self.to_document()["createdAt"],
        })
        return view
