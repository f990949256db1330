# stockroom/services/session_service.py
import re

import redis

from stockroom.domain.errors import ValidationError
from stockroom.domain.schemas import SessionUser
from stockroom.utils.retry import redis_retry
from stockroom.utils.settings import DEMO_EMPLOYEE_CODE, DEFAULT_PASSWORD, MIN_PASSWORD_LENGTH
from stockroom.utils.logging import get_logger

logger = get_logger(__name__)

USER_KEY = "user"
PASSWORD_KEY = "userPassword"

#6 cyfr + 1 mala litera
EMPLOYEE_CODE_RE = re.compile(r"^\d{6}[a-z]$")

DEMO_USER = SessionUser(
    id=1,
    name="Admin User",
    email="admin@example.com",
    employee_code=DEMO_EMPLOYEE_CODE,
    role="admin",
    section="IT",
)


class SessionService:
    """
    Sesja demo: jeden uzytkownik i jedno haslo jako wpisy klucz/wartosc w redis.
    To nie jest model bezpieczenstwa, tylko atrybucja wydan.
    """

    def __init__(self, client: redis.Redis):
        self.redis = client

    @redis_retry()
    def current_user(self) -> SessionUser | None:
        raw = self.redis.get(USER_KEY)
        if not raw:
            return None
        return SessionUser.model_validate_json(raw)

    @redis_retry()
    def _stored_password(self) -> str:
        return self.redis.get(PASSWORD_KEY) or DEFAULT_PASSWORD

    @redis_retry()
    def login(self, employee_code: str, password: str) -> SessionUser:
        employee_code = (employee_code or "").strip()
        if not employee_code or not (password or "").strip():
            raise ValidationError("Employee code and password are required")

        if not EMPLOYEE_CODE_RE.match(employee_code):
            raise ValidationError("Employee code must be 6 digits followed by a lowercase letter")

        if employee_code != DEMO_USER.employee_code or password != self._stored_password():
            logger.warning(f"Failed login for employee code {employee_code}")
            raise PermissionError("Invalid credentials")

        self.redis.set(USER_KEY, DEMO_USER.model_dump_json())
        logger.info(f"User {DEMO_USER.id} logged in")
        return DEMO_USER

    @redis_retry()
    def logout(self) -> None:
        self.redis.delete(USER_KEY)
        logger.info("Session closed")

    @redis_retry()
    def change_password(self, current_password: str, new_password: str, confirm_password: str) -> None:
        if self.current_user() is None:
            raise PermissionError("Login required to change the password")

        if not current_password or not new_password or not confirm_password:
            raise ValidationError("All fields are required")

        if new_password != confirm_password:
            raise ValidationError("New passwords do not match")

        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")

        if current_password != self._stored_password():
            logger.warning("Password change rejected: wrong current password")
            raise PermissionError("Current password is incorrect")

        self.redis.set(PASSWORD_KEY, new_password)
        logger.info("Password changed")
