# stockroom/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

#domyslnie baza w pamieci, stan zyje tyle co proces
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "0") == "1"
COMMIT_LOCK_TTL_SECONDS = int(os.getenv("COMMIT_LOCK_TTL_SECONDS", 10))

DEMO_EMPLOYEE_CODE = os.getenv("DEMO_EMPLOYEE_CODE", "123456a")
DEFAULT_PASSWORD = os.getenv("DEFAULT_PASSWORD", "password")
MIN_PASSWORD_LENGTH = int(os.getenv("MIN_PASSWORD_LENGTH", 6))

SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "1") == "1"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
