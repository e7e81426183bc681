"""
Конфигурация приложения.
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Настройки приложения."""

    # Database: без дефолта, приложение не запустится без БД
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # FastAPI
    APP_TITLE: str = "Reminder Dispatch Service"

    # API Security: без дефолтов
    API_KEY: str = os.getenv("API_KEY", "")

    # CORS: по умолчанию пустой (ничего не разрешено)
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "")

    # Push gateway (Expo): открытый endpoint, ключ не нужен
    PUSH_GATEWAY_URL: str = os.getenv(
        "PUSH_GATEWAY_URL", "https://exp.host/--/api/v2/push/send"
    )
    PUSH_GATEWAY_TIMEOUT: float = float(os.getenv("PUSH_GATEWAY_TIMEOUT", "30"))

    # Максимум строк за один цикл рассылки
    DISPATCH_BATCH_SIZE: int = int(os.getenv("DISPATCH_BATCH_SIZE", "200"))


settings = Settings()
