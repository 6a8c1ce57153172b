from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./groundbook.db"

    JWT_SECRET: str = "cricket_booking_secret_key"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    UPLOAD_DIR: str = "uploads"
    LOG_DIR: str = "logs"
    MAX_GROUND_IMAGES: int = 5

    REDIS_URL: Optional[str] = None
    GROUNDS_CACHE_TTL: int = 60

    # Cloudinary is used for uploads only when all three are set
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None

    # Bootstrap admin, created on startup if missing
    ADMIN_NAME: str = "Administrator"
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_PHONE: str = ""

    UPI_TRANSACTION_NOTE: str = "Cricket Ground Booking"
    UPI_CURRENCY: str = "INR"
    QR_RENDER_URL: str = "https://api.qrserver.com/v1/create-qr-code/"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cloudinary_enabled(self) -> bool:
        return bool(
            self.CLOUDINARY_CLOUD_NAME
            and self.CLOUDINARY_API_KEY
            and self.CLOUDINARY_API_SECRET
        )


settings = Settings()
