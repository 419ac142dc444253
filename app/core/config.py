import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./turf_booking.db")

    # JWT
    JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

    # Cache (optional)
    REDIS_URL = os.getenv("REDIS_URL")
    DIRECTORY_CACHE_TTL = int(os.getenv("DIRECTORY_CACHE_TTL", 60))

    # Logging
    LOG_DIR = os.getenv("LOG_DIR", "logs")

    # Manual UPI payment
    UPI_PAYEE_ID = os.getenv("UPI_PAYEE_ID", "9479719961-ga25@axl")
    UPI_PAYEE_NAME = os.getenv("UPI_PAYEE_NAME", "GameZoneXP")
    PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "INR")

    # Operating window for generated slot templates (hours, close is exclusive)
    SLOT_OPEN_HOUR = int(os.getenv("SLOT_OPEN_HOUR", 9))
    SLOT_CLOSE_HOUR = int(os.getenv("SLOT_CLOSE_HOUR", 22))


settings = Settings()
