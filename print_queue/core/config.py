# print_queue/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str) -> list:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    # --- API Info ---
    API_TITLE: str = "3D Print Queue API"
    API_DESCRIPTION: str = "Tracks 3D print orders from submission through completion and archiving."
    API_VERSION: str = "1.0.0"

    # --- Server Configuration ---
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "4000"))

    # --- Storage ---
    DATA_DIR: str = os.getenv("DATA_DIR", os.path.join(os.getcwd(), "data"))
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL", "sqlite:///" + os.path.join(DATA_DIR, "orders.db")
    )
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "0") == "1"

    # Flat-file store used before the database existed
    LEGACY_ORDERS_FILE: str = os.getenv(
        "LEGACY_ORDERS_FILE", os.path.join(DATA_DIR, "orders.json")
    )
    LEGACY_BACKUP_SUFFIX: str = os.getenv("LEGACY_BACKUP_SUFFIX", ".bak")

    # --- Static UI ---
    PUBLIC_DIR: str = os.getenv("PUBLIC_DIR", os.path.join(os.getcwd(), "public"))

    # --- Logging ---
    LOG_CONFIG_FILE: str = os.getenv("LOG_CONFIG_FILE", "logging.conf")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Empty list disables CORS entirely (UI is served same-origin)
    CORS_ORIGINS: list = _split_csv(os.getenv("CORS_ORIGINS", ""))


settings = Settings()
