import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "UNSET")
GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL",
    "https://generativelanguage.googleapis.com",
)

# Preference order: versions outer, models inner
GEMINI_API_VERSIONS = _csv(os.getenv("GEMINI_API_VERSIONS", "v1beta,v1"))
GEMINI_MODELS = _csv(
    os.getenv(
        "GEMINI_MODELS",
        ",".join([
            "gemini-flash-lite-latest",
            "gemini-pro-latest",
            "gemini-3-flash-preview",
            "gemini-2.5-flash-lite",
            "gemini-2.0-flash-exp",
            "gemini-1.5-flash-latest",
            "gemini-1.5-pro-latest",
        ]),
    )
)

GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "60"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./aiuml.db")

CORS_ORIGINS = _csv(os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
