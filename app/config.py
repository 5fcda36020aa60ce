import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

# Frontend base URL for CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", FRONTEND_URL).split(",")
    if origin.strip()
]

# OpenAI Configuration
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
OPENAI_MAX_TOKENS = int(os.getenv("OPENAI_MAX_TOKENS", "2000"))
OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.7"))

# Fallback streaming - server relay paces 100-char fragments every 50ms,
# the caller-side fallback applies 50-char fragments every 100ms
FALLBACK_CHUNK_SIZE = int(os.getenv("FALLBACK_CHUNK_SIZE", "100"))
FALLBACK_CHUNK_DELAY = float(os.getenv("FALLBACK_CHUNK_DELAY", "0.05"))
CLIENT_FALLBACK_CHUNK_SIZE = int(os.getenv("CLIENT_FALLBACK_CHUNK_SIZE", "50"))
CLIENT_FALLBACK_INTERVAL = float(os.getenv("CLIENT_FALLBACK_INTERVAL", "0.1"))

# Contract storage: "memory" (process-local) or "redis"
CONTRACT_STORAGE_BACKEND = os.getenv("CONTRACT_STORAGE_BACKEND", "memory").lower()

# Redis Configuration (used when CONTRACT_STORAGE_BACKEND=redis)
REDIS_URL = os.getenv("REDIS_URL")
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD", None)
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_SSL = os.getenv("REDIS_SSL", "false").lower() == "true"
