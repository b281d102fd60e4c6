import os
from pathlib import Path

from dotenv import load_dotenv

# Load from .env if it exists (useful for local development)
load_dotenv()

# Provider selection used by the HTTP API and the batch runner
AI_PROVIDER = os.getenv("AI_PROVIDER", "openai").strip().lower()
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
XAI_API_KEY = os.getenv("XAI_API_KEY", "")

# Models per provider
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-pro")
GROK_MODEL = os.getenv("GROK_MODEL", "grok-2-1212")

OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
)
GROK_BASE_URL = os.getenv("GROK_BASE_URL", "https://api.x.ai/v1")

TIMEOUT = int(os.getenv("REQUEST_TIMEOUT_SECONDS", "40"))

# Structured generation
STRUCTURED_MAX_ATTEMPTS = int(os.getenv("STRUCTURED_MAX_ATTEMPTS", "3"))
RETRY_BASE_DELAY_SECONDS = float(os.getenv("RETRY_BASE_DELAY_SECONDS", "1.0"))
MAX_FIELD_LENGTH = int(os.getenv("MAX_FIELD_LENGTH", "500"))

# Batch analysis
MAX_BATCH_URLS = int(os.getenv("MAX_BATCH_URLS", "10"))

LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "INFO").upper()

# Project paths
ROOT_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT_DIR / "data"
INPUT_DIR = DATA_DIR / "input"
OUTPUT_DIR = DATA_DIR / "output"
INPUT_PATH = os.environ.get("INPUT_PATH", str(INPUT_DIR / "urls.csv"))

API_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "grok": "XAI_API_KEY",
}


def api_key_for(provider: str) -> str:
    """Return the configured key for ``provider`` (empty string when unset)."""
    env_name = API_KEY_ENV.get(provider.strip().lower())
    if not env_name:
        return ""
    return os.getenv(env_name, "")
