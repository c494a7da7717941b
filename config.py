"""
Service configuration read from the environment (and a local .env file).
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ============================================================
# GENERATOR (OpenAI)
# ============================================================

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_IMAGE_MODEL = os.getenv("OPENAI_IMAGE_MODEL", "gpt-image-1")

# Single attempt, bounded wait; the fallback recipes cover everything else
GENERATOR_TIMEOUT_SECONDS = float(os.getenv("GENERATOR_TIMEOUT_SECONDS", "20"))
GENERATOR_TEMPERATURE = float(os.getenv("GENERATOR_TEMPERATURE", "0.7"))
GENERATOR_MAX_TOKENS = int(os.getenv("GENERATOR_MAX_TOKENS", "700"))

IMAGE_COUNT = int(os.getenv("IMAGE_COUNT", "2"))
IMAGE_SIZE = os.getenv("IMAGE_SIZE", "512x512")

# ============================================================
# MODELS
# ============================================================

# The three root splits tie on Gini gain; with this seed sklearn settles on
# the protein axis, so protein outranks fiber and fat at the root
TREE_RANDOM_SEED = 1

# Report metrics computed from the training sets instead of the display constants
LIVE_METRICS = _env_bool("LIVE_METRICS", False)

# ============================================================
# SERVER
# ============================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
