"""
OptoScreen — Configuration
==========================
Centralised runtime settings. Values come from the environment, with a
project-level .env file loaded first when present.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")

APP_VERSION = "1.0.0"

# ── Logging ─────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("OPTOSCREEN_LOG_LEVEL", "INFO")
LOG_FILE: str = os.getenv("OPTOSCREEN_LOG_FILE", "")         # empty = console only

# ── Evaluation defaults ─────────────────────────────────────────────────
DEFAULT_AGE: float = float(os.getenv("OPTOSCREEN_DEFAULT_AGE", "30"))
DEFAULT_RULE_PROFILE: str = os.getenv("OPTOSCREEN_RULE_PROFILE", "full")

# ── HTTP ────────────────────────────────────────────────────────────────
ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("OPTOSCREEN_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

ADVISORY_DISCLAIMER = (
    "These results are advisory screening output only. They do not replace "
    "a full binocular vision assessment by a qualified eye care practitioner."
)
