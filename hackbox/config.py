"""Configuration for Hackbox."""

import os
from pathlib import Path

# Paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("HACKBOX_DATA_DIR", BASE_DIR / "data"))
DB_PATH = DATA_DIR / "hackbox.db"

# Sandbox limits (per test case invocation)
SANDBOX_TIMEOUT_SECONDS = float(os.getenv("SANDBOX_TIMEOUT", "5"))
SANDBOX_MEMORY_MB = int(os.getenv("SANDBOX_MEMORY_MB", "256"))
SANDBOX_MAX_OUTPUT_BYTES = int(os.getenv("SANDBOX_MAX_OUTPUT", str(64 * 1024)))  # 64KB

# Progress
XP_PER_LEVEL = int(os.getenv("XP_PER_LEVEL", "200"))

# Admin surface
ADMIN_API_KEY = os.getenv("ADMIN_API_KEY", "")

# API
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
