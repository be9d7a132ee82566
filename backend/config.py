"""Runtime settings, read from the environment (and a .env file when present)."""

import os

from dotenv import load_dotenv

load_dotenv()

# Store DB in data/ directory (gitignored)
_DB_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")

DATABASE_URL = os.getenv("DIVIDERFORGE_DATABASE_URL", f"sqlite:///{os.path.join(_DB_DIR, 'dividerforge.db')}")
FRONTEND_URL = os.getenv("FRONTEND_URL")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Requests per client per minute; divider search is CPU-bound and gets its own budget
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "60"))
SEARCH_RATE_LIMIT_PER_MINUTE = int(os.getenv("SEARCH_RATE_LIMIT_PER_MINUTE", "10"))

# Upper bound on max_results accepted by /api/divider/search
MAX_RESULTS_LIMIT = int(os.getenv("MAX_RESULTS_LIMIT", "500"))
