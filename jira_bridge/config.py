
import os
from pathlib import Path

from dotenv import load_dotenv

# Load jira_bridge/.env so local runs pick up credentials and DSNs
load_dotenv(dotenv_path=(Path(__file__).parent / ".env"))

# Jira site used to build browse links
JIRA_BASE_URL = os.getenv("JIRA_BASE_URL", "").rstrip("/")

# Sentry error reporting
SENTRY_DSN = os.getenv("SENTRY_DSN")
SENTRY_ENVIRONMENT = os.getenv("SENTRY_ENVIRONMENT", "production")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Max characters of an HTTP response body attached to error events
RESPONSE_BODY_LIMIT = int(os.getenv("RESPONSE_BODY_LIMIT", "255"))
