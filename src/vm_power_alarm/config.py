import logging
import os
from typing import Tuple
from urllib.parse import urlparse

# Load .env before any setting is read
try:
    from dotenv import find_dotenv, load_dotenv
    load_dotenv(find_dotenv(usecwd=True))
except ImportError:
    pass

logger = logging.getLogger("vm-power-alarm")

# vCenter configuration
VCENTER_URL = os.environ.get("VCENTER_URL", os.environ.get("VCENTER_HOST", ""))
VCENTER_USER = os.environ.get("VCENTER_USER", "")
VCENTER_PASSWORD = os.environ.get("VCENTER_PASSWORD", "")
VCENTER_PORT = int(os.environ.get("VCENTER_PORT", "443"))
VCENTER_DISABLE_SSL_VERIFY = os.environ.get(
    "VCENTER_DISABLE_SSL_VERIFY", "true"
).lower() in ("1", "true", "yes")

# Logging configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.environ.get("LOG_FILE", "vm-power-alarm.log")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_SDK_PATH = "/sdk"


def parse_service_url(url: str, default_port: int = VCENTER_PORT) -> Tuple[str, int, str]:
    """
    Split a web service URL into the pieces SmartConnect expects.

    Accepts either a full URL (``https://vc.example.com:8443/sdk``) or a bare
    host name (``vc.example.com``).

    Returns:
        Tuple of (host, port, path).
    """
    if "://" not in url:
        url = f"https://{url}"
    parsed = urlparse(url)
    host = parsed.hostname or ""
    port = parsed.port or default_port
    path = parsed.path if parsed.path not in ("", "/") else DEFAULT_SDK_PATH
    return host, port, path


# Validate required configuration
def validate_config(url: str, user: str, password: str) -> bool:
    """Validate that all required connection parameters are set."""
    if not url:
        logger.error("Error: --url is not given and VCENTER_URL is not set")
        return False
    try:
        host = parse_service_url(url)[0]
    except ValueError as e:
        logger.error(f"Error: invalid URL '{url}': {e}")
        return False
    if not host:
        logger.error(f"Error: could not determine a host from URL '{url}'")
        return False
    if not user:
        logger.error("Error: --username is not given and VCENTER_USER is not set")
        return False
    if not password:
        logger.error("Error: --password is not given and VCENTER_PASSWORD is not set")
        return False

    return True
