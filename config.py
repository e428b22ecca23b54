import os
import sys

from dotenv import load_dotenv

from enums.currency import Currency
from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)

# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    _runtime_env_str = os.environ.get("RUNTIME_ENVIRONMENT")
    if not _runtime_env_str:
        raise ValueError("RUNTIME_ENVIRONMENT environment variable is not set")
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(_runtime_env_str)
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    print(f"\n ERROR: Invalid RUNTIME_ENVIRONMENT configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_values)}", file=sys.stderr)
    print(f"Current value: {os.environ.get('RUNTIME_ENVIRONMENT', '(not set)')}", file=sys.stderr)
    print(f"\nAdd to .env: RUNTIME_ENVIRONMENT={valid_values[0]}\n", file=sys.stderr)
    sys.exit(1)

WEBAPP_HOST = os.environ.get("WEBAPP_HOST", "0.0.0.0")
WEBAPP_PORT = int(os.environ.get("WEBAPP_PORT")) if os.environ.get("WEBAPP_PORT") else 8000

DB_NAME = os.environ.get("DB_NAME", "marketplace.db")

# Authentication tokens are issued by the identity provider and signed with a shared secret.
# The API only verifies them, it never issues them to clients.
try:
    AUTH_TOKEN_SECRET = os.environ.get("AUTH_TOKEN_SECRET")
    if not AUTH_TOKEN_SECRET or len(AUTH_TOKEN_SECRET.strip()) == 0:
        raise ValueError("AUTH_TOKEN_SECRET environment variable is not set or empty")
    if len(AUTH_TOKEN_SECRET) < 32:
        raise ValueError(f"AUTH_TOKEN_SECRET must be at least 32 characters (got: {len(AUTH_TOKEN_SECRET)})")
except ValueError as e:
    print(f"\n ERROR: Invalid AUTH_TOKEN_SECRET configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Expected: random string of at least 32 characters", file=sys.stderr)
    print(f"Example: AUTH_TOKEN_SECRET=$(openssl rand -hex 32)\n", file=sys.stderr)
    sys.exit(1)

AUTH_TOKEN_MAX_AGE_SECONDS = int(os.environ.get("AUTH_TOKEN_MAX_AGE_SECONDS", "3600"))  # Default: 1 hour

# Secret for AES-256-GCM encryption of bitcoin address private keys
WALLET_KEY_SECRET = os.environ.get("WALLET_KEY_SECRET", "")

# Fallback when the request carries no supported Accept-Language (de, en)
LANGUAGE = os.environ.get("DEFAULT_LANGUAGE", "de")

# Parse CURRENCY with error handling
try:
    CURRENCY = Currency(os.environ.get("CURRENCY", "EUR"))
except ValueError as e:
    valid_currencies = [c.value for c in Currency]
    print(f"\n ERROR: Invalid CURRENCY configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_currencies)}", file=sys.stderr)
    print(f"Current value: {os.environ.get('CURRENCY', '(not set)')}\n", file=sys.stderr)
    sys.exit(1)

# Public price quote API (CoinGecko simple/price endpoint)
COINGECKO_API_URL = os.environ.get("COINGECKO_API_URL", "https://api.coingecko.com/api/v3")
PRICE_API_TIMEOUT_SECONDS = float(os.environ.get("PRICE_API_TIMEOUT_SECONDS", "10"))

# Cryptocurrency Decimal Precision Configuration
# BTC: 8 decimals = satoshi (1 BTC = 100,000,000 satoshi)
# LTC: 8 decimals = litoshi (1 LTC = 100,000,000 litoshi)
CRYPTO_DECIMAL_PLACES = {
    "BTC": int(os.environ.get("CRYPTO_DECIMALS_BTC", "8")),
    "LTC": int(os.environ.get("CRYPTO_DECIMALS_LTC", "8")),
}

# Privacy warning: where the "show security guide" action points to
PRIVACY_GUIDE_URL = os.environ.get("PRIVACY_GUIDE_URL", "/settings#privacy-guide")

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask sensitive data in logs

# Log Retention: Environment-specific defaults
# Dev: keep 30 days for debugging
# Prod: Use 5 days default to save disk space
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "30"))
else:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "5"))

# HTTP Security Configuration
SECURITY_HEADERS_ENABLED = os.environ.get("SECURITY_HEADERS_ENABLED", "true") == "true"
HSTS_ENABLED = os.environ.get("HSTS_ENABLED", "false") == "true"  # Enable HSTS (only for HTTPS)
CSP_ENABLED = os.environ.get("CSP_ENABLED", "true") == "true"  # Restrictive CSP for JSON responses
CORS_ALLOWED_ORIGINS = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",") if os.environ.get("CORS_ALLOWED_ORIGINS") else []
