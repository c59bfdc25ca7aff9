"""Default configuration values for the Stackr SDK."""

DEFAULT_BASE_URL = "https://api.stackr.lat/v1"
DEFAULT_TIMEOUT_MS = 30_000
USER_AGENT = "stackr-sdk-python/1.0.0"

# Part filename the API expects for deployment archives
DEFAULT_UPLOAD_FILENAME = "app.zip"
UPLOAD_CONTENT_TYPE = "application/zip"

# Environment variable read by get_token() and the CLI
TOKEN_ENV_VAR = "STACKR_TOKEN"
BASE_URL_ENV_VAR = "STACKR_BASE_URL"
