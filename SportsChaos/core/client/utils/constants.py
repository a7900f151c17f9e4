"""
Constants for the SportsChaos session client.
"""

# Remote auth service
DEFAULT_BASE_URL = "https://auth-service-production-0c22.up.railway.app/"
LOGIN_ENDPOINT = "api/auth/login"
REGISTER_ENDPOINT = "api/auth/register"
VALIDATE_ENDPOINT = "api/auth/validate"

# Timeout settings, seconds
CONNECT_TIMEOUT_SECONDS = 30
READ_TIMEOUT_SECONDS = 30
WRITE_TIMEOUT_SECONDS = 30

# Credential store
DEFAULT_STORE_FILE = "auth_prefs.json"
TOKEN_KEY = "jwt_token"
USER_ID_KEY = "user_id"
USER_EMAIL_KEY = "user_email"
USER_NAME_KEY = "user_name"
USER_ROLE_KEY = "user_role"
STORE_KEYS = (TOKEN_KEY, USER_ID_KEY, USER_EMAIL_KEY, USER_NAME_KEY, USER_ROLE_KEY)

DEFAULT_ROLE = "USER"
MIN_PASSWORD_LENGTH = 6

# User-facing messages
LOGIN_FAILED_FALLBACK = "Login failed. Please try again."
REGISTER_FAILED_FALLBACK = "Registration failed. Please try again."
