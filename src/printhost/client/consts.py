"""Constants used across the print host client.

How to use the most important parts:
- Import this module to reference timeouts, header names and the user-facing messages
  produced by the connectivity probe without hardcoding them in your application logic.
"""

APP_NAME = "printhost-client"
APP_AUTHOR = "printhost"

# Transport Defaults
DEFAULT_TIMEOUT = 30.0
UPLOAD_CHUNK_SIZE = 64 * 1024
MAX_ERROR_BODY = 256

API_KEY_HEADER = "X-Api-Key"

# Probe Messages
PARSE_ERROR_MESSAGE = "Could not parse server response"
MISMATCH_MESSAGE = "Mismatched type of print host: {}"
