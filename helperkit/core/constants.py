"""Core toolkit constants."""

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Security and redaction
REDACTED = "[REDACTED]"
MASK_CHAR = "*"

# HTTP headers
AUTHORIZATION_HEADER = "Authorization"
CORRELATION_ID_HEADER = "X-Correlation-ID"
BEARER_SCHEME = "Bearer"

# Fallback text for message lookups that find nothing
UNKNOWN_MESSAGE = "Unknown message"
