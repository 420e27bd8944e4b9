"""API-related constants."""

# HTTP Status Codes
HTTP_422_UNPROCESSABLE = 422
HTTP_500_INTERNAL_SERVER_ERROR = 500

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"
