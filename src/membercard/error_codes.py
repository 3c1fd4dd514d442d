"""Error codes for the member card client."""

from enum import Enum

class ErrorCode(Enum):
    """Enumeration of all possible error codes."""
    # API Errors
    REQUEST_FAILED = "request_failed"
    TIMEOUT = "timeout"
    
    # Data Errors
    INVALID_RESPONSE = "invalid_response"
    
    # Configuration Errors
    CONFIG_INVALID = "config_invalid"
    
    # Storage Errors
    STORAGE_ERROR = "storage_error"
