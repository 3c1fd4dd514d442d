"""Logging filters."""

import logging
import re
from typing import Any


MASK = '***MASKED***'

BEARER_PATTERN = re.compile(r'(Bearer\s+)[^\s\'",}]+', re.IGNORECASE)

class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in logs."""

    def __init__(self, sensitive_fields: set[str] | None = None):
        """Initialize filter.
        
        Args:
            sensitive_fields: Set of field names to mask
        """
        super().__init__()
        self.sensitive_fields = sensitive_fields or {
            'authorization', 'bearer_token', 'token', 'password', 'secret', 'cookie'
        }

    def _mask_sensitive_data(self, obj: Any) -> Any:
        """Recursively mask sensitive data in object."""
        if isinstance(obj, dict):
            return {
                k: MASK if str(k).lower() in self.sensitive_fields else self._mask_sensitive_data(v)
                for k, v in obj.items()
            }
        if isinstance(obj, list):
            return [self._mask_sensitive_data(item) for item in obj]
        if isinstance(obj, str):
            return BEARER_PATTERN.sub(rf'\g<1>{MASK}', obj)
        return obj

    def filter(self, record: logging.LogRecord) -> bool:
        """Mask sensitive data in log record."""
        if hasattr(record, 'extra_fields'):
            record.extra_fields = self._mask_sensitive_data(record.extra_fields)
        
        message = record.getMessage()
        masked = BEARER_PATTERN.sub(rf'\g<1>{MASK}', message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True
