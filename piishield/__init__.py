"""piishield — rule-based PII redaction for structured logs and payloads."""

from __future__ import annotations

__version__ = "0.1.0"

from piishield.audit.safe_logger import SafeLogger, create_safe_logger, safe_log
from piishield.inspect.classifier import contains_pii
from piishield.sanitize.engine import redact_pii
from piishield.sanitize.masking import mask_for_display
from piishield.sanitize.models import DetectionResult, PIICategory

__all__ = [
    "DetectionResult",
    "PIICategory",
    "SafeLogger",
    "__version__",
    "contains_pii",
    "create_safe_logger",
    "mask_for_display",
    "redact_pii",
    "safe_log",
]
