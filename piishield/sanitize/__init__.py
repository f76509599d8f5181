"""Classification, content detection, redaction and masking."""
