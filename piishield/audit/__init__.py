"""Log sinks and the PII-safe logging facade."""
