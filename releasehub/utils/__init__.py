"""
Utility modules for ReleaseHub.

- version: filename version extraction and numeric version ordering
- logging_config: named loggers with console/JSON output
"""
