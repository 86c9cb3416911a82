"""
ReleaseHub - release binary distribution and audit library.

Resolves the latest release binary per platform from an S3 bucket or a
local directory, validates uploads against the version-bearing naming
contract, and records download/version-check audits.
"""

__version__ = "1.0.0"
