"""Personal job-search assistant: resume parsing, job normalization and matching."""

__version__ = "0.1.0"
