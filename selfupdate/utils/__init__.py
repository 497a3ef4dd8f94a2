"""Utility module for selfupdate.

This module provides cross-cutting utilities:
- Logging: Configured logging with credential redaction
"""
