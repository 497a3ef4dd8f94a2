"""Configuration module for selfupdate.

This module handles updater settings and platform discovery:
- UpdaterSettings: Settings dataclass and JSON loading
- Paths: Running OS/architecture identifiers, executable and temp paths
"""
