"""selfupdate - keep a binary current from an HTTP artifact listing.

Discovers builds published in a plain directory listing (Nexus raw
repositories, Apache/nginx autoindex pages), picks the latest one that
fits the running platform and swaps it in place of the current executable.
"""

__version__ = "1.0.0"
