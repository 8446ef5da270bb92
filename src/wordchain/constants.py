"""
Shared constants for Wordchain.
"""

SCHEMA_VERSION = 1
DEFAULT_ORDER = 2
KEY_SEPARATOR = " "
BOUNDARY_TOKEN = "\n"
