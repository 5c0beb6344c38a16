"""
Constants and default values for model classes.

This module centralizes the placeholder values used when Linear omits a
field, so flattened records never carry an unlabeled reference.
"""

UNKNOWN = "Unknown"
LINEAR_DEFAULT_ID = ""
