"""
Catalog administration console: category and product management against a
REST backend, plus a local session validity check.
"""
# Registers the TRACE level on logging.Logger before any module logs with it.
from catalog_admin.core import logging_config  # noqa: F401
