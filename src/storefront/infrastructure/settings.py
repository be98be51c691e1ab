"""Runtime configuration.

Values come from the environment or a ``.env`` file in the working
directory, read through python-decouple. Nothing here opens a resource;
the composition root does that with these values.
"""

from __future__ import annotations

from decouple import config

# Relative paths resolve against the working directory, never the install location.
DEFAULT_DATABASE_PATH = "data/storefront.db"

DATABASE_PATH = config("STOREFRONT_DATABASE_PATH", default=DEFAULT_DATABASE_PATH)

LOG_LEVEL = config("STOREFRONT_LOG_LEVEL", default="INFO")

LOG_JSON = config("STOREFRONT_LOG_JSON", default=False, cast=bool)
