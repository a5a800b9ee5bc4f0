"""
Version information for the package
Resolved from the installed distribution metadata
Falls back to environment variable or "unknown" if not installed
"""

import os
from importlib import metadata

DISTRIBUTION_NAME: str = "moodle-rest"


# VERSION resolution order:
# 1. MOODLE_REST_VERSION environment variable (runtime override)
# 2. Installed distribution metadata
# 3. "unknown" as final fallback
def _resolve_version() -> str:
    env_version = os.environ.get("MOODLE_REST_VERSION")
    if env_version:
        return env_version
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "unknown"


VERSION: str = _resolve_version()

USER_AGENT: str = f"moodle-rest-python/{VERSION}"
