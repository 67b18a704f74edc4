"""Settings module used by pytest: the regular settings in ``test`` mode."""

import os

os.environ.setdefault("IPAM_SERVICE_MODE", "test")

from ipam_service.settings import *  # noqa: E402,F401,F403
