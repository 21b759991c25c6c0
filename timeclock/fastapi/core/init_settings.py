import os

from timeclock.fastapi.core.config import get_settings

global_settings = get_settings(os.environ.get("ENV_MODE", "dev"))
