import logging
import os
from fastapi.middleware.cors import CORSMiddleware
from timeclock.fastapi.core.init_settings import global_settings

logger = logging.getLogger(__name__)

def setup_cors(app):
    # Check if we should allow all origins (for debugging)
    allow_all_origins = os.getenv("ALLOW_ALL_ORIGINS", "false").lower() == "true"

    if allow_all_origins:
        logger.warning("CORS is set to allow ALL origins. Only use this for debugging!")
        origins = ["*"]
        allow_credentials = False  # Can't use credentials with wildcard origins
    else:
        origins = [
            global_settings.CLIENT_URL,
            "http://localhost:3000",
            "http://localhost:5000",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5000",
        ]

        # Add additional origins from environment variable
        additional_origins = os.getenv("ADDITIONAL_CORS_ORIGINS", "")
        if additional_origins:
            origins.extend([origin.strip() for origin in additional_origins.split(",")])

        # Remove empty strings and duplicates
        origins = sorted(set(origin for origin in origins if origin))
        allow_credentials = True

    logger.info("CORS allowed origins: %s", origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )
