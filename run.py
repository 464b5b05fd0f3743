import logging
import os

import uvicorn

logger = logging.getLogger(__name__)

# Determine environment: "prod" or "local"
ENV = os.getenv("ENV", "local").lower()

# Default settings
HOST = "localhost"
PORT = int(os.getenv("PORT", "8000"))
RELOAD = True  # Enable live reload in local development

# Production config
if ENV == "prod":
    HOST = "0.0.0.0"
    RELOAD = False  # Disable reload in production

# Start the FastAPI app
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting exam builder on %s:%s (env=%s)", HOST, PORT, ENV)
    uvicorn.run("exam_builder.main:app", host=HOST, port=PORT, reload=RELOAD)
