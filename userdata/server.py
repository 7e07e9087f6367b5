import logging

import uvicorn

logger = logging.getLogger(__name__)


def run(app, host="127.0.0.1", port=8000, log_level="info"):
    """Serves ``app`` with uvicorn until interrupted."""
    logger.info("Serving on http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())
