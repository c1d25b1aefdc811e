# dokchain/logging_config.py

import logging
import sys


def setup_logging(level="INFO"):
    """
    Configures the root logger for the process.
    Called once from settings.py, so it runs before any app is loaded.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
        stream=sys.stdout,
    )
    # Silence noisy libraries
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
