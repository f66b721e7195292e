import logging
import sys
from pathlib import Path


def setup_logging(debug: bool = False, log_dir: str = "logs"):
    """Setup logging configuration"""

    log_path = Path(log_dir)
    log_path.mkdir(exist_ok=True)

    level = logging.DEBUG if debug else logging.INFO

    error_handler = logging.FileHandler(log_path / 'error.log')
    error_handler.setLevel(logging.ERROR)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_path / 'rampx_nft.log'),
            error_handler,
        ],
        force=True,
    )

    # Suppress noisy loggers
    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)

    logging.debug("Logging system initialized")
