#Description: Loguru configuration for structured logging. Opt-in: nothing here runs on import.

from loguru import logger
import sys

from utils.config import settings


def setup_logging(level: str | None = None, enable_client: bool = True) -> None:
    """
    Replace loguru's sinks with one colorized stdout sink and, by default,
    turn on the OKX adapters' debug records. Meant for scripts and apps that
    own the process; a library host keeps its own sinks and calls
    logger.enable("adapters") instead.
    """
    logger.remove()
    logger.add(sys.stdout, level=(level or settings.LOG_LEVEL).upper(),
               colorize=True,
               format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level}</level> | <cyan>{message}</cyan>")
    if enable_client:
        logger.enable("adapters")
