import sys
from loguru import logger

_configured = False

def setup_logging(level: str = "INFO") -> None:
    """Route every log call through a single stderr sink."""
    global _configured
    if _configured:
        return
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}",
        backtrace=False,
        diagnose=False,
    )
    _configured = True
