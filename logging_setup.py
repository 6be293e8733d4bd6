import sys

from loguru import logger

_DEFAULT_CONTEXT = {
    "request_id": "-",
}


def _inject_default_context(record: dict) -> None:
    extra = record["extra"]
    for key, value in _DEFAULT_CONTEXT.items():
        extra.setdefault(key, value)


def setup_logging(level: str) -> None:
    """Configure loguru for the API process."""
    logger.remove()
    logger.configure(patcher=_inject_default_context)
    logger.add(
        sys.stderr,
        level=level,
        backtrace=True,
        diagnose=False,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> "
            "| <level>{level:<8}</level> "
            "| req={extra[request_id]} "
            "| {message}"
        ),
    )
