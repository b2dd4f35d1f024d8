import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # httpx logs every outbound request at INFO, including the provider URL.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def scrub_secret(text: str, secret: str | None) -> str:
    """Mask a configured secret if it ever shows up in a message."""
    if not secret or not text:
        return text
    return text.replace(secret, "***")
