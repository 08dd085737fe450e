# converter/logs.py
import logging

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "converter-stream"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach one stream handler to the `converter` logger.
    Safe to call on every Streamlit rerun.
    """
    log = logging.getLogger("converter")
    value = logging.getLevelName((level or "INFO").upper())
    log.setLevel(value if isinstance(value, int) else logging.INFO)
    if not any(h.get_name() == _HANDLER_NAME for h in log.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(FORMAT))
        log.addHandler(handler)
    return log
