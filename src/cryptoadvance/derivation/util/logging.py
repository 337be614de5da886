import logging

from ..config import get_loglevel

logger = logging.getLogger(__name__)


class DuplicateFilter(logging.Filter):
    """A Filter filtering out messages coming in multiple times"""

    def __init__(self, name=""):
        super().__init__(name)
        self.last_log_count = 0
        self.last_log = "Something to compare with which is definitely not a logline"

    def filter(self, record):
        if record.module == "logging":
            return True  # maybe it's me logging

        current_log = (record.module, record.levelno, record.msg)
        if current_log == self.last_log:
            self.last_log_count = self.last_log_count + 1
            return False
        if self.last_log_count > 0:
            logger.info(
                f" ---=+ former message repeated {self.last_log_count} times +=---"
            )
            self.last_log_count = 0
        self.last_log = current_log
        return True


def setup_logging(config, handler=None):
    """Configures the cryptoadvance logger according to the config
    (LOGFORMAT, LOGLEVEL, LOG_DEDUPLICATE) and returns the handler in use.
    """
    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config["LOGFORMAT"]))
    if config.get("LOG_DEDUPLICATE"):
        handler.addFilter(DuplicateFilter())
    clogger = logging.getLogger("cryptoadvance")
    clogger.setLevel(get_loglevel(config))
    clogger.addHandler(handler)
    return handler
