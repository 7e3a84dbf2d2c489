import logging, json, sys, time, os


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, name, msg (+ exc when present)."""

    converter = time.gmtime  # UTC timestamps

    def __init__(self, datefmt="%Y-%m-%dT%H:%M:%SZ"):
        super().__init__(datefmt=datefmt)

    def format(self, record):
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def get_logger(name="tagcrypt", level=logging.INFO, to_file=None):
    """Structured JSON logger shared by all tagcrypt_core modules."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        formatter = JsonFormatter()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
