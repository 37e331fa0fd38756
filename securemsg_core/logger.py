import logging, json, re, sys, time, os

# JWK key material, api keys and long base64 runs (payloads, raw keys)
_SECRET_PATTERNS = [
    re.compile(r'("k"\s*:\s*")([^"]+)(")'),
    re.compile(r"((?:api[_-]?key|x-goog-api-key)['\"]?\s*[:=]\s*['\"]?)([^'\"&\s,}]+)()", re.IGNORECASE),
    re.compile(r"()((?<![\w+/.:-])[A-Za-z0-9+/]{32,}={0,2})()"),
]


def redact(value: str) -> str:
    for pattern in _SECRET_PATTERNS:
        value = pattern.sub(r"\1***\3", value)
    return value


class SecretRedactionFilter(logging.Filter):
    """Masks key material and ciphertext before a record reaches any handler."""

    def filter(self, record):
        record.msg = redact(record.getMessage())
        record.args = None
        return True


class JsonLineFormatter(logging.Formatter):
    def format(self, record):
        return json.dumps({
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }, ensure_ascii=False)


def get_logger(name="securemsg", level=logging.INFO, to_file=None):
    """Unified structured logger for all SecureMsg components."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        # on the logger, not the handler, so propagated records are masked too
        logger.addFilter(SecretRedactionFilter())

        handler = logging.StreamHandler(sys.stdout)
        formatter = JsonLineFormatter(datefmt="%Y-%m-%dT%H:%M:%SZ")
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
