import logging

LOG_FORMAT = "{asctime} {levelname} {name} {message}"


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    logging.basicConfig(level=level, format=LOG_FORMAT, style="{")
    return logging.getLogger(name)
