import logging

from xzsink.commons.logger import base_logger


def create_logger(level):
    formatter = logging.Formatter("%(asctime)s :: %(levelname)s :: %(message)s")
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    base_logger.setLevel(level)
    base_logger.handlers = [stream_handler]
    base_logger.propagate = False
    return base_logger
