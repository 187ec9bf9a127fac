import logging
import sys

from utils.config import LOG_LEVEL


def setup_logging(level=LOG_LEVEL):
    logger = logging.getLogger()
    if logger.hasHandlers():
        logger.handlers.clear()
    logger.setLevel(level)
    c_handler = logging.StreamHandler(sys.stdout)
    c_format = logging.Formatter(
        "%(asctime)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
        datefmt="%m-%d-%Y %H:%M:%S",
    )
    c_handler.setFormatter(c_format)
    logger.addHandler(c_handler)
    # discord.py is chatty at INFO during gateway reconnects.
    logging.getLogger("discord").setLevel(max(logger.level, logging.WARNING))
    return logger


logger = setup_logging()
