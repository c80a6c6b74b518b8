import functools
import logging
import sys

from stamp_backup import constants


def __create_logger() -> logging.Logger:
	from stamp_backup.utils.log_utils import LOG_FORMATTER
	logger = logging.Logger(constants.PROGRAM_ID)
	handler = logging.StreamHandler(sys.stdout)
	handler.setFormatter(LOG_FORMATTER)
	logger.addHandler(handler)
	return logger


@functools.lru_cache
def get() -> logging.Logger:
	from stamp_backup.utils.log_utils import get_log_level
	logger = __create_logger()
	logger.setLevel(get_log_level())
	return logger
