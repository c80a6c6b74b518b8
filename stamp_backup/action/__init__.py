"""
Actions for all kinds of backup operations
"""
import logging
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional

_T = TypeVar('_T')


class Action(Generic[_T], ABC):
	def __init__(self, *, logger_: Optional[logging.Logger] = None):
		from stamp_backup import logger
		from stamp_backup.config.config import Config
		self.logger: logging.Logger = logger_ or logger.get()
		self.config: Config = Config.get()

	@abstractmethod
	def run(self) -> _T:
		...
