import logging
import os
from pathlib import Path
from typing import Optional

from stamp_backup import constants
from stamp_backup import logger
from stamp_backup.config.config import Config
from stamp_backup.exceptions import ConfigWriteFailed
from stamp_backup.utils import path_utils


class DefaultTargetStore:
	"""
	Persists the default target base directory in a single-line plain text file,
	``~/.config/backup_tool.conf`` by default.
	The whole file is replaced on every write
	"""

	def __init__(
			self, *,
			home_dir: Optional[Path] = None,
			config_file: Optional[str] = None,
			fallback_target: Optional[str] = None,
			logger_: Optional[logging.Logger] = None,
	):
		config = Config.get()
		self.home_dir = home_dir if home_dir is not None else path_utils.get_user_home()
		self.config_file = config_file if config_file is not None else config.config_file
		self.fallback_target = Path(fallback_target if fallback_target is not None else config.fallback_target)
		self.logger: logging.Logger = logger_ or logger.get()

	@property
	def config_file_path(self) -> Path:
		return self.home_dir / self.config_file

	def read_default_target(self) -> Path:
		config_path = self.config_file_path
		self.logger.debug('Reading config file {!r}'.format(str(config_path)))
		try:
			with open(config_path, 'r', encoding='utf8', errors='surrogateescape') as f:
				line = f.readline()
		except FileNotFoundError:
			line = ''
		except OSError as e:
			self.logger.debug('Cannot read config file {!r}: {}'.format(str(config_path), e))
			line = ''

		value = line.split('\n', 1)[0]
		if len(value) == 0:
			self.logger.warning('Config file not found or empty, using default target directory {!r}'.format(str(self.fallback_target)))
			return self.fallback_target

		self.logger.debug('Default target directory read: {!r}'.format(value))
		return Path(value)

	def __ensure_config_dir(self):
		config_dir = self.config_file_path.parent
		self.logger.debug('Ensuring config directory exists: {!r}'.format(str(config_dir)))
		try:
			config_dir.mkdir(mode=constants.DIRECTORY_MODE, parents=True)
		except FileExistsError:
			self.logger.debug('Config directory already exists')
		except OSError as e:
			self.logger.error('Failed to create config directory {!r}: {}'.format(str(config_dir), e))

	def write_default_target(self, target: Path):
		config_path = self.config_file_path
		self.__ensure_config_dir()

		self.logger.debug('Writing new default directory to config file {!r}'.format(str(config_path)))
		try:
			with open(config_path, 'w', encoding='utf8', errors='surrogateescape') as f:
				f.write(os.fspath(target))
		except (OSError, UnicodeError) as e:
			self.logger.error('Failed to update default backup directory: {}'.format(e))
			raise ConfigWriteFailed(config_path) from e
		self.logger.debug('Config file updated successfully')
