import functools
import logging
from typing import Optional

from mcdreforged.api.all import Serializable


class Config(Serializable):
	debug: bool = False
	fallback_target: str = '/media/pi/piBackup'
	config_file: str = '.config/backup_tool.conf'  # related to the user's home directory
	copy_chunk_size: int = 4096
	sort_entries: bool = True

	# ==================== Instance getters ====================

	@classmethod
	@functools.lru_cache
	def __get_default(cls) -> 'Config':
		return Config.get_default()

	@classmethod
	def get(cls) -> 'Config':
		if _config is None:
			return cls.__get_default()
		return _config

	def on_deserialization(self, **kwargs):
		if self.copy_chunk_size <= 0:
			raise ValueError('copy_chunk_size should be positive, but found {}'.format(self.copy_chunk_size))


_config: Optional[Config] = None


def set_config_instance(cfg: Config):
	global _config
	_config = cfg

	from stamp_backup import logger
	logger.get().setLevel(logging.DEBUG if cfg.debug else logging.INFO)
	if cfg.debug:
		logger.get().debug('debug on')
