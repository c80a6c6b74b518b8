from pathlib import Path

from typing_extensions import override

from stamp_backup.action import Action
from stamp_backup.config.default_target_store import DefaultTargetStore
from stamp_backup.exceptions import TargetDirectoryInvalid


class SetDefaultTargetAction(Action[Path]):
	def __init__(self, target: Path, store: DefaultTargetStore, **kwargs):
		super().__init__(**kwargs)
		self.target = target
		self.store = store

	@override
	def run(self) -> Path:
		"""
		:return: the resolved absolute target path that got persisted
		"""
		try:
			resolved = self.target.resolve(strict=True)
		except (OSError, RuntimeError) as e:
			raise TargetDirectoryInvalid(self.target) from e

		self.logger.debug('Updating default backup directory to {!r}'.format(str(resolved)))
		self.store.write_default_target(resolved)
		self.logger.info('Updated default backup directory to {!r}'.format(str(resolved)))
		return resolved
