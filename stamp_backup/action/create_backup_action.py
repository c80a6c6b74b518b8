import datetime
import time
from pathlib import Path
from typing import Optional

from typing_extensions import override

from stamp_backup import constants
from stamp_backup.action import Action
from stamp_backup.action.copy_tree_action import CopyTreeAction
from stamp_backup.action.set_default_target_action import SetDefaultTargetAction
from stamp_backup.config.default_target_store import DefaultTargetStore
from stamp_backup.exceptions import SourceDirectoryInvalid, BackupRootCreationFailed, TargetDirectoryInvalid
from stamp_backup.types.backup_request import BackupRequest
from stamp_backup.types.backup_result import BackupResult, BackupStatus
from stamp_backup.utils import backup_name_utils, conversion_utils
from stamp_backup.utils.backup_name_utils import Clock


class CreateBackupAction(Action[BackupResult]):
	def __init__(
			self, request: BackupRequest, *,
			store: Optional[DefaultTargetStore] = None,
			clock: Clock = datetime.datetime.now,
			**kwargs,
	):
		super().__init__(**kwargs)
		self.request = request
		self.store = store if store is not None else DefaultTargetStore(**kwargs)
		self.clock = clock
		self.__action_kwargs = kwargs

	def __update_default_target(self) -> BackupResult:
		target = self.request.target_base_dir
		if target is None:
			raise TargetDirectoryInvalid(Path())
		if self.request.source_path is not None:
			self.logger.warning('Target directory override given, only the default target is updated, no backup is created for {!r}'.format(str(self.request.source_path)))

		resolved = SetDefaultTargetAction(target, self.store, **self.__action_kwargs).run()
		return BackupResult(status=BackupStatus.default_target_updated, target_base_dir=resolved)

	def __validate_source(self) -> Path:
		source = self.request.source_path
		if source is None:
			raise SourceDirectoryInvalid(Path())
		self.logger.debug('Validating source directory {!r}'.format(str(source)))
		try:
			is_dir = source.is_dir()
		except OSError as e:
			raise SourceDirectoryInvalid(source) from e
		if not is_dir:
			raise SourceDirectoryInvalid(source)
		return source

	def __create_backup_root(self, target_base: Path) -> Path:
		backup_root = backup_name_utils.make_timestamped_name(target_base, clock=self.clock)
		self.logger.debug('Creating timestamped backup directory in {!r}'.format(str(target_base)))
		try:
			target_base.mkdir(mode=constants.DIRECTORY_MODE, parents=True, exist_ok=True)
			backup_root.mkdir(mode=constants.DIRECTORY_MODE)
		except OSError as e:
			self.logger.error('Failed to create backup directory {!r}: {}'.format(str(backup_root), e))
			raise BackupRootCreationFailed(backup_root) from e
		return backup_root

	@override
	def run(self) -> BackupResult:
		if self.request.override_default:
			return self.__update_default_target()

		source = self.__validate_source()
		target_base = self.request.target_base_dir
		if target_base is None:
			target_base = self.store.read_default_target()

		backup_root = self.__create_backup_root(target_base)
		self.logger.info('Backing up {!r} to {!r}'.format(str(source), str(backup_root)))

		start_time = time.time()
		outcomes = CopyTreeAction(source, backup_root, **self.__action_kwargs).run()
		cost = time.time() - start_time

		failures = outcomes.failed()
		status = BackupStatus.partial_success if len(failures) > 0 else BackupStatus.success
		self.logger.info('Copied {} files ({}) and {} directories in {:.2f}s, skipped {}, failed {}'.format(
			len(outcomes.files()), conversion_utils.byte_count_to_str(outcomes.copied_bytes()),
			len(outcomes.directories()), cost,
			len(outcomes.skipped()), len(failures),
		))
		for outcome in outcomes.permission_warnings():
			self.logger.warning('  {}'.format(outcome.to_line()))
		if status == BackupStatus.partial_success:
			self.logger.warning('Found {} failures during the backup'.format(len(failures)))
			for line in outcomes.to_lines(failed_only=True):
				self.logger.warning('  {}'.format(line))
		else:
			self.logger.info('Backup completed successfully')

		return BackupResult(
			status=status,
			target_base_dir=target_base,
			backup_root=backup_root,
			outcomes=outcomes,
			cost=cost,
		)
