import argparse
from pathlib import Path
from typing import Optional, List

from stamp_backup.action.create_backup_action import CreateBackupAction
from stamp_backup.cli.return_codes import ErrorReturnCodes
from stamp_backup.config.config import Config, set_config_instance
from stamp_backup.config.default_target_store import DefaultTargetStore
from stamp_backup.exceptions import SourceDirectoryInvalid, TargetDirectoryInvalid, StampBackupError
from stamp_backup.logger import get as get_logger
from stamp_backup.types.backup_request import BackupRequest
from stamp_backup.types.backup_result import BackupStatus
from stamp_backup.utils import log_utils

__all__ = ['cli_entry']


def __prepare_logger():
	logger = get_logger()
	assert len(logger.handlers) == 1
	logger.handlers[0].setFormatter(log_utils.LOG_FORMATTER_NO_FUNC)


__prepare_logger()


class CliEntrypoint:
	def __init__(self, *, store: Optional[DefaultTargetStore] = None):
		self.logger = get_logger()
		self.store = store

	@classmethod
	def build_parser(cls) -> argparse.ArgumentParser:
		parser = argparse.ArgumentParser(prog='stamp-backup', description='Copy a directory into a timestamped backup directory', formatter_class=argparse.ArgumentDefaultsHelpFormatter)
		parser.add_argument('-t', '--target', help='Set the default target directory, then exit without backing up. The directory must exist')
		parser.add_argument('--debug', action='store_true', help='Enable debug logging')
		parser.add_argument('source', nargs='?', help='The directory to back up')
		return parser

	def __make_request(self, parser: argparse.ArgumentParser, args: argparse.Namespace) -> BackupRequest:
		source = Path(args.source) if args.source is not None else None
		if args.target is not None:
			return BackupRequest(source_path=source, target_base_dir=Path(args.target), override_default=True)
		if source is None:
			parser.print_usage()
			self.logger.error('Expected source_dir after options')
			ErrorReturnCodes.invalid_argument.sys_exit()
		return BackupRequest.backup(source)

	def main(self, argv: Optional[List[str]] = None):
		parser = self.build_parser()
		args = parser.parse_args(argv)

		config = Config.get_default()
		config.debug = args.debug
		set_config_instance(config)

		self.logger.debug('Starting backup tool')
		request = self.__make_request(parser, args)
		store = self.store if self.store is not None else DefaultTargetStore()
		try:
			result = CreateBackupAction(request, store=store).run()
		except SourceDirectoryInvalid as e:
			self.logger.error('Invalid source directory {!r}: {}'.format(str(e.path), e.__cause__ or 'not a directory'))
			ErrorReturnCodes.invalid_argument.sys_exit()
		except TargetDirectoryInvalid as e:
			self.logger.error('Invalid target directory {!r}: {}'.format(str(e.path), e.__cause__ or 'not given'))
			ErrorReturnCodes.invalid_argument.sys_exit()
		except StampBackupError as e:
			self.logger.error('{}{}'.format(e, ': {}'.format(e.__cause__) if e.__cause__ is not None else ''))
			ErrorReturnCodes.action_failed.sys_exit()

		if result.status == BackupStatus.partial_success:
			ErrorReturnCodes.partial_success.sys_exit()


def cli_entry():
	CliEntrypoint().main()
