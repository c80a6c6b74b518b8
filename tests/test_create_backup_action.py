import datetime
import logging
import os
import stat
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from stamp_backup.action.create_backup_action import CreateBackupAction
from stamp_backup.config.default_target_store import DefaultTargetStore
from stamp_backup.exceptions import SourceDirectoryInvalid, BackupRootCreationFailed, TargetDirectoryInvalid
from stamp_backup.types.backup_request import BackupRequest
from stamp_backup.types.backup_result import BackupStatus


def _quiet_logger() -> logging.Logger:
	logger = logging.Logger('stamp_backup-test')
	logger.addHandler(logging.NullHandler())
	return logger


def _clock(*args):
	return lambda: datetime.datetime(*args)


class CreateBackupActionTestCase(unittest.TestCase):
	def setUp(self):
		self.__temp_dir = tempfile.TemporaryDirectory()
		self.root = Path(self.__temp_dir.name)
		self.src = self.root / 'src'
		self.dst = self.root / 'dst'
		self.src.mkdir()
		self.logger = _quiet_logger()
		self.store = DefaultTargetStore(home_dir=self.root / 'home', fallback_target=str(self.root / 'fallback'), logger_=self.logger)

	def tearDown(self):
		self.__temp_dir.cleanup()

	def create_action(self, request: BackupRequest, clock=_clock(2024, 11, 20, 10, 0, 0)) -> CreateBackupAction:
		return CreateBackupAction(request, store=self.store, clock=clock, logger_=self.logger)

	def make_file(self, rel_path: str, content: bytes, mode: int) -> Path:
		path = self.src / rel_path
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_bytes(content)
		os.chmod(path, mode)
		return path

	def test_example_tree(self):
		self.make_file('a.txt', b'hello', 0o644)
		self.make_file('sub/b.txt', b'world', 0o600)

		result = self.create_action(BackupRequest.backup(self.src, self.dst)).run()
		backup_root = self.dst / 'Backup 2024-11-20 10-00-00'
		self.assertEqual(BackupStatus.success, result.status)
		self.assertFalse(result.is_partial)
		self.assertEqual(backup_root, result.backup_root)
		self.assertEqual(self.dst, result.target_base_dir)

		self.assertEqual(b'hello', (backup_root / 'a.txt').read_bytes())
		self.assertEqual(0o644, stat.S_IMODE((backup_root / 'a.txt').stat().st_mode))
		self.assertEqual(b'world', (backup_root / 'sub' / 'b.txt').read_bytes())
		self.assertEqual(0o600, stat.S_IMODE((backup_root / 'sub' / 'b.txt').stat().st_mode))
		self.assertEqual(['Backup 2024-11-20 10-00-00'], os.listdir(self.dst))
		self.assertEqual(['a.txt', 'sub'], sorted(os.listdir(backup_root)))

	def test_two_runs_two_directories(self):
		self.make_file('a.txt', b'hello', 0o644)
		r1 = self.create_action(BackupRequest.backup(self.src, self.dst), clock=_clock(2024, 11, 20, 10, 0, 0)).run()
		r2 = self.create_action(BackupRequest.backup(self.src, self.dst), clock=_clock(2024, 11, 20, 10, 0, 1)).run()
		self.assertNotEqual(r1.backup_root, r2.backup_root)
		self.assertEqual(['Backup 2024-11-20 10-00-00', 'Backup 2024-11-20 10-00-01'], sorted(os.listdir(self.dst)))
		self.assertEqual(b'hello', (r1.backup_root / 'a.txt').read_bytes())
		self.assertEqual(b'hello', (r2.backup_root / 'a.txt').read_bytes())

	def test_same_second_collision_is_fatal(self):
		self.make_file('a.txt', b'hello', 0o644)
		self.create_action(BackupRequest.backup(self.src, self.dst)).run()
		(self.src / 'a.txt').write_bytes(b'changed')

		with self.assertRaises(BackupRootCreationFailed):
			self.create_action(BackupRequest.backup(self.src, self.dst)).run()
		self.assertEqual(b'hello', (self.dst / 'Backup 2024-11-20 10-00-00' / 'a.txt').read_bytes())

	def test_target_base_created_on_demand(self):
		self.make_file('a.txt', b'hello', 0o644)
		target = self.dst / 'nested' / 'deeper'
		result = self.create_action(BackupRequest.backup(self.src, target)).run()
		self.assertEqual(target / 'Backup 2024-11-20 10-00-00', result.backup_root)
		self.assertTrue((result.backup_root / 'a.txt').is_file())

	def test_default_target_from_store(self):
		self.make_file('a.txt', b'hello', 0o644)
		self.store.write_default_target(self.dst)
		result = self.create_action(BackupRequest.backup(self.src)).run()
		self.assertEqual(self.dst, result.target_base_dir)
		self.assertTrue((self.dst / 'Backup 2024-11-20 10-00-00' / 'a.txt').is_file())

	def test_fallback_target(self):
		self.make_file('a.txt', b'hello', 0o644)
		result = self.create_action(BackupRequest.backup(self.src)).run()
		self.assertEqual(self.root / 'fallback', result.target_base_dir)
		self.assertTrue((self.root / 'fallback' / 'Backup 2024-11-20 10-00-00' / 'a.txt').is_file())

	def test_invalid_source(self):
		self.make_file('a.txt', b'hello', 0o644)
		for source in [self.root / 'missing', self.src / 'a.txt']:
			with self.subTest(source=source):
				with self.assertRaises(SourceDirectoryInvalid) as cm:
					self.create_action(BackupRequest.backup(source, self.dst)).run()
				self.assertEqual(source, cm.exception.path)
		self.assertFalse(self.dst.exists())

	def test_root_creation_failure(self):
		self.make_file('a.txt', b'hello', 0o644)
		self.dst.write_bytes(b'i am a file, not a directory')
		with self.assertRaises(BackupRootCreationFailed) as cm:
			self.create_action(BackupRequest.backup(self.src, self.dst)).run()
		self.assertEqual(self.dst / 'Backup 2024-11-20 10-00-00', cm.exception.path)
		self.assertIsInstance(cm.exception.__cause__, OSError)

	def test_partial_success(self):
		for i in range(9):
			self.make_file('f{}.txt'.format(i), b'ok', 0o644)
		self.make_file('bad.txt', b'secret', 0o644)

		def fake_open(file, mode='r', *args, **kwargs):
			if Path(file).name == 'bad.txt' and 'r' in mode:
				raise PermissionError(13, 'Permission denied', str(file))
			return open(file, mode, *args, **kwargs)

		with mock.patch('stamp_backup.action.copy_file_action.open', side_effect=fake_open, create=True):
			result = self.create_action(BackupRequest.backup(self.src, self.dst)).run()
		self.assertEqual(BackupStatus.partial_success, result.status)
		self.assertTrue(result.is_partial)
		self.assertEqual(1, len(result.outcomes.failed()))
		self.assertEqual(9, len(result.outcomes.files()))
		self.assertEqual(18, result.outcomes.copied_bytes())

	def test_set_default_target_only(self):
		self.make_file('a.txt', b'hello', 0o644)
		new_target = self.root / 'newtarget'
		new_target.mkdir()

		result = self.create_action(BackupRequest(source_path=self.src, target_base_dir=new_target, override_default=True)).run()
		self.assertEqual(BackupStatus.default_target_updated, result.status)
		self.assertIsNone(result.backup_root)
		self.assertEqual(0, len(result.outcomes))
		self.assertEqual(str(new_target.resolve()), self.store.config_file_path.read_text())
		self.assertEqual([], os.listdir(new_target))

	def test_set_default_target_resolves_relative(self):
		new_target = self.root / 'newtarget'
		(new_target / 'inner').mkdir(parents=True)
		result = self.create_action(BackupRequest.set_default_target(new_target / 'inner' / '..')).run()
		self.assertEqual(new_target.resolve(), result.target_base_dir)
		self.assertEqual(new_target.resolve(), self.store.read_default_target())

	def test_set_default_target_missing(self):
		with self.assertRaises(TargetDirectoryInvalid):
			self.create_action(BackupRequest.set_default_target(self.root / 'nope')).run()
		self.assertFalse(self.store.config_file_path.exists())


if __name__ == '__main__':
	unittest.main()
