from pathlib import Path


class StampBackupError(Exception):
	pass


class SourceDirectoryInvalid(StampBackupError):
	def __init__(self, path: Path):
		super().__init__('invalid source directory {!r}'.format(str(path)))
		self.path = path


class TargetDirectoryInvalid(StampBackupError):
	def __init__(self, path: Path):
		super().__init__('invalid target directory {!r}'.format(str(path)))
		self.path = path


class BackupRootCreationFailed(StampBackupError):
	def __init__(self, path: Path):
		super().__init__('failed to create backup directory {!r}'.format(str(path)))
		self.path = path


class ConfigWriteFailed(StampBackupError):
	def __init__(self, config_path: Path):
		super().__init__('failed to write config file {!r}'.format(str(config_path)))
		self.config_path = config_path


class PathTooLong(StampBackupError):
	def __init__(self, path: str, byte_length: int, max_length: int):
		super().__init__('path is too long ({} bytes > {}): {!r}'.format(byte_length, max_length, path))
		self.path = path
		self.byte_length = byte_length
		self.max_length = max_length


class TimestampFormatError(StampBackupError):
	pass
