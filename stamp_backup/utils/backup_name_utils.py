import datetime
import os
from pathlib import Path
from typing import Callable

from stamp_backup import constants
from stamp_backup.exceptions import PathTooLong, TimestampFormatError
from stamp_backup.utils import path_utils

Clock = Callable[[], datetime.datetime]


def format_backup_dir_name(date: datetime.datetime) -> str:
	try:
		name = date.strftime(constants.BACKUP_DIR_NAME_FORMAT)
	except (ValueError, OverflowError) as e:
		raise TimestampFormatError('failed to format timestamp {!r}: {}'.format(date, e)) from e
	if len(name) == 0:
		raise TimestampFormatError('empty timestamp formatted from {!r}'.format(date))
	return name


def make_timestamped_name(base_dir: Path, *, clock: Clock = datetime.datetime.now) -> Path:
	"""
	:param base_dir: the target base directory
	:param clock: returns the current local time
	:return: the timestamped backup root path, e.g. ``base_dir / "Backup 2024-11-20 10-00-00"``
	"""
	name = format_backup_dir_name(clock())

	base = str(base_dir).rstrip(os.sep) or os.sep
	full_path = base + name if base.endswith(os.sep) else base + os.sep + name

	max_length = path_utils.get_max_path_length(base_dir)
	byte_length = len(os.fsencode(full_path)) + 1  # PATH_MAX counts bytes, terminator included
	if byte_length > max_length:
		raise PathTooLong(full_path, byte_length, max_length)
	return Path(full_path)
