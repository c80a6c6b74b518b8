import os
from pathlib import Path

from stamp_backup import constants


def get_user_home() -> Path:
	"""
	Home directory of the invoking user, from the user database rather than $HOME
	"""
	try:
		import pwd
	except ImportError:  # windows
		return Path.home()
	return Path(pwd.getpwuid(os.getuid()).pw_dir)


def get_max_path_length(path: Path) -> int:
	# the path itself might not exist yet, use its nearest existing ancestor
	probe = path
	while not probe.exists() and probe.parent != probe:
		probe = probe.parent
	try:
		value = os.pathconf(probe, 'PC_PATH_MAX')
	except (AttributeError, OSError, ValueError):
		return constants.DEFAULT_MAX_PATH_LENGTH
	return value if value > 0 else constants.DEFAULT_MAX_PATH_LENGTH
