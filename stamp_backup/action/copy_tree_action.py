import dataclasses
import os
import stat
from pathlib import Path
from typing import Optional, List

from typing_extensions import override

from stamp_backup import constants
from stamp_backup.action import Action
from stamp_backup.action.copy_file_action import CopyFileAction
from stamp_backup.types.copy_outcome import CopyOutcome, CopyOutcomes


@dataclasses.dataclass(frozen=True)
class _PendingEntry:
	entry: os.DirEntry
	src_path: Path
	dest_path: Path


class CopyTreeAction(Action[CopyOutcomes]):
	"""
	Replicate the directories and regular files of src_path into dest_path.

	Outcomes are collected in depth-first pre-order, a directory's own outcome comes before its children's.
	A failed entry never stops its siblings, a failed directory only stops its own subtree.
	Symlinks and special files are skipped
	"""

	def __init__(self, src_path: Path, dest_path: Path, *, sort_entries: Optional[bool] = None, **kwargs):
		super().__init__(**kwargs)
		self.src_path = src_path
		self.dest_path = dest_path
		self.sort_entries = sort_entries if sort_entries is not None else self.config.sort_entries
		self.__action_kwargs = kwargs

	def __copy_file(self, src: Path, dest: Path) -> CopyOutcome:
		return CopyFileAction(src, dest, **self.__action_kwargs).run()

	def __copy_directory(self, src: Path, dest: Path, outcomes: CopyOutcomes, pending: List[_PendingEntry]):
		try:
			it = os.scandir(src)
		except OSError as e:
			self.logger.error('Could not open directory {!r}: {}'.format(str(src), e))
			outcomes.add(CopyOutcome.failed(src, dest, e))
			return

		with it:
			self.logger.debug('Opened source directory {!r}'.format(str(src)))
			try:
				dest.mkdir(mode=constants.DIRECTORY_MODE)
			except FileExistsError:
				pass
			except OSError as e:
				self.logger.error('Could not create destination directory {!r}: {}'.format(str(dest), e))
				outcomes.add(CopyOutcome.failed(src, dest, e))
				return
			self.logger.debug('Destination directory created or already exists: {!r}'.format(str(dest)))
			outcomes.add(CopyOutcome.directory(src, dest))

			# the handle is released before any child gets processed
			try:
				entries: List[os.DirEntry] = list(it)
			except OSError as e:
				self.logger.error('Failed to list directory {!r}: {}'.format(str(src), e))
				outcomes.add(CopyOutcome.failed(src, dest, e))
				return

		if self.sort_entries:
			entries.sort(key=lambda ent: ent.name)
		# reversed, so the first entry is popped first
		for entry in reversed(entries):
			pending.append(_PendingEntry(entry, src / entry.name, dest / entry.name))
		self.logger.debug('Finished listing directory {!r}, {} entries'.format(str(src), len(entries)))

	def __copy_entry(self, item: _PendingEntry, outcomes: CopyOutcomes, pending: List[_PendingEntry]):
		try:
			mode = item.entry.stat(follow_symlinks=False).st_mode
		except OSError as e:
			self.logger.warning('Could not stat entry {!r}: {}'.format(str(item.src_path), e))
			outcomes.add(CopyOutcome.skipped(item.src_path, item.dest_path, e))
			return

		if stat.S_ISDIR(mode):
			self.logger.debug('Found directory {!r}'.format(str(item.src_path)))
			self.__copy_directory(item.src_path, item.dest_path, outcomes, pending)
		elif stat.S_ISREG(mode):
			self.logger.debug('Found file {!r}'.format(str(item.src_path)))
			outcomes.add(self.__copy_file(item.src_path, item.dest_path))
		else:
			self.logger.warning('Skipped unsupported entry type {!r} mode={}'.format(str(item.src_path), oct(mode)))
			outcomes.add(CopyOutcome.skipped(item.src_path, item.dest_path))

	@override
	def run(self) -> CopyOutcomes:
		outcomes = CopyOutcomes()
		pending: List[_PendingEntry] = []  # work stack, top is the next entry in pre-order
		self.__copy_directory(self.src_path, self.dest_path, outcomes, pending)
		while len(pending) > 0:
			self.__copy_entry(pending.pop(), outcomes, pending)
		return outcomes
