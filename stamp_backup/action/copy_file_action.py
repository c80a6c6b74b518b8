import os
import stat
from pathlib import Path
from typing import Optional

from typing_extensions import override

from stamp_backup.action import Action
from stamp_backup.types.copy_outcome import CopyOutcome


class ShortWrite(OSError):
	def __init__(self, expected: int, written: int):
		super().__init__('short write, expected {} bytes but wrote {}'.format(expected, written))
		self.expected = expected
		self.written = written


class CopyFileAction(Action[CopyOutcome]):
	"""
	Copy the content and the permission bits of a single regular file.
	Failures are reported in the returned outcome, never raised.
	A partially written dest file is left as it is
	"""

	def __init__(self, src_path: Path, dest_path: Path, *, chunk_size: Optional[int] = None, **kwargs):
		super().__init__(**kwargs)
		self.src_path = src_path
		self.dest_path = dest_path
		self.chunk_size = chunk_size if chunk_size is not None else self.config.copy_chunk_size

	def __stream(self, f_src, f_dst) -> int:
		copied = 0
		while chunk := f_src.read(self.chunk_size):
			written = f_dst.write(chunk)
			if written is not None and written != len(chunk):
				raise ShortWrite(len(chunk), written)
			copied += len(chunk)
		return copied

	@override
	def run(self) -> CopyOutcome:
		src, dest = self.src_path, self.dest_path
		try:
			f_src = open(src, 'rb')
		except OSError as e:
			self.logger.error('Could not open source file {!r}: {}'.format(str(src), e))
			return CopyOutcome.failed(src, dest, e)

		with f_src:
			self.logger.debug('Opened source file {!r}'.format(str(src)))
			try:
				f_dst = open(dest, 'wb')
			except OSError as e:
				self.logger.error('Could not open destination file {!r}: {}'.format(str(dest), e))
				return CopyOutcome.failed(src, dest, e)

			self.logger.debug('Created destination file {!r}'.format(str(dest)))
			try:
				with f_dst:
					copied = self.__stream(f_src, f_dst)
			except OSError as e:
				self.logger.error('I/O error occurred while copying file {!r} -> {!r}: {}'.format(str(src), str(dest), e))
				return CopyOutcome.failed(src, dest, e)

		self.logger.debug('File copy completed: {!r} -> {!r}'.format(str(src), str(dest)))

		permission_error: Optional[Exception] = None
		try:
			os.chmod(dest, stat.S_IMODE(os.stat(src).st_mode))
		except OSError as e:
			permission_error = e
			self.logger.warning('Permissions not set correctly for {!r}: {}'.format(str(dest), e))
		else:
			self.logger.debug('Permissions set successfully for {!r}'.format(str(dest)))

		return CopyOutcome.file(src, dest, copied, permission_error=permission_error)
