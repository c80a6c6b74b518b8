import dataclasses
import enum
from pathlib import Path
from typing import List, Iterator, Optional, Iterable


class CopyOutcomeKind(enum.Enum):
	file = enum.auto()
	directory = enum.auto()
	skipped = enum.auto()
	failed = enum.auto()


@dataclasses.dataclass(frozen=True)
class CopyOutcome:
	path: Path  # the source entry
	dest: Path
	kind: CopyOutcomeKind
	error: Optional[Exception] = None
	permission_error: Optional[Exception] = None  # soft failure, only for kind == file
	size: int = 0  # copied bytes

	@classmethod
	def file(cls, path: Path, dest: Path, size: int, *, permission_error: Optional[Exception] = None) -> 'CopyOutcome':
		return CopyOutcome(path, dest, CopyOutcomeKind.file, size=size, permission_error=permission_error)

	@classmethod
	def directory(cls, path: Path, dest: Path) -> 'CopyOutcome':
		return CopyOutcome(path, dest, CopyOutcomeKind.directory)

	@classmethod
	def skipped(cls, path: Path, dest: Path, error: Optional[Exception] = None) -> 'CopyOutcome':
		return CopyOutcome(path, dest, CopyOutcomeKind.skipped, error=error)

	@classmethod
	def failed(cls, path: Path, dest: Path, error: Exception) -> 'CopyOutcome':
		return CopyOutcome(path, dest, CopyOutcomeKind.failed, error=error)

	@property
	def is_failed(self) -> bool:
		return self.kind == CopyOutcomeKind.failed

	@property
	def is_success(self) -> bool:
		return self.kind in (CopyOutcomeKind.file, CopyOutcomeKind.directory)

	def to_line(self) -> str:
		line = '{} {}'.format(self.kind.name, self.path)
		if self.error is not None:
			line += ': ({}) {}'.format(type(self.error).__name__, self.error)
		if self.permission_error is not None:
			line += ', permissions not set: ({}) {}'.format(type(self.permission_error).__name__, self.permission_error)
		return line


class CopyOutcomes:
	def __init__(self, outcomes: Optional[Iterable[CopyOutcome]] = None):
		self.outcomes: List[CopyOutcome] = list(outcomes) if outcomes is not None else []

	def add(self, outcome: CopyOutcome):
		self.outcomes.append(outcome)

	def extend(self, outcomes: Iterable[CopyOutcome]):
		self.outcomes.extend(outcomes)

	def __len__(self) -> int:
		return len(self.outcomes)

	def __iter__(self) -> Iterator[CopyOutcome]:
		return self.outcomes.__iter__()

	def __getitem__(self, index: int) -> CopyOutcome:
		return self.outcomes[index]

	def __of_kind(self, kind: CopyOutcomeKind) -> List[CopyOutcome]:
		return [o for o in self.outcomes if o.kind == kind]

	def files(self) -> List[CopyOutcome]:
		return self.__of_kind(CopyOutcomeKind.file)

	def directories(self) -> List[CopyOutcome]:
		return self.__of_kind(CopyOutcomeKind.directory)

	def skipped(self) -> List[CopyOutcome]:
		return self.__of_kind(CopyOutcomeKind.skipped)

	def failed(self) -> List[CopyOutcome]:
		return self.__of_kind(CopyOutcomeKind.failed)

	def permission_warnings(self) -> List[CopyOutcome]:
		return [o for o in self.outcomes if o.permission_error is not None]

	def has_failure(self) -> bool:
		return any(o.is_failed for o in self.outcomes)

	def copied_bytes(self) -> int:
		return sum(o.size for o in self.files())

	def to_lines(self, *, failed_only: bool = False) -> List[str]:
		return [o.to_line() for o in self.outcomes if o.is_failed or not failed_only]
