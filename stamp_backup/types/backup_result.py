import dataclasses
import enum
from pathlib import Path
from typing import Optional

from stamp_backup.types.copy_outcome import CopyOutcomes


class BackupStatus(enum.Enum):
	success = enum.auto()
	partial_success = enum.auto()
	default_target_updated = enum.auto()


@dataclasses.dataclass(frozen=True)
class BackupResult:
	status: BackupStatus
	target_base_dir: Path
	backup_root: Optional[Path] = None
	outcomes: CopyOutcomes = dataclasses.field(default_factory=CopyOutcomes)
	cost: float = 0  # in seconds

	@property
	def is_partial(self) -> bool:
		return self.status == BackupStatus.partial_success
