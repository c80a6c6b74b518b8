import dataclasses
from pathlib import Path
from typing import Optional


@dataclasses.dataclass(frozen=True)
class BackupRequest:
	source_path: Optional[Path]
	target_base_dir: Optional[Path]  # None: use the persisted default target
	override_default: bool = False

	@classmethod
	def backup(cls, source_path: Path, target_base_dir: Optional[Path] = None) -> 'BackupRequest':
		return BackupRequest(source_path=source_path, target_base_dir=target_base_dir)

	@classmethod
	def set_default_target(cls, target_base_dir: Path) -> 'BackupRequest':
		return BackupRequest(source_path=None, target_base_dir=target_base_dir, override_default=True)
