PROGRAM_ID = 'stamp_backup'

# backup related
BACKUP_DIR_NAME_FORMAT = 'Backup %Y-%m-%d %H-%M-%S'
DIRECTORY_MODE = 0o755  # rwxr-xr-x

# platforms without PC_PATH_MAX
DEFAULT_MAX_PATH_LENGTH = 4096
