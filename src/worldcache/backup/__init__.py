from worldcache.backup.backup_unit import BackupUnit

__all__ = ["BackupUnit"]
