# src/worldcache/archive/base_io.py
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional


class DirectoryTransform(ABC):
    """
    Base abstract class for the filesystem operations the cache controller relies on.
    """

    @abstractmethod
    def copy_directory(self, src: Path, dst: Path) -> None:
        """
        Recursively copy ``src`` to ``dst``. Raises OSError on failure.
        """
        pass

    @abstractmethod
    def delete_directory(self, path: Path) -> bool:
        """
        Recursively delete ``path``. Returns False if it could not be removed.
        """
        pass

    @abstractmethod
    def compress_directory(self, src: Path, dst_file: Path, root_name: Optional[str] = None) -> None:
        """
        Write the contents of ``src`` into the archive ``dst_file``. Raises OSError on failure.
        """
        pass

    @abstractmethod
    def delete_all_but_newest(self, directory: Path, name_prefix: str, keep: int) -> List[Path]:
        """
        Best-effort removal of all but the ``keep`` newest files starting with ``name_prefix``.
        """
        pass
