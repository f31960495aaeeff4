#!filepath: mobsim/utils/filesystem.py
from pathlib import Path

from mobsim import logs


class FileSystem:
    """
    Filesystem helpers shared by the trace writer, the workflows and the CLI
    - create directories on demand
    - file size / human readable size
    """

    @staticmethod
    def ensure_dir(path: str | Path) -> Path:
        """
        Create the directory (and parents) if it does not exist yet.
        """
        p = Path(path)
        if not p.exists():
            p.mkdir(parents=True, exist_ok=True)
            logs.debug(f"[FS] created directory: {p}")
        return p

    @staticmethod
    def file_exists(path: str | Path) -> bool:
        return Path(path).exists()

    @staticmethod
    def get_file_size(path: str | Path) -> int:
        """
        File size in bytes, 0 when the file does not exist.
        """
        p = Path(path)
        if not p.exists():
            return 0
        return p.stat().st_size

    @staticmethod
    def format_size(size_bytes: int) -> str:
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if size_bytes < 1024:
                return f"{size_bytes:.2f} {unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f} PB"

