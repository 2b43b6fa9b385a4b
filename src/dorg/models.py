import datetime
import re
import time
import tomllib
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any


@lru_cache(maxsize=1)
def _get_pyproject_data() -> dict[str, Any]:
    """
    Load data from pyproject.toml located in the project root.
    Cached to prevent multiple file reads.
    Assumes structure: project_root/src/dorg/models.py
    """
    try:
        pyproject_path = Path(__file__).parents[2] / "pyproject.toml"

        if not pyproject_path.is_file():
            return {}

        with open(pyproject_path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def _get_script_version() -> str:
    """Get version from pyproject.toml [project] section."""
    data = _get_pyproject_data()
    return str(data.get("project", {}).get("version", "0.0.0"))


def _get_script_date() -> str:
    """Get date from pyproject.toml [tool.dorg] section."""
    data = _get_pyproject_data()
    return str(data.get("tool", {}).get("dorg", {}).get("date", ""))


def _get_script_name() -> str:
    data = _get_pyproject_data()
    return str(data.get("project", {}).get("name", "dorg"))


def _get_script_author() -> str:
    """Get first author name from [project.authors]."""
    data = _get_pyproject_data()
    authors = data.get("project", {}).get("authors", [])
    if isinstance(authors, list) and len(authors) > 0:
        return str(authors[0].get("name", ""))
    return ""


# Granularity mode -> strftime pattern of the destination subdirectory
MODE_TEMPLATES: dict[str, str] = {
    "month": "%Y/%m",
    "day": "%Y/%m/%d",
}

MODE_SCHEMAS: dict[str, str] = {
    "month": "YYYY/MM",
    "day": "YYYY/MM/DD",
}

SORT_SOURCES: tuple[str, ...] = ("created", "modified")
COLLISION_POLICIES: tuple[str, ...] = ("skip", "rename")

# Top-level folder name produced by every mode
YEAR_DIR_PATTERN = re.compile(r"^\d{4}$")


@dataclass
class Colors:
    """Terminal color codes."""

    reset: str = "\033[0m"
    red: str = "\033[31m"
    green: str = "\033[32m"
    yellow: str = "\033[33m"
    cyan: str = "\033[36m"
    magenta: str = "\033[35m"


# global Colors instance
colors = Colors()


def colorize(text: str, color: str) -> str:
    """Wrap text in color codes."""
    return f"{color}{text}{colors.reset}"


def is_date_dir(path: Path) -> bool:
    """Return True if the directory name looks like a year folder created by dorg."""
    return bool(YEAR_DIR_PATTERN.match(path.name))


def get_file_timestamp(path: Path, sort: str) -> datetime.datetime:
    """
    Read the timestamp used to bucket a file.

    Args:
        path: File to inspect
        sort: Timestamp source, 'created' or 'modified'

    Returns:
        Local datetime of the file's creation or modification time

    Raises:
        OSError: If the file metadata cannot be read
    """
    st = path.stat()
    if sort == "created":
        # Linux stat() has no birth time, use mtime there
        ts = getattr(st, "st_birthtime", None)
        if ts is None:
            ts = st.st_mtime
    else:
        ts = st.st_mtime
    return datetime.datetime.fromtimestamp(ts)


@dataclass(frozen=True)
class AppConfig:
    """Application configuration with default values."""

    # Settings
    mode: str = "month"
    sort: str = "created"
    collision: str = "skip"
    recursive: bool = False

    # Formatting
    indent: str = "    "
    terminal_clear: str = "\r\033[K\r"

    # Flags
    quiet: bool = False
    show_version: bool = False
    show_errors: bool = False
    show_settings: bool = False
    test: bool = False
    verbose: bool = False

    # Runtime metadata
    script_name: str = field(default_factory=_get_script_name)
    script_version: str = field(default_factory=_get_script_version)
    script_date: str = field(default_factory=_get_script_date)
    script_author: str = field(default_factory=_get_script_author)

    # Runtime state
    start_time: float = field(default_factory=time.time)
    source_dir: Path = field(default_factory=Path.cwd)
    source_dir_writable: bool = False

    def print_config(self) -> None:
        """
        Print all configuration properties alphabetically.
        """
        print(f"{colorize('RAW Settings:', colors.yellow)}")

        for key in sorted(self.__dict__.keys()):
            if key == "terminal_clear":
                continue

            value = getattr(self, key)
            print(f"{self.indent}{key}: {colorize(str(value), colors.cyan)}")


class PathGenerator:
    """
    Generates destination directories and paths for files.

    Keeps path computation apart from reading file metadata.
    """

    def __init__(self, config: AppConfig):
        self.cfg = config

    def generate_subdir(self, date_time: datetime.datetime) -> str:
        """
        Generate the date subdirectory for a timestamp.

        Args:
            date_time: Timestamp of the file

        Returns:
            Relative subdirectory such as '2023/04' or '2023/04/17'
        """
        format_str = MODE_TEMPLATES.get(self.cfg.mode, MODE_TEMPLATES["month"])
        return date_time.strftime(format_str)

    def generate_path(self, base_dir: Path, subdir: str, filename: str) -> Path:
        """Join the base directory, date subdirectory and filename."""
        return (base_dir / subdir / filename).absolute()

    def generate_unique_path(self, base_path: Path) -> Path:
        """
        Generate unique file path by adding _1, _2, etc. suffix if file exists.

        Raises:
            RuntimeError: If unable to find unique name after 9999 attempts
        """
        if not base_path.exists():
            return base_path

        stem = base_path.stem
        ext = base_path.suffix
        parent = base_path.parent

        counter = 1
        while True:
            new_path = parent / f"{stem}_{counter}{ext}"
            if not new_path.exists():
                return new_path
            counter += 1
            if counter > 9999:
                raise RuntimeError(f"Could not generate unique filename after {counter} attempts")


class FileItem:
    """A file to organize, with its timestamp and destination."""

    def __init__(
        self, path: Path, config: AppConfig, timestamp: datetime.datetime | None = None
    ):
        self.cfg = config
        self.path_gen = PathGenerator(config)
        self.path_old = path.absolute()
        self.base_dir = self.path_old.parent
        self.name_old = path.name
        self.name_new = path.name
        self.error = ""
        self.is_valid = True
        self.timestamp = timestamp
        self.subdir: str | None = None
        self.path_new: Path | None = None

        if not self._validate_file():
            return

        self._read_timestamp()
        if self.is_valid:
            self._generate_destination()

    def _validate_file(self) -> bool:
        if not self.path_old.exists():
            self.error = "File does not exist."
            self.is_valid = False
            return False

        if self.path_old.is_symlink() or not self.path_old.is_file():
            self.error = "Not a regular file."
            self.is_valid = False
            return False

        return True

    def _read_timestamp(self) -> None:
        if self.timestamp is not None:
            return
        try:
            self.timestamp = get_file_timestamp(self.path_old, self.cfg.sort)
        except OSError as e:
            self.error = f"Cannot read {self.cfg.sort} time: {e.strerror or e}"
            self.is_valid = False

    def _generate_destination(self) -> None:
        self.subdir = self.path_gen.generate_subdir(self.timestamp)
        self.path_new = self.path_gen.generate_path(self.base_dir, self.subdir, self.name_old)

    @property
    def relative_subdir(self) -> str:
        """Destination directory relative to the configured source directory."""
        if self.subdir is None:
            return ""
        try:
            rel = self.base_dir.relative_to(self.cfg.source_dir.absolute())
        except ValueError:
            return self.subdir
        return (rel / self.subdir).as_posix()

    def get_unique_path(self, base_path: Path) -> Path:
        """Pick a free name in the destination directory and record it as the new name."""
        new_path = self.path_gen.generate_unique_path(base_path)
        self.name_new = new_path.name
        return new_path
