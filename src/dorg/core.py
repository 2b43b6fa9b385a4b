#!/usr/bin/env python3
"""
Move files into date-based folders by their creation or modification time.
"""

import datetime
import os
from pathlib import Path
from typing import Any

from dorg.args import get_config
from dorg.models import AppConfig, FileItem, colorize, colors, is_date_dir
from dorg.print import (
    print_dir_errors,
    print_file_errors,
    print_folder_info,
    print_footer,
    print_header,
    print_process_file,
    print_progress,
    printe,
)


def skip_file_with_error(file: FileItem, error: str, skipped_files: list[str]) -> None:
    """
    Mark file as skipped with error message.

    Args:
        file: FileItem to mark as skipped
        error: Error message to set
        skipped_files: List to append filename to
    """
    file.error = error
    skipped_files.append(file.name_old)


def check_conditions(cfg: AppConfig) -> None:
    """Check if all conditions are met to run the script."""
    if cfg.show_version:
        date_str = f" ({cfg.script_date})" if cfg.script_date else ""
        msg = (
            f"{colorize(cfg.script_name, colors.green)} "
            f"version {colorize(cfg.script_version, colors.cyan)}{date_str}"
        )
        if cfg.script_author:
            msg += f" by {colorize(cfg.script_author, colors.cyan)}"
        printe(msg, 0)

    if not cfg.source_dir.is_dir():
        printe(
            f"The specified directory '{colorize(str(cfg.source_dir), colors.cyan)}' does not exist or is not a directory.",
            1,
        )

    if not cfg.source_dir_writable:
        printe(
            f"The specified directory '{colorize(str(cfg.source_dir), colors.cyan)}' is not writable.",
            1,
        )

    if cfg.quiet and cfg.verbose:
        printe("Cannot use both quiet mode and verbose mode.", 1)


def get_file_list(
    directory: Path, recursive: bool = False, skipped_dirs: list[tuple[str, str]] | None = None
) -> list[Path]:
    """
    Get a sorted list of regular files to organize.

    With recursive set, subdirectories are walked too, except year folders
    (e.g. '2023') which hold files that are already organized. Subdirectories
    that cannot be read are appended to skipped_dirs as (path, reason); an
    unreadable source directory raises.
    """
    if not recursive:
        files = [
            directory / name
            for name in os.listdir(directory)
            if (directory / name).is_file() and not (directory / name).is_symlink()
        ]
        return sorted(files, key=lambda x: x.name.lower())

    def on_walk_error(err: OSError) -> None:
        failed = Path(err.filename) if err.filename else directory
        if failed == directory:
            raise err
        if skipped_dirs is not None:
            skipped_dirs.append((failed.relative_to(directory).as_posix(), err.strerror or str(err)))

    files = []
    for root, dirnames, filenames in os.walk(directory, onerror=on_walk_error):
        root_path = Path(root)
        dirnames[:] = sorted(
            (d for d in dirnames if not is_date_dir(root_path / d)), key=str.lower
        )
        for name in filenames:
            path = root_path / name
            if path.is_file() and not path.is_symlink():
                files.append(path)
    return sorted(files, key=lambda x: str(x.relative_to(directory)).lower())


def get_folder_info(file_list: list[Path], cfg: AppConfig) -> dict[str, Any]:
    """Gather information about the folder and its files."""
    stat = cfg.source_dir.stat()
    info: dict[str, Any] = {
        "path": cfg.source_dir,
        "created": datetime.datetime.fromtimestamp(stat.st_ctime).strftime("%Y-%m-%d %H:%M:%S"),
        "modified": datetime.datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S"),
        "file_count": len(file_list),
        "dir_count": len({f.parent for f in file_list}),
        "processed_files": [],
        "skipped_files": [],
        "created_dirs": [],
        "skipped_dirs": [],
    }
    return info


def get_file_objects(
    file_list: list[Path], folder_info: dict[str, Any], cfg: AppConfig
) -> list[FileItem]:
    """Convert list of Paths to list of FileItem objects."""
    total = len(file_list)
    if not cfg.quiet:
        print(f"{colorize('Analyzing files:', colors.yellow)}")

    files = []
    for item, path in enumerate(file_list, start=1):
        file = FileItem(path, cfg)
        if not cfg.quiet:
            print_progress(item, total, colorize(file.name_old, colors.cyan), cfg)
        files.append(file)

    if not cfg.quiet:
        print(f"{cfg.terminal_clear}{cfg.indent}Completed.")

    folder_info["valid_files"] = sum(1 for f in files if f.is_valid)
    folder_info["invalid_files"] = len(files) - folder_info["valid_files"]
    return files


def process_files(files: list[FileItem], folder_info: dict[str, Any], cfg: AppConfig) -> None:
    """Create date folders and move files into them."""
    processed_files: list[str] = []
    skipped_files: list[str] = [f.name_old for f in files if not f.is_valid]
    source_root = cfg.source_dir.absolute()
    created_dirs: list[str] = []
    total_items = sum(1 for f in files if f.is_valid)

    if not cfg.quiet:
        print(f"{colorize('Moving files:', colors.yellow)}")

    for item, file in enumerate((f for f in files if f.is_valid), start=1):
        target_dir = file.path_new.parent

        if not cfg.test:
            try:
                missing = []
                parent = target_dir
                while parent != file.base_dir and not parent.is_dir():
                    missing.append(parent)
                    parent = parent.parent
                if missing:
                    target_dir.mkdir(parents=True, exist_ok=True)
                    created_dirs.extend(
                        p.relative_to(source_root).as_posix() for p in reversed(missing)
                    )
            except PermissionError:
                skip_file_with_error(
                    file,
                    f"Permission denied: cannot create directory '{file.relative_subdir}'.",
                    skipped_files,
                )
                continue
            except OSError as e:
                skip_file_with_error(
                    file,
                    f"Error creating directory '{file.relative_subdir}': {str(e)}",
                    skipped_files,
                )
                continue

        if file.path_new.exists():
            if cfg.collision == "rename":
                try:
                    file.path_new = file.get_unique_path(file.path_new)
                except RuntimeError as e:
                    skip_file_with_error(
                        file, f"Unable to generate unique filename: {str(e)}", skipped_files
                    )
                    continue
            else:
                skip_file_with_error(file, "Target file already exists.", skipped_files)
                continue

        if not cfg.test:
            try:
                file.path_old.rename(file.path_new)
            except PermissionError:
                skip_file_with_error(file, "Permission denied: cannot move file.", skipped_files)
                continue
            except FileNotFoundError:
                skip_file_with_error(file, "Source file no longer exists.", skipped_files)
                continue
            except FileExistsError:
                skip_file_with_error(
                    file, "Target file already exists (race condition).", skipped_files
                )
                continue
            except OSError as e:
                skip_file_with_error(file, f"File system error: {str(e)}", skipped_files)
                continue

        print_process_file(file, item, total_items, cfg)
        processed_files.append(file.name_old)

    if not cfg.quiet:
        if processed_files and not cfg.verbose:
            print(f"{cfg.terminal_clear}{cfg.indent}Done.")
        elif not processed_files:
            print(f"{cfg.indent}No files were moved.")
    if (cfg.verbose or cfg.show_errors) and skipped_files:
        print_file_errors(files, cfg)
    folder_info["processed_files"] = processed_files
    folder_info["skipped_files"] = skipped_files
    folder_info["created_dirs"] = created_dirs


def run(cfg: AppConfig) -> dict[str, Any]:
    """
    Organize the configured directory.

    Returns the folder info dict; len(info['processed_files']) is the number
    of files moved. Per-file failures are collected in info['skipped_files'],
    unreadable subdirectories of a recursive run in info['skipped_dirs'].

    Raises:
        FileNotFoundError: If the source directory does not exist
        NotADirectoryError: If the source path is not a directory
    """
    if not cfg.source_dir.exists():
        raise FileNotFoundError(f"Directory '{cfg.source_dir}' does not exist.")
    if not cfg.source_dir.is_dir():
        raise NotADirectoryError(f"'{cfg.source_dir}' is not a directory.")

    skipped_dirs: list[tuple[str, str]] = []
    file_list = get_file_list(cfg.source_dir, cfg.recursive, skipped_dirs)
    folder_info = get_folder_info(file_list, cfg)
    folder_info["skipped_dirs"] = skipped_dirs
    print_folder_info(folder_info, cfg)

    files = get_file_objects(file_list, folder_info, cfg)

    if folder_info["file_count"] == 0:
        if not cfg.quiet:
            print(f"{cfg.indent}No files to organize.")
    else:
        process_files(files, folder_info, cfg)

    if (cfg.verbose or cfg.show_errors) and skipped_dirs:
        print_dir_errors(skipped_dirs, cfg)
    return folder_info


def main() -> None:
    """Main function to run the date sorting process."""
    cfg = get_config()
    check_conditions(cfg)
    print_header(cfg)
    try:
        folder_info = run(cfg)
    except OSError as e:
        printe(str(e), 1)
    else:
        print_footer(folder_info, cfg)


if __name__ == "__main__":
    main()
