"""
Output logic for dorg.
"""

import sys
import time
from typing import Any

from dorg.models import MODE_SCHEMAS, AppConfig, FileItem, colorize, colors


def get_schema(cfg: AppConfig) -> str:
    """Get schema string based on current configuration."""
    file_org = "FileName.Ext"
    arrow = colorize("→", colors.yellow)
    folder = colorize(MODE_SCHEMAS.get(cfg.mode, MODE_SCHEMAS["month"]), colors.cyan)
    return f"{file_org} {arrow} {folder}/{file_org}"


def get_status(value: bool) -> str:
    """Get colored ON/OFF status."""
    return colorize("ON", colors.green) if value else colorize("OFF", colors.red)


def get_elapsed_time(start_time: float) -> tuple[str, str]:
    """Get elapsed time since script start."""
    elapsed_time = (time.time() - start_time) * 1000
    time_factor = "ms" if elapsed_time < 1000 else "s"
    elapsed_time = elapsed_time / 1000 if elapsed_time >= 1000 else elapsed_time
    return f"{elapsed_time:.2f}", time_factor


def print_schema(cfg: AppConfig) -> None:
    print(f"{colorize('Schema:', colors.yellow)}")
    print(f"{cfg.indent}{get_schema(cfg)}")


def print_progress(item: int, total: int, message: str, cfg: AppConfig) -> None:
    """Print progress of file processing."""
    percentage = (item / total) * 100 if total > 0 else 0
    msg = f"{cfg.terminal_clear}{cfg.indent}File {item} of {total}: {message} ({percentage:.0f}%)"
    print(msg, end="", flush=True)


def printe(message: str, exit_code: int = 1) -> None:
    """Print error message and exit with given exit code."""
    msg = message if exit_code == 0 else f"{colorize('Error', colors.red)}: {message}"
    print(msg, file=sys.stdout if exit_code == 0 else sys.stderr)
    sys.exit(exit_code)


def print_settings(cfg: AppConfig) -> None:
    cfg.print_config()


def print_header(cfg: AppConfig) -> None:
    """Print the header information based on current configuration."""
    if cfg.quiet:
        return
    print(
        f"{colorize('Date Organizer', colors.green)} ({colorize(cfg.script_name, colors.green)}) v{cfg.script_version}"
    )
    if cfg.show_settings:
        print_settings(cfg)
    print_schema(cfg)
    print(f"{colorize('Settings:', colors.yellow)}")
    if cfg.verbose:
        print(f"{cfg.indent}Verbose mode: {get_status(cfg.verbose)}")
    if cfg.test or cfg.verbose:
        print(f"{cfg.indent}Test mode: {get_status(cfg.test)}")
    print(f"{cfg.indent}Recursive: {get_status(cfg.recursive)}")
    print(f"{cfg.indent}Folder mode: {colorize(cfg.mode, colors.cyan)}")
    print(f"{cfg.indent}Sort by: {colorize(cfg.sort, colors.cyan)} time")
    if cfg.verbose or cfg.collision != "skip":
        print(f"{cfg.indent}On name collision: {colorize(cfg.collision, colors.cyan)}")


def print_footer(folder_info: dict[str, Any], cfg: AppConfig) -> None:
    """Print the footer summary based on folder information and configuration."""
    if cfg.quiet:
        return
    time_elapsed, time_factor = get_elapsed_time(cfg.start_time)
    print(f"{colorize('Summary:', colors.yellow)}")
    if cfg.test:
        print(f"{cfg.indent}Test mode (no changes made).")
        print(f"{cfg.indent}Files to move: {len(folder_info['processed_files'])}")
    else:
        print(f"{cfg.indent}Moved files: {len(folder_info['processed_files'])}")
        print(f"{cfg.indent}Skipped files: {len(folder_info['skipped_files'])}")
        print(f"{cfg.indent}Directories created: {len(folder_info['created_dirs'])}")
        if folder_info.get("skipped_dirs"):
            print(f"{cfg.indent}Unreadable directories: {len(folder_info['skipped_dirs'])}")
    print(f"{cfg.indent}Completed in: {colorize(time_elapsed, colors.cyan)} {time_factor}.")


def print_folder_info(folder_info: dict[str, Any], cfg: AppConfig) -> None:
    """Print folder information based on folder info and configuration."""
    if cfg.quiet:
        return
    print(f"{colorize('Folder info:', colors.yellow)}")
    print(f"{cfg.indent}Path: {colorize(str(cfg.source_dir), colors.cyan)}")
    print(f"{cfg.indent}Total files: {colorize(str(folder_info['file_count']), colors.cyan)}")
    if cfg.verbose:
        if cfg.recursive:
            print(
                f"{cfg.indent}Directories with files: {colorize(str(folder_info['dir_count']), colors.cyan)}"
            )
        print(f"{cfg.indent}Created: {colorize(folder_info['created'], colors.cyan)}")
        print(f"{cfg.indent}Modified: {colorize(folder_info['modified'], colors.cyan)}")


def print_file_errors(files: list[FileItem], cfg: AppConfig) -> None:
    """Print errors for files that were not valid or could not be moved."""
    invalid = [f for f in files if not f.is_valid]
    if invalid:
        print(f"{colorize('Files not valid:', colors.yellow)}")
        for file in invalid:
            print(
                f"{cfg.indent}{colorize(file.name_old, colors.cyan)}: {colorize(file.error, colors.red)}"
            )
    errors = [f for f in files if f.is_valid and f.error]
    if errors:
        print(f"{colorize('Files skipped:', colors.yellow)}")
        for file in errors:
            print(
                f"{cfg.indent}{colorize(file.name_old, colors.cyan)}: {colorize(file.error, colors.red)}"
            )


def print_dir_errors(skipped_dirs: list[tuple[str, str]], cfg: AppConfig) -> None:
    """Print directories that could not be read during a recursive walk."""
    if not skipped_dirs:
        return
    print(f"{colorize('Directories not read:', colors.yellow)}")
    for path, reason in skipped_dirs:
        print(f"{cfg.indent}{colorize(path, colors.cyan)}: {colorize(reason, colors.red)}")


def print_process_file(file: FileItem, item: int, total_items: int, cfg: AppConfig) -> None:
    """Print processing information for a single file."""
    if cfg.quiet:
        return
    if cfg.verbose:
        old = colorize(f"{file.name_old:<13}", colors.cyan)
        arr = colorize("→", colors.yellow)
        sub = f"{colorize(file.relative_subdir, colors.cyan)}/" if file.subdir else ""
        new = colorize(file.name_new, colors.cyan)
        ts = file.timestamp.strftime("%Y-%m-%d %H:%M:%S") if file.timestamp else ""
        print(f"{cfg.indent}{old} ({colorize(ts, colors.cyan)}) {arr} {sub}{new}")
    else:
        print_progress(item, total_items, colorize(file.name_old, colors.cyan), cfg)
