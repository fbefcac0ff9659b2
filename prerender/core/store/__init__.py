# prerender/core/store/__init__.py
from .access_log import access_log_path, format_access_line, log_access
from .error_pages import (
    default_error_page,
    get_404,
    get_500,
    get_error_page,
    set_404,
    set_500,
    set_error_page,
)
from .filenames import url_to_filename
from .files import atomic_write_bytes, atomic_write_text, human_file_size, list_files, read_bytes
from .layout import SUBDIRS, ensure_output_tree, is_writable_dir, output_paths
from .snapshots import get_snapshot, save_snapshot, snapshot_path

__all__ = [
    "url_to_filename",
    "output_paths",
    "ensure_output_tree",
    "is_writable_dir",
    "SUBDIRS",
    "human_file_size",
    "atomic_write_bytes",
    "atomic_write_text",
    "read_bytes",
    "list_files",
    "save_snapshot",
    "get_snapshot",
    "snapshot_path",
    "log_access",
    "access_log_path",
    "format_access_line",
    "get_error_page",
    "set_error_page",
    "default_error_page",
    "get_404",
    "set_404",
    "get_500",
    "set_500",
]
