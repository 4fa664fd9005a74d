from pathlib import Path

from workout_logger.settings import settings

# Pre-flight checks for import/export paths.
# Each returns None when the path is usable, otherwise the reason.


def _has_allowed_extension(path: Path) -> bool:
    return path.suffix.lower() in settings.ALLOWED_FILE_EXTENSIONS


def check_import_path(file_path: str | None) -> str | None:
    if file_path is None or not str(file_path).strip():
        return "Invalid file path: null or blank."

    path = Path(file_path)
    if not path.is_file():
        return f"File not found or not a regular file: {file_path}"
    if not _has_allowed_extension(path):
        return "Invalid file extension. Only .txt or .csv allowed."
    return None


def check_export_path(file_path: str | None) -> str | None:
    if file_path is None or not str(file_path).strip():
        return "Invalid file path."

    path = Path(file_path)
    if not _has_allowed_extension(path):
        return "Invalid file extension. Only .txt or .csv allowed."
    if not path.parent.is_dir():
        return "Parent directory does not exist."
    return None
