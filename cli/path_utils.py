# cli/path_utils.py

import os

CSV_EXPORT_FILENAME = "htic-progress.csv"
JSON_EXPORT_FILENAME = "htic-data.json"


def resolve_export_path(export_dir: str, filename: str, user_input: str | None) -> str:
    """
    Resolves the file path for an export based on user input or the configured export directory.

    Args:
        export_dir (str): The configured export directory.
        filename (str): The default file name for this kind of export.
        user_input (str | None): An optional user-specified path. If it names an existing directory, the default file name is placed inside it.

    Returns:
        An absolute file path.
    """
    if user_input is None:
        path = os.path.join(export_dir, filename)
    else:
        path = os.path.expanduser(user_input.strip())
        if os.path.isdir(path):
            path = os.path.join(path, filename)

    return os.path.abspath(path)


def write_text_file(path: str, content: str) -> None:
    """
    Writes UTF-8 text to `path`, overwriting any existing file. Missing parent directories are created.
    """
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def read_text_file(path: str) -> str:
    with open(os.path.abspath(os.path.expanduser(path)), "r", encoding="utf-8") as f:
        return f.read()
