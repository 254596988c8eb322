import sys
from pathlib import Path
from typing import Optional

from trellis.config import load_config_from_path
from trellis.spec import BuildConfig


def get_project_root() -> Path:
    return Path.cwd()


def read_structure(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def make_build_config(
    verbose: bool = False,
    search: Optional[str] = None,
    replace: Optional[str] = None,
    replace_files: Optional[bool] = None,
    replace_folders: Optional[bool] = None,
) -> BuildConfig:
    # Composition Root: command-line values win over [tool.trellis].
    file_config = load_config_from_path(get_project_root())

    def pick(cli_value, file_value):
        return file_value if cli_value is None else cli_value

    return BuildConfig(
        verbose=verbose or file_config.verbose,
        search=pick(search, file_config.search),
        replace=pick(replace, file_config.replace),
        replace_file_names=pick(replace_files, file_config.replace_file_names),
        replace_folder_names=pick(replace_folders, file_config.replace_folder_names),
        working_dir=get_project_root(),
    )
