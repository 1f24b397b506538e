from .git import clone_repo
from .run_dir import resolve_run_dir

__all__ = [
    "clone_repo",
    "resolve_run_dir",
]
