from .command import ARG_SEPARATOR, build_ginkgo_args, build_suite_args, split_ginkgo_args
from .process import build_child_env, kill_process_tree, resolve_binary, run_inherited

__all__ = [
    "ARG_SEPARATOR",
    "build_child_env",
    "build_ginkgo_args",
    "build_suite_args",
    "kill_process_tree",
    "resolve_binary",
    "run_inherited",
    "split_ginkgo_args",
]
