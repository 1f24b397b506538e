__version__ = "0.1.0.dev0"

from .cli import execute, main
from .config import TesterConfig, default_config, parse_flags
from .tester import Tester, TesterState

__all__ = [
    "__version__",
    "Tester",
    "TesterConfig",
    "TesterState",
    "default_config",
    "execute",
    "main",
    "parse_flags",
]
