"""Per-user directories for ytlive.

Resolved with platformdirs. ``YTLIVE_CONFIG_DIR`` and ``YTLIVE_DATA_DIR``
point them somewhere else, e.g. a temporary directory under test.
"""

import os
from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "ytlive"

_dirs = PlatformDirs(APP_NAME, appauthor=False)


def _from_env(key: str, default: Path) -> str:
    return os.environ.get(key) or str(default)


class GlobalPath:
    @classmethod
    def config(cls) -> str:
        """Holds the global ``config.json`` / ``ytlive.json[c]``."""
        return _from_env("YTLIVE_CONFIG_DIR", _dirs.user_config_path)

    @classmethod
    def data(cls) -> str:
        return _from_env("YTLIVE_DATA_DIR", _dirs.user_data_path)

    @classmethod
    def log(cls) -> str:
        """Run logs, pruned by ``Log.configure``."""
        return str(Path(cls.data()) / "log")
