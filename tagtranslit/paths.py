from __future__ import annotations
from pathlib import Path
from platformdirs import PlatformDirs

APP = "tagtranslit"
AUTHOR = "tagtranslit"


def get_dirs() -> dict[str, Path]:
    d = PlatformDirs(appname=APP, appauthor=AUTHOR, roaming=True)
    paths = {
        "config": Path(d.user_config_dir), # config files
        "logs": Path(d.user_log_dir),      # rotating run logs
    }
    for p in paths.values():
        p.mkdir(parents=True, exist_ok=True)
    return paths
