import os
import pathlib as pl

# everything lives under GRIDCRS_HOME, ~/.gridcrs when unset
BASE_DIR = pl.Path(os.environ.get("GRIDCRS_HOME", pl.Path.home() / ".gridcrs"))

LOGS_DIR = BASE_DIR / "logs"

# CONFIGURATION DIRECTORIES -----------
CONFIG_DIR = BASE_DIR / "config"

