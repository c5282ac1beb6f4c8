import os
import sys
from pathlib import Path
from dataclasses import dataclass

_APP_DIR_NAME = "ScoreCounter"

# Lil helper function to create missing directories.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Picks the folder that user data lives under. SCORECOUNTER_HOME wins outright (and is used as-is), otherwise
# APPDATA on Windows and the XDG data home everywhere else.
def _resolve_data_dir():
    override = os.getenv("SCORECOUNTER_HOME")
    if override:
        return Path(override)
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise RuntimeError("Missing APPDATA environment variable, cannot determine data directories.")
        return Path(appdata) / _APP_DIR_NAME
    xdg_data = os.getenv("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / _APP_DIR_NAME

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path
    current: Path

    @staticmethod
    def build():
        # Folder for all scorecounter user-specific stuff
        data = ensure_directory(_resolve_data_dir())

        # Folders within the data folder
        logs = ensure_directory(data / "logs")
        current = ensure_directory(data / "current")

        return ProjectPaths(
            data = data,
            logs = logs,
            current = current,
        )
PATHS = ProjectPaths.build()
