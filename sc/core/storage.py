import os
import tempfile
from pathlib import Path
from sc.common.logger import log
from sc.util import key_to_filename

# A tiny key-value slot store, the desktop stand-in for a browser's localStorage. Each key lives in its own file
# under `directory`. Errors are NOT swallowed here, callers decide how fatal they are.
class LocalStorage:

    def __init__(self, directory):
        self.directory = Path(directory)

    def path_for(self, key):
        return self.directory / key_to_filename(key)

    # Returns the stored text for key, or None if nothing was ever written.
    def get_item(self, key):
        path = self.path_for(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    # Writes to a temp file beside the target, then swaps it in, so a crash mid-write never leaves half a slot.
    def set_item(self, key, value):
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
        except BaseException:
            try: os.remove(tmp_path)
            except OSError: pass
            raise
        log.debug(f"Wrote {len(value)} chars to '{path}'")
