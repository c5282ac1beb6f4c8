import json
from sc.common.logger import log
from sc.common.setup import PATHS
from sc.core.counter import Counter


# The storage key changes whenever the envelope shape does, so an old build never misreads a new payload.
STORAGE_KEY = "scorecounter:v1"
SCHEMA_VERSION = 1

#region === Settings ===

SETTINGS_PATH = PATHS.current / "settings.json"

# Default values for every user setting. Types here are also what load_settings() validates against.
_SETTINGS_DEFAULTS = {
    "long_press_ms": 520,
    "min_row_height_px": 96,
    "always_on_top": False,
    "confirm_delete": False,
    "window_width": 420,
    "window_height": 720,
}

def default_settings():
    return dict(_SETTINGS_DEFAULTS)

# Loads settings.json, filling in (and reporting) every key that's missing or has the wrong type.
def load_settings():
    if not SETTINGS_PATH.exists():
        log.info(f"No settings file at '{SETTINGS_PATH}', using defaults.")
        return default_settings()
    try:
        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError):
        log.warning(f"Could not read settings from '{SETTINGS_PATH}', falling back to defaults.", exc_info=True)
        return default_settings()
    if not isinstance(raw, dict):
        log.warning(f"Settings file '{SETTINGS_PATH}' is not an object, falling back to defaults.")
        return default_settings()

    settings = {}
    defaulted_values = set()
    for key, default in _SETTINGS_DEFAULTS.items():
        value = raw.get(key)
        # bool is an int subclass, so it has to be checked by exact type
        if type(value) is not type(default):
            defaulted_values.add(key)
            value = default
        settings[key] = value

    if defaulted_values:
        log.warning(f"Loaded settings from '{SETTINGS_PATH}', but with missing values that were defaulted: {', '.join(sorted(defaulted_values))}")
    else:
        log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
    return settings

def save_settings(settings):
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")

#endregion === Settings ===

#region === Counter envelope ===

def build_envelope(counters):
    return {
        "schema_version": SCHEMA_VERSION,
        "counters": [c.to_dict() for c in counters],
    }

# Parses raw slot text into a list of Counters. Raises ValueError if the text isn't a valid envelope.
def decode_envelope(raw):
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Stored counters are not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError("Stored counters envelope is not an object")

    version = payload.get("schema_version")
    if isinstance(version, bool) or not isinstance(version, int) or version < 0:
        raise ValueError(f"Envelope has an invalid schema_version: {version!r}")
    entries = payload.get("counters")
    if not isinstance(entries, list):
        raise ValueError("Envelope 'counters' is missing or not a list")

    counters = [Counter.from_dict(entry) for entry in entries]
    if version != SCHEMA_VERSION:
        # Only one envelope shape has ever existed, so other versions pass through untouched. A future schema
        # needs its own transform here.
        log.warning(f"Stored counters use schema_version {version}, expected {SCHEMA_VERSION}. Accepting as-is.")
    return counters

#endregion === Counter envelope ===

#region === Saving and Loading Counters ===

class PersistenceAdapter:
    """Reads the counter slot once at startup and writes it on every change afterward.

    Writes are refused until load() has run, so the empty in-memory default can never clobber persisted
    counters that haven't been read yet. All storage failures are logged and swallowed, the in-memory
    collection stays the source of truth for the running session.
    """

    def __init__(self, storage, key=STORAGE_KEY):
        self.storage = storage
        self.key = key
        self.loaded = False

    def load(self):
        """Return the persisted counters, or an empty list if there are none or they can't be read."""
        counters = []
        try:
            raw = self.storage.get_item(self.key)
            if raw is None:
                log.info(f"No stored counters under '{self.key}', starting empty.")
            else:
                counters = decode_envelope(raw)
                log.info(f"Successfully loaded {len(counters)} counters from '{self.key}'.")
        except (OSError, UnicodeDecodeError, ValueError):
            log.warning(f"Ran into an error while loading counters from '{self.key}', starting empty.", exc_info=True)
            counters = []
        self.loaded = True
        return counters

    def save(self, counters):
        """Write counters to the slot. Returns True on success, False if skipped or failed."""
        if not self.loaded:
            log.warning(f"Skipped writing counters to '{self.key}' before the initial load finished.")
            return False
        try:
            payload = json.dumps(build_envelope(counters))
            self.storage.set_item(self.key, payload)
        except (OSError, TypeError, ValueError):
            log.warning(f"Failed to persist counters to '{self.key}', keeping them in memory only.", exc_info=True)
            return False
        log.debug(f"Persisted {len(counters)} counters to '{self.key}'")
        return True

#endregion === Saving and Loading Counters ===
