import re


_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


# Turns an arbitrary storage key like "scorecounter:v1" into something every filesystem accepts.
def key_to_filename(key, suffix=".json"):
    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", key).strip(" .")
    if not cleaned:
        raise ValueError(f"Storage key {key!r} has no usable characters")
    return f"{cleaned}{suffix}"


# Parses user-typed integer text. Returns None on anything that isn't a whole number, including floats and blanks.
def parse_int(text):
    if isinstance(text, bool):
        return None
    if isinstance(text, int):
        return text
    if not isinstance(text, str):
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None
