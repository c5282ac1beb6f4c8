from .misc import key_to_filename, parse_int

__all__ = ["key_to_filename", "parse_int"]
