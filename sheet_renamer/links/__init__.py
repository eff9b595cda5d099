from .resolver import extract_file_id, resolve_link

__all__ = ["extract_file_id", "resolve_link"]
