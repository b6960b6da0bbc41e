from . import conflicts, files, health, uploads

__all__ = ["conflicts", "files", "health", "uploads"]
