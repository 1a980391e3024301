# Infrastructure Session Store Adapters Package
from .api_store import ApiSessionStore
from .file_store import FileSessionStore

__all__ = ["ApiSessionStore", "FileSessionStore"]
