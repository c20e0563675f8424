"""Session d'édition : mutations, sélection, drag & drop, undo/redo."""
from .history import History
from .store import EditSession, ZOOM_MIN, ZOOM_MAX

__all__ = ["History", "EditSession", "ZOOM_MIN", "ZOOM_MAX"]
