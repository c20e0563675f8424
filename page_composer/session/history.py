"""
Historique undo/redo linéaire et borné.

Chaque entrée est une copie profonde du template complet. Une nouvelle
entrée poussée après un undo efface le futur ; au-delà de `limit`, la plus
ancienne entrée est évincée et le curseur recule d'un cran.
"""
import time
from typing import List, Optional

from .. import config
from ..core.schemas import HistoryEntry, Template


class History:

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit if limit is not None else config.HISTORY_LIMIT
        if self.limit < 1:
            raise ValueError("La taille d'historique doit être >= 1")
        self._entries: List[HistoryEntry] = []
        self._index = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    @property
    def current(self) -> Optional[HistoryEntry]:
        return self._entries[self._index] if self._index >= 0 else None

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def push(self, template: Template, action: str, action_ar: str = "") -> HistoryEntry:
        del self._entries[self._index + 1:]
        entry = HistoryEntry(
            timestamp=time.time(),
            action=action,
            action_ar=action_ar,
            state=template.model_copy(deep=True),
        )
        self._entries.append(entry)
        self._index = len(self._entries) - 1

        if len(self._entries) > self.limit:
            self._entries.pop(0)
            self._index -= 1
        return entry

    def undo(self) -> Optional[Template]:
        """Recule le curseur ; retourne une copie de l'état, ou None en bout d'historique."""
        if not self.can_undo():
            return None
        self._index -= 1
        return self._entries[self._index].state.model_copy(deep=True)

    def redo(self) -> Optional[Template]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._entries[self._index].state.model_copy(deep=True)

    def clear(self) -> None:
        self._entries = []
        self._index = -1
