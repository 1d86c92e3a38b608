"""List model mirroring the fetch sequencer's result buffer."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, Dict, List, Optional

from PySide6.QtCore import QAbstractListModel, QModelIndex, QObject, Qt

from facetfeed.gui.viewmodels.fetch_sequencer import FetchSequencer

_LOGGER = logging.getLogger(__name__)


class ResultRoles(IntEnum):
    """Custom roles exposed to QML or widgets."""

    ITEM = Qt.UserRole + 1
    ITEM_ID = Qt.UserRole + 2
    TITLE = Qt.UserRole + 3
    COVER_URL = Qt.UserRole + 4


def item_title(item: Any) -> str:
    """Return a human-readable title for an opaque result item."""

    if not isinstance(item, dict):
        return str(item)
    title = item.get("title")
    if isinstance(title, dict):
        for key in ("userPreferred", "english", "romaji", "native"):
            if title.get(key):
                return str(title[key])
    elif title:
        return str(title)
    return str(item.get("id", ""))


class SearchResultsModel(QAbstractListModel):
    """Adapt the result buffer to Qt item views.

    Page 1 and buffer resets reset the model; later pages are inserted at the
    end so views keep their scroll position while more results stream in.
    """

    def __init__(self, sequencer: FetchSequencer, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._sequencer = sequencer
        self._items: List[Any] = list(sequencer.items.value)
        sequencer.buffer_reset.connect(self._on_buffer_reset)
        sequencer.page_accepted.connect(self._on_page_accepted)

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: N802
        if parent.isValid():
            return 0
        return len(self._items)

    def roleNames(self) -> Dict[int, bytes]:  # noqa: N802
        names = dict(super().roleNames())
        names.update(
            {
                ResultRoles.ITEM: b"item",
                ResultRoles.ITEM_ID: b"itemId",
                ResultRoles.TITLE: b"title",
                ResultRoles.COVER_URL: b"coverUrl",
            }
        )
        return names

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not 0 <= index.row() < len(self._items):
            return None
        item = self._items[index.row()]
        role_int = int(role)
        if role_int in (int(Qt.ItemDataRole.DisplayRole), ResultRoles.TITLE):
            return item_title(item)
        if role_int == ResultRoles.ITEM:
            return item
        if not isinstance(item, dict):
            return None
        if role_int == ResultRoles.ITEM_ID:
            return item.get("id")
        if role_int == ResultRoles.COVER_URL:
            cover = item.get("coverImage")
            return cover.get("large") if isinstance(cover, dict) else None
        return None

    def item_at(self, row: int) -> Optional[Any]:
        if 0 <= row < len(self._items):
            return self._items[row]
        return None

    def detach(self) -> None:
        """Stop following the sequencer."""
        self._sequencer.buffer_reset.disconnect(self._on_buffer_reset)
        self._sequencer.page_accepted.disconnect(self._on_page_accepted)

    def _on_buffer_reset(self) -> None:
        self.beginResetModel()
        self._items = []
        self.endResetModel()

    def _on_page_accepted(self, page: int, items: List[Any]) -> None:
        if page == 1:
            self.beginResetModel()
            self._items = list(items)
            self.endResetModel()
            return
        if not items:
            return
        first = len(self._items)
        self.beginInsertRows(QModelIndex(), first, first + len(items) - 1)
        self._items.extend(items)
        self.endInsertRows()
        _LOGGER.debug("Appended %d rows for page %d", len(items), page)
