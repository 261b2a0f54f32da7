"""Row selection for bulk actions"""

from typing import Iterable, List, Set


class Selection:
    """Set of selected row ids"""

    def __init__(self):
        self.ids: Set[str] = set()

    def toggle(self, item_id: str):
        if item_id in self.ids:
            self.ids.discard(item_id)
        else:
            self.ids.add(item_id)

    def toggle_all(self, visible_ids: Iterable[str]):
        """
        Select every visible row, or clear if they are all selected already.
        """
        visible = set(visible_ids)
        if self.ids == visible:
            self.ids = set()
        else:
            self.ids = visible

    def clear(self):
        self.ids = set()

    def is_selected(self, item_id: str) -> bool:
        return item_id in self.ids

    def all_selected(self, visible_ids: Iterable[str]) -> bool:
        visible = set(visible_ids)
        return bool(visible) and self.ids == visible

    def to_list(self) -> List[str]:
        return sorted(self.ids)

    def __len__(self) -> int:
        return len(self.ids)

    def __bool__(self) -> bool:
        return bool(self.ids)

    def __contains__(self, item_id: str) -> bool:
        return item_id in self.ids
