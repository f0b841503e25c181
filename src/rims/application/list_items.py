"""Application service: List Items use case (query)."""

from __future__ import annotations

from rims.domain.exceptions import EntityNotFoundError
from rims.domain.model.item import Item, ItemCategory
from rims.domain.repository.item_repository import ItemRepository


class ListItemsHandler:

    def __init__(self, item_repo: ItemRepository) -> None:
        self._item_repo = item_repo

    def handle(
        self,
        search: str | None = None,
        category: str | None = None,
        is_active: bool | None = None,
    ) -> list[Item]:
        """Return matching items, newest first.

        ``search`` is a case-insensitive substring match over the name and
        description.
        """
        wanted = ItemCategory.parse(category) if category else None
        needle = search.strip().lower() if search else None

        result = []
        for item in self._item_repo.list_all():
            if wanted is not None and item.category != wanted:
                continue
            if is_active is not None and item.is_active != is_active:
                continue
            if needle and needle not in f"{item.name} {item.description or ''}".lower():
                continue
            result.append(item)
        return sorted(result, key=lambda i: i.created_at, reverse=True)

    def get(self, item_id: str) -> Item:
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Item with ID '{item_id}' not found")
        return item
