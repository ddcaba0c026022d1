"""
Sparse menu grid: date -> service -> meal plan -> sub meal plan -> item ids.

Only populated cells need to exist. Every lookup treats a missing level the
same as an empty cell, so callers never need None checks. The same type
holds a combined menu's master grid and a projected company menu.
"""
from collections.abc import Iterable, Iterator, Mapping
from datetime import date
from typing import Optional, Union

DateLike = Union[str, date]

# date -> service -> meal plan -> sub meal plan -> item ids
GridTree = dict[str, dict[str, dict[str, dict[str, set[str]]]]]

CELL_ITEMS_KEY = "menuItemIds"

_EMPTY: Mapping = {}


def _key(day: DateLike) -> str:
    return day.isoformat() if isinstance(day, date) else day


def _cell_items(raw) -> set[str]:
    if isinstance(raw, Mapping):
        raw = raw.get(CELL_ITEMS_KEY) or []
    if isinstance(raw, str) or not isinstance(raw, Iterable):
        raise TypeError(f"Menu cell must hold a list of item ids, got {raw!r}")
    return {str(item_id) for item_id in raw}


def _mapping(raw, level: str) -> Mapping:
    if raw is None:
        return _EMPTY
    if not isinstance(raw, Mapping):
        raise TypeError(f"Menu grid {level} level must be a mapping, got {type(raw).__name__}")
    return raw


class MenuGrid:
    def __init__(self, tree: Optional[GridTree] = None):
        self._tree: GridTree = tree if tree is not None else {}

    # --- Serialization ---

    @classmethod
    def from_dict(cls, menu_data: Optional[Mapping]) -> "MenuGrid":
        """Build from the stored JSON form, copying every cell."""
        tree: GridTree = {}
        for day, services in _mapping(menu_data, "date").items():
            day_node = tree.setdefault(_key(day), {})
            for service_id, meal_plans in _mapping(services, "service").items():
                service_node = day_node.setdefault(service_id, {})
                for meal_plan_id, sub_meal_plans in _mapping(meal_plans, "meal plan").items():
                    meal_plan_node = service_node.setdefault(meal_plan_id, {})
                    for sub_meal_plan_id, cell in _mapping(sub_meal_plans, "sub meal plan").items():
                        meal_plan_node[sub_meal_plan_id] = _cell_items(cell)
        return cls(tree)

    def to_dict(self) -> dict:
        """JSON form; item ids sorted so documents compare stably."""
        return {
            day: {
                service_id: {
                    meal_plan_id: {
                        sub_meal_plan_id: {CELL_ITEMS_KEY: sorted(items)}
                        for sub_meal_plan_id, items in sub_meal_plans.items()
                    }
                    for meal_plan_id, sub_meal_plans in meal_plans.items()
                }
                for service_id, meal_plans in services.items()
            }
            for day, services in self._tree.items()
        }

    def copy(self) -> "MenuGrid":
        return MenuGrid.from_dict(self.to_dict())

    # --- Reads ---

    def _branch(self, *keys: str) -> Mapping:
        node: Mapping = self._tree
        for key in keys:
            node = node.get(key, _EMPTY)
            if not node:
                return _EMPTY
        return node

    def get_cell(
        self, day: DateLike, service_id: str, meal_plan_id: str, sub_meal_plan_id: str
    ) -> frozenset[str]:
        """Items in a cell, empty when any level of the path is absent."""
        meal_plan_node = self._branch(_key(day), service_id, meal_plan_id)
        return frozenset(meal_plan_node.get(sub_meal_plan_id, ()))

    def has_content(
        self,
        day: DateLike,
        service_id: Optional[str] = None,
        meal_plan_id: Optional[str] = None,
    ) -> bool:
        """True when any non-empty cell exists beneath the given prefix."""
        keys = [_key(day)]
        if service_id is not None:
            keys.append(service_id)
            if meal_plan_id is not None:
                keys.append(meal_plan_id)
        node = self._branch(*keys)
        return any(items for *_, items in self._walk(node, len(keys)))

    @staticmethod
    def _walk(node: Mapping, depth: int) -> Iterator[tuple]:
        if depth == 4:
            yield (node,)
            return
        for key, child in node.items():
            for rest in MenuGrid._walk(child, depth + 1):
                yield (key, *rest)

    def cells(self) -> Iterator[tuple[str, str, str, str, frozenset[str]]]:
        """Every stored cell, empty ones included."""
        for day, service_id, meal_plan_id, sub_meal_plan_id, items in self._walk(self._tree, 0):
            yield day, service_id, meal_plan_id, sub_meal_plan_id, frozenset(items)

    def dates(self) -> list[str]:
        return sorted(self._tree)

    def day(self, day: DateLike) -> dict:
        """JSON form of one date's subtree."""
        return MenuGrid({_key(day): self._tree.get(_key(day), {})}).to_dict().get(_key(day), {})

    def item_ids(self) -> set[str]:
        return {item_id for *_, items in self.cells() for item_id in items}

    def is_empty(self) -> bool:
        return not any(items for *_, items in self.cells())

    # --- Writes ---

    def ensure_path(
        self,
        day: DateLike,
        service_id: Optional[str] = None,
        meal_plan_id: Optional[str] = None,
    ) -> None:
        """Materialize an (empty) bucket for a date / service / meal plan prefix."""
        node = self._tree.setdefault(_key(day), {})
        if service_id is None:
            return
        node = node.setdefault(service_id, {})
        if meal_plan_id is not None:
            node.setdefault(meal_plan_id, {})

    def _cell(self, day: DateLike, service_id: str, meal_plan_id: str, sub_meal_plan_id: str) -> set[str]:
        meal_plan_node = (
            self._tree.setdefault(_key(day), {})
            .setdefault(service_id, {})
            .setdefault(meal_plan_id, {})
        )
        return meal_plan_node.setdefault(sub_meal_plan_id, set())

    def set_cell(
        self,
        day: DateLike,
        service_id: str,
        meal_plan_id: str,
        sub_meal_plan_id: str,
        item_ids: Iterable[str],
    ) -> None:
        cell = self._cell(day, service_id, meal_plan_id, sub_meal_plan_id)
        cell.clear()
        cell.update(item_ids)

    def add_item(
        self, day: DateLike, service_id: str, meal_plan_id: str, sub_meal_plan_id: str, item_id: str
    ) -> None:
        self._cell(day, service_id, meal_plan_id, sub_meal_plan_id).add(item_id)

    def remove_item(
        self, day: DateLike, service_id: str, meal_plan_id: str, sub_meal_plan_id: str, item_id: str
    ) -> None:
        meal_plan_node = self._branch(_key(day), service_id, meal_plan_id)
        cell = meal_plan_node.get(sub_meal_plan_id)
        if cell is not None:
            cell.discard(item_id)

    def pruned(self, dates: Optional[Iterable[DateLike]] = None) -> "MenuGrid":
        """Copy without empty cells or the empty levels left above them.

        When dates is given, cells filed under any other date are dropped too.
        """
        keep = {_key(d) for d in dates} if dates is not None else None
        grid = MenuGrid()
        for day, service_id, meal_plan_id, sub_meal_plan_id, items in self.cells():
            if items and (keep is None or day in keep):
                grid.set_cell(day, service_id, meal_plan_id, sub_meal_plan_id, items)
        return grid

    # --- Dunder ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MenuGrid):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"MenuGrid(dates={self.dates()})"
