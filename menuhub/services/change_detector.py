"""
Cell-level diff between two versions of a menu grid
"""
from dataclasses import asdict, dataclass, field
from typing import Mapping, Optional

from menuhub.services.menu_grid import MenuGrid

UNKNOWN_ITEM = "Unknown Item"


@dataclass
class MenuItemChange:
    item_id: str
    item_name: str
    action: str  # added, removed, replaced
    replaced_with: Optional[str] = None
    replaced_with_name: Optional[str] = None


@dataclass
class CellChange:
    date: str
    service_id: str
    meal_plan_id: str
    sub_meal_plan_id: str
    changes: list[MenuItemChange] = field(default_factory=list)

    def to_document(self) -> dict:
        return asdict(self)


def detect_item_changes(
    original: frozenset[str], updated: frozenset[str], item_names: Mapping[str, str]
) -> list[MenuItemChange]:
    """One removed plus one added item counts as a replacement."""
    removed = sorted(original - updated)
    added = sorted(updated - original)

    def name(item_id: str) -> str:
        return item_names.get(item_id, UNKNOWN_ITEM)

    if len(removed) == 1 and len(added) == 1:
        old_id, new_id = removed[0], added[0]
        return [MenuItemChange(old_id, name(old_id), "replaced", new_id, name(new_id))]

    changes = [MenuItemChange(item_id, name(item_id), "removed") for item_id in removed]
    changes += [MenuItemChange(item_id, name(item_id), "added") for item_id in added]
    return changes


def detect_menu_changes(
    original: MenuGrid, updated: MenuGrid, item_names: Mapping[str, str]
) -> list[CellChange]:
    paths = {cell[:4] for cell in original.cells()} | {cell[:4] for cell in updated.cells()}

    changed = []
    for path in sorted(paths):
        before = original.get_cell(*path)
        after = updated.get_cell(*path)
        if before == after:
            continue
        changed.append(CellChange(*path, changes=detect_item_changes(before, after, item_names)))
    return changed


def summarize_changes(changed_cells: list[CellChange]) -> dict[str, int]:
    counts = {"added": 0, "removed": 0, "replaced": 0}
    for cell in changed_cells:
        for change in cell.changes:
            counts[change.action] += 1
    return {
        "total_changes": sum(counts.values()),
        "added_count": counts["added"],
        "removed_count": counts["removed"],
        "replaced_count": counts["replaced"],
        "cells_changed": len(changed_cells),
    }
