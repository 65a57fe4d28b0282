"""Operations on a forest of TodoItems.

Every function takes the list of root tasks of a day and walks subtasks
recursively. Ids are unique across the whole tree.
"""


def walk(items, parent=None):
    """Yield (item, parent) pairs depth-first, parents before their subtasks."""
    for item in items:
        yield item, parent
        yield from walk(item.subtasks, item)


def find_path(items, item_id):
    """Return the chain of items from a root down to item_id, or [] if absent."""
    for item in items:
        if item.item_id == item_id:
            return [item]
        path = find_path(item.subtasks, item_id)
        if path:
            return [item] + path
    return []


def find_item(items, item_id):
    """Return the item with item_id anywhere in the tree, or None."""
    path = find_path(items, item_id)
    return path[-1] if path else None


def update_item(items, item_id, update):
    """Replace the item with item_id by update(item). Returns True if found."""
    for index, item in enumerate(items):
        if item.item_id == item_id:
            items[index] = update(item)
            return True
        if update_item(item.subtasks, item_id, update):
            return True
    return False


def remove_item(items, item_id):
    """Detach the item with item_id from the tree and return it, or None."""
    for index, item in enumerate(items):
        if item.item_id == item_id:
            return items.pop(index)
        removed = remove_item(item.subtasks, item_id)
        if removed is not None:
            return removed
    return None


def add_time(items, item_id, amount):
    """Add amount seconds to the item and every one of its ancestors."""
    path = find_path(items, item_id)
    for item in path:
        item.time_spent += amount
    return bool(path)


def apply_time_map(items, time_map):
    """Recompute time totals from per-task durations.

    A task's total is the time recorded directly against it plus the totals of
    its subtasks. Tasks missing from time_map have no time of their own.
    Returns the summed total of items.
    """
    total = 0
    for item in items:
        item.time_spent = time_map.get(item.item_id, 0) + apply_time_map(item.subtasks, time_map)
        total += item.time_spent
    return total


def title_map(items):
    """Map every title in the tree to its task id."""
    return {item.title: item.item_id for item, _ in walk(items)}


def flatten(items, expanded=(), level=0):
    """Return (item, level) rows, descending only into expanded task ids."""
    rows = []
    for item in items:
        rows.append((item, level))
        if item.item_id in expanded and item.subtasks:
            rows.extend(flatten(item.subtasks, expanded, level + 1))
    return rows


def rename_category(items, old_name, new_name):
    """Rename a category on every task of the tree. Returns the count changed."""
    changed = 0
    for item, _ in walk(items):
        if item.category == old_name:
            item.category = new_name
            changed += 1
    return changed
