# tests/test_todo_tree.py

from pomocal.core import todo_tree
from pomocal.core.models import TodoItem


def make_tree():
    """
    Study (root)
      Chapter 1
        Exercises
      Chapter 2
    Gym (root)
    """
    exercises = TodoItem("Exercises", item_id="ex")
    ch1 = TodoItem("Chapter 1", item_id="c1", subtasks=[exercises])
    ch2 = TodoItem("Chapter 2", item_id="c2")
    study = TodoItem("Study", item_id="study", subtasks=[ch1, ch2])
    gym = TodoItem("Gym", item_id="gym")
    return [study, gym]


def test_walk_visits_parents_before_children():
    items = make_tree()
    order = [(item.item_id, parent.item_id if parent else None) for item, parent in todo_tree.walk(items)]
    assert order == [
        ("study", None), ("c1", "study"), ("ex", "c1"), ("c2", "study"), ("gym", None),
    ]


def test_find_path_and_item():
    items = make_tree()
    assert [i.item_id for i in todo_tree.find_path(items, "ex")] == ["study", "c1", "ex"]
    assert todo_tree.find_path(items, "missing") == []
    assert todo_tree.find_item(items, "c2").title == "Chapter 2"
    assert todo_tree.find_item(items, "missing") is None


def test_add_time_bubbles_to_every_ancestor():
    items = make_tree()
    assert todo_tree.add_time(items, "ex", 600)
    by_id = {item.item_id: item.time_spent for item, _ in todo_tree.walk(items)}
    assert by_id == {"study": 600, "c1": 600, "ex": 600, "c2": 0, "gym": 0}


def test_add_time_unknown_id_changes_nothing():
    items = make_tree()
    assert not todo_tree.add_time(items, "missing", 600)
    assert all(item.time_spent == 0 for item, _ in todo_tree.walk(items))


def test_apply_time_map_sums_own_time_and_children():
    items = make_tree()
    items[0].time_spent = 99999
    total = todo_tree.apply_time_map(items, {"ex": 300, "c1": 60, "c2": 120, "study": 30, "gym": 900})

    by_id = {item.item_id: item.time_spent for item, _ in todo_tree.walk(items)}
    assert by_id["ex"] == 300
    assert by_id["c1"] == 360
    assert by_id["c2"] == 120
    assert by_id["study"] == 30 + 360 + 120
    assert by_id["gym"] == 900
    assert total == 510 + 900


def test_apply_time_map_zeroes_tasks_without_events():
    items = make_tree()
    todo_tree.add_time(items, "ex", 600)
    todo_tree.apply_time_map(items, {})
    assert all(item.time_spent == 0 for item, _ in todo_tree.walk(items))


def test_update_item_replaces_nested_item():
    items = make_tree()
    replacement = TodoItem("Exercises (done)", item_id="ex")
    assert todo_tree.update_item(items, "ex", lambda _: replacement)
    assert todo_tree.find_item(items, "ex") is replacement
    assert not todo_tree.update_item(items, "missing", lambda item: item)


def test_remove_item_detaches_subtree():
    items = make_tree()
    removed = todo_tree.remove_item(items, "c1")
    assert removed.item_id == "c1"
    assert removed.subtasks[0].item_id == "ex"
    assert todo_tree.find_item(items, "ex") is None
    assert todo_tree.remove_item(items, "c1") is None


def test_removing_the_last_child_leaves_an_empty_list():
    items = make_tree()
    removed = todo_tree.remove_item(items, "ex")
    chapter = todo_tree.find_item(items, "c1")
    assert removed.item_id == "ex"
    assert chapter.subtasks == []
    assert not chapter.has_subtasks
    assert chapter.to_dict()["subtasks"] == []


def test_flatten_only_descends_into_expanded():
    items = make_tree()
    assert [(i.item_id, lvl) for i, lvl in todo_tree.flatten(items)] == [("study", 0), ("gym", 0)]

    rows = todo_tree.flatten(items, expanded={"study", "c1"})
    assert [(i.item_id, lvl) for i, lvl in rows] == [
        ("study", 0), ("c1", 1), ("ex", 2), ("c2", 1), ("gym", 0),
    ]

    # a collapsed parent hides its expanded children
    rows = todo_tree.flatten(items, expanded={"c1"})
    assert [i.item_id for i, _ in rows] == ["study", "gym"]


def test_title_map_and_rename_category():
    items = make_tree()
    assert todo_tree.title_map(items)["Exercises"] == "ex"

    items[1].title = "Exercises"
    assert todo_tree.title_map(items)["Exercises"] == "gym"

    items[0].category = "Math"
    items[0].subtasks[1].category = "Math"
    items[1].category = "Health"
    assert todo_tree.rename_category(items, "Math", "Maths") == 2
    assert items[0].category == "Maths"
    assert items[0].subtasks[1].category == "Maths"
    assert items[1].category == "Health"
