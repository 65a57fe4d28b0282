from pomocal.core.config import UNCATEGORIZED


class DaySummary:
    """Focus totals of one day, computed from its root tasks.

    Root totals already include their subtasks' time, so only roots are summed.
    """
    def __init__(self, total, categories, tasks):
        self.total = total
        self.categories = categories
        self.tasks = tasks

    @property
    def is_empty(self):
        return self.total <= 0

    @classmethod
    def from_todos(cls, todos):
        tracked = [todo for todo in todos if todo.time_spent > 0]
        total = sum(todo.time_spent for todo in todos)

        by_category = {}
        for todo in tracked:
            key = todo.category or UNCATEGORIZED
            by_category[key] = by_category.get(key, 0) + todo.time_spent
        categories = sorted(by_category.items(), key=lambda kv: kv[1], reverse=True)

        tasks = [(todo, todo.time_spent / total if total > 0 else 0.0) for todo in tracked]
        return cls(total, categories, tasks)
