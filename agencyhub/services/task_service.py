"""Task urgency classification."""

from datetime import date
from typing import Iterable, List, Optional

from ..domain.enums import TaskStatus, TaskUrgency
from ..schemas.dashboard import UrgentTask
from ..schemas.records import Task

URGENT_CLASSES = frozenset({TaskUrgency.OVERDUE, TaskUrgency.DUE_TODAY})

URGENCY_LABELS = {
    TaskUrgency.OVERDUE: "Em atraso",
    TaskUrgency.DUE_TODAY: "Vence hoje",
    TaskUrgency.DUE_SOON: "Vence em breve",
    TaskUrgency.NO_DEADLINE: "Sem prazo",
}


def is_open(task: Task) -> bool:
    return task.status != TaskStatus.COMPLETED.value


def classify_urgency(task: Task, today: date) -> Optional[TaskUrgency]:
    """
    Classify an open task by its due date.

    Completed tasks are not classified at all and yield None. Due dates are
    already calendar dates, so the comparison ignores time of day.
    """
    if not is_open(task):
        return None
    if task.due_date is None:
        return TaskUrgency.NO_DEADLINE
    if task.due_date < today:
        return TaskUrgency.OVERDUE
    if task.due_date == today:
        return TaskUrgency.DUE_TODAY
    return TaskUrgency.DUE_SOON


def urgency_label(urgency: TaskUrgency) -> str:
    return URGENCY_LABELS[urgency]


def all_urgent_tasks(tasks: Iterable[Task], today: date) -> List[Task]:
    """Overdue and due-today tasks, in the order the source provided them."""
    return [task for task in tasks if classify_urgency(task, today) in URGENT_CLASSES]


def urgent_tasks(tasks: Iterable[Task], today: date, limit: int = 3) -> List[UrgentTask]:
    """
    First `limit` urgent tasks for the dashboard sidebar.

    Insertion order is preserved; nothing is re-sorted, so the list does not
    reshuffle between refreshes of the same data.
    """
    items = []
    for task in all_urgent_tasks(tasks, today)[:max(limit, 0)]:
        urgency = classify_urgency(task, today)
        items.append(
            UrgentTask(
                id=task.id,
                title=task.title,
                due_date=task.due_date,
                urgency=urgency.value,
                label=urgency_label(urgency),
            )
        )
    return items


def pending_task_count(tasks: Iterable[Task]) -> int:
    return sum(1 for task in tasks if is_open(task))
