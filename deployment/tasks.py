import typing
from collections import OrderedDict
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple


class DeployTask(NamedTuple):
    """A named deployment step, selectable by tag."""

    name: str
    func: Callable[..., Any]
    tags: Tuple[str, ...]
    dependencies: Tuple[str, ...]


class TaskRegistry:
    """
    Ordered collection of deployment tasks.

    Tasks run in registration order. Selecting by tag also pulls in the
    tasks tagged with any of the selected tasks' dependencies, ahead of them.
    """

    def __init__(self):
        self._tasks: typing.OrderedDict[str, DeployTask] = OrderedDict()

    def __iter__(self):
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    def register(self, *tags: str, dependencies: Iterable[str] = ()) -> Callable:
        """Decorator registering a task function under the given tags."""

        def decorator(func: Callable) -> Callable:
            name = func.__name__
            if name in self._tasks:
                raise ValueError(f"Deploy task '{name}' is already registered.")
            self._tasks[name] = DeployTask(
                name=name, func=func, tags=tuple(tags), dependencies=tuple(dependencies)
            )
            return func

        return decorator

    def _tagged(self, tag: str) -> List[DeployTask]:
        return [task for task in self._tasks.values() if tag in task.tags]

    def select(self, tags: Optional[Iterable[str]] = None) -> List[DeployTask]:
        """Returns the tasks to run for the given tags, dependencies first."""
        tags = list(tags or [])
        if not tags:
            return list(self._tasks.values())

        selected: typing.OrderedDict[str, DeployTask] = OrderedDict()
        resolving = set()

        def visit(task: DeployTask) -> None:
            if task.name in selected:
                return
            if task.name in resolving:
                raise ValueError(f"Circular dependency detected at deploy task '{task.name}'.")
            resolving.add(task.name)
            for dependency in task.dependencies:
                dependency_tasks = self._tagged(dependency)
                if not dependency_tasks:
                    raise ValueError(
                        f"Deploy task '{task.name}' depends on unknown tag '{dependency}'."
                    )
                for dependency_task in dependency_tasks:
                    visit(dependency_task)
            resolving.discard(task.name)
            selected[task.name] = task

        for task in self._tasks.values():
            if any(tag in task.tags for tag in tags):
                visit(task)

        return list(selected.values())

    def run(self, deployer, tags: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """Runs the selected tasks one after the other and returns their results."""
        results = OrderedDict()
        for task in self.select(tags):
            print(f"\n=== {task.name} [{', '.join(task.tags)}] ===")
            results[task.name] = task.func(deployer)
        return results
