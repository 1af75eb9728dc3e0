from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class Disposable(Protocol):
    def dispose(self) -> None: ...


def is_disposable(instance: object) -> bool:
    """Capability check: `instance` has a callable `dispose` member.

    Looked up with plain `getattr`, so members served by `__getattr__` count.
    A non-callable `dispose` (e.g. `dispose = True`) does not.
    """
    return callable(getattr(instance, "dispose", None))


class DisposalTracker:
    """Instances created by one injector node, in construction order."""

    def __init__(self) -> None:
        self._instances: list[object] = []
        self._disposed_ids: set[int] = set()

    def __len__(self) -> int:
        return len(self._instances)

    def track(self, instance: object) -> None:
        self._instances.append(instance)

    def dispose_all(self) -> None:
        """Dispose every tracked instance that supports it, each at most once.

        A failing `dispose()` does not stop the remaining instances; the first
        failure is re-raised once all of them have been visited.
        """
        first_error: Exception | None = None
        for instance in self._instances:
            if id(instance) in self._disposed_ids:
                continue
            self._disposed_ids.add(id(instance))

            if not is_disposable(instance):
                logger.debug("Skipping non-disposable %s", type(instance).__name__)
                continue

            logger.debug("Disposing %s", type(instance).__name__)
            try:
                instance.dispose()  # type: ignore[attr-defined]
            except Exception as e:  # noqa: BLE001
                logger.warning("Disposing %s failed: %s", type(instance).__name__, e)
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error
