"""
Optimistic list state for dashboard clients.

:class:`OptimisticList` applies a change to its local items straight
away, awaits the real mutation and then either keeps the authoritative
record or rolls back.  Items are dicts carrying an ``id`` key, the same
shape the registry actions return.

Rollbacks of ``update`` and ``remove`` restore the whole list as it was
when the operation started.  When several operations are in flight at
once and one fails, its snapshot wins: changes confirmed meanwhile by
the others are undone locally until the list is refreshed with
:meth:`OptimisticList.set_items`.
"""
from __future__ import annotations

import inspect
import logging
import uuid
from typing import Any, Awaitable, Callable, Iterable, Optional, Union

from .errors import ActionResult, ErrorKind, FieldError

logger = logging.getLogger(__name__)

UNEXPECTED_MESSAGE = "An unexpected error occurred"
PLACEHOLDER_PREFIX = "optimistic-"

Mutation = Callable[[], Union[Awaitable[Any], Any]]


def _log_error(message: str) -> None:
    logger.warning("optimistic update failed: %s", message)


class OptimisticList:

    def __init__(self, initial: Iterable[dict] = (), *,
                 on_error: Optional[Callable[[str], None]] = None,
                 on_exception: Optional[Callable[[BaseException], None]] = None):
        self._items: list[dict] = list(initial)
        self.is_optimistic = False
        self.on_error = on_error or _log_error
        self.on_exception = on_exception

    @property
    def items(self) -> list[dict]:
        return list(self._items)

    def set_items(self, items: Iterable[dict]) -> None:
        """Replace the list with confirmed data."""
        self._items = list(items)
        self.is_optimistic = False

    async def _perform(self, perform: Mutation) -> ActionResult:
        try:
            result = perform()
            if inspect.isawaitable(result):
                result = await result
            if isinstance(result, dict):
                result = ActionResult.from_dict(result)
            if not isinstance(result, ActionResult):
                raise TypeError(f"mutation returned {type(result).__name__}, not a result")
        except Exception as exc:
            logger.warning("optimistic mutation raised %r", exc)
            if self.on_exception is not None:
                self.on_exception(exc)
            return ActionResult.fail(ErrorKind.UNEXPECTED, [FieldError(UNEXPECTED_MESSAGE)])
        return result

    def _report(self, result: ActionResult) -> None:
        for message in result.messages:
            self.on_error(message or "An error occurred")

    def _replace(self, item_id, data: dict) -> None:
        self._items = [data if item.get('id') == item_id else item for item in self._items]

    async def add(self, candidate: dict, perform: Mutation) -> ActionResult:
        """Prepend ``candidate`` until ``perform`` confirms or rejects it.

        The entry always gets a fresh placeholder id, so a rejected add
        never removes a confirmed record.
        """
        placeholder = f"{PLACEHOLDER_PREFIX}{uuid.uuid4().hex}"
        entry = {**candidate, 'id': placeholder}
        self._items = [entry, *self._items]
        self.is_optimistic = True

        result = await self._perform(perform)
        if result.success:
            if result.data is not None:
                self._replace(placeholder, result.data)
        else:
            self._items = [item for item in self._items if item.get('id') != placeholder]
            self._report(result)
        self.is_optimistic = False
        return result

    async def update(self, item_id, patch: dict, perform: Mutation) -> ActionResult:
        snapshot = list(self._items)
        self._items = [{**item, **patch} if item.get('id') == item_id else item for item in self._items]
        self.is_optimistic = True

        result = await self._perform(perform)
        if result.success:
            if result.data is not None:
                self._replace(item_id, result.data)
        else:
            self._items = snapshot
            self._report(result)
        self.is_optimistic = False
        return result

    async def remove(self, item_id, perform: Mutation) -> ActionResult:
        snapshot = list(self._items)
        self._items = [item for item in self._items if item.get('id') != item_id]
        self.is_optimistic = True

        result = await self._perform(perform)
        if not result.success:
            self._items = snapshot
            self._report(result)
        self.is_optimistic = False
        return result
