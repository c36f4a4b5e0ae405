import logging
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence

from .lis import longest_increasing_subsequence
from .utils import (
    OperationRecorder, OperationScript, ReconcileResult, ReconcileStats, key_of
)

logger = logging.getLogger(__name__)

SameNode = Callable[[Any, Any], bool]
KeyFunc = Callable[[Any], Hashable]


class InvalidKeysError(ValueError):
    pass


class DuplicateKeyError(InvalidKeysError):
    def __init__(self, key: Hashable, side: str, first_index: int, index: int):
        self.key = key
        self.side = side
        self.first_index = first_index
        self.index = index
        super().__init__(
            f"Duplicate key {key!r} in {side} sequence at positions {first_index} and {index}")


class MissingKeyError(InvalidKeysError):
    def __init__(self, side: str, index: int):
        self.side = side
        self.index = index
        super().__init__(f"Element at {side}[{index}] has no key")


def check_keys(elements: Sequence[Any], side: str, key: KeyFunc = key_of) -> None:
    seen: Dict[Hashable, int] = {}
    for index, element in enumerate(elements):
        k = key(element)
        if k is None:
            raise MissingKeyError(side, index)
        if k in seen:
            raise DuplicateKeyError(k, side, seen[k], index)
        seen[k] = index


class KeyedReconciler:
    """Reconciles one keyed sibling group.

    Trims the common prefix and suffix, correlates the remaining middle
    range by key and uses the longest increasing subsequence of the
    correlated old positions to emit the fewest moves. Every effect goes
    through ``handlers``; the reconciler itself never touches a tree.
    """

    def __init__(self, old: Sequence[Any], new: Sequence[Any], handlers: Any,
                 same_node: Optional[SameNode] = None, key: Optional[KeyFunc] = None,
                 strict: bool = True):
        self.old = old
        self.new = new
        self.handlers = handlers
        self.key = key or key_of
        self.same_node = same_node or self._same_key
        self.strict = strict
        self.stats = ReconcileStats(old_length=len(old), new_length=len(new))

    def _same_key(self, a: Any, b: Any) -> bool:
        return self.key(a) == self.key(b)

    def compute(self) -> ReconcileStats:
        if self.strict:
            check_keys(self.old, 'old', self.key)
            check_keys(self.new, 'new', self.key)
        old, new = self.old, self.new
        i = 0
        e1 = len(old) - 1
        e2 = len(new) - 1
        while i <= e1 and i <= e2 and self.same_node(old[i], new[i]):
            self.handlers.patch(self.key(old[i]))
            i += 1
        self.stats.prefix_length = i
        while i <= e1 and i <= e2 and self.same_node(old[e1], new[e2]):
            self.handlers.patch(self.key(old[e1]))
            e1 -= 1
            e2 -= 1
        self.stats.suffix_length = len(old) - 1 - e1
        self.stats.old_middle_length = max(0, e1 - i + 1)
        self.stats.new_middle_length = max(0, e2 - i + 1)
        if i > e1:
            for j in range(i, e2 + 1):
                self.handlers.mount_element(self.key(new[j]))
        elif i > e2:
            for j in range(i, e1 + 1):
                self.handlers.unmount(self.key(old[j]))
        else:
            self._reconcile_middle(i, e1, e2)
        logger.debug(
            "reconciled %d -> %d elements: prefix=%d suffix=%d middle=%d/%d moved=%s stable=%d",
            self.stats.old_length, self.stats.new_length, self.stats.prefix_length,
            self.stats.suffix_length, self.stats.old_middle_length,
            self.stats.new_middle_length, self.stats.moved, len(self.stats.stable_offsets))
        return self.stats

    def _reconcile_middle(self, start: int, old_end: int, new_end: int):
        correlation, moved = self._correlate(start, old_end, new_end)
        stable = longest_increasing_subsequence(correlation) if moved else []
        self.stats.moved = moved
        self.stats.stable_offsets = stable
        self._emit(start, correlation, moved, stable)

    def _correlate(self, start: int, old_end: int, new_end: int):
        old, new = self.old, self.new
        key_to_new_index: Dict[Hashable, int] = {}
        for j in range(start, new_end + 1):
            key_to_new_index[self.key(new[j])] = j
        to_be_patched = new_end - start + 1
        correlation: List[Optional[int]] = [None] * to_be_patched
        patched = 0
        max_new_index_so_far = 0
        moved = False
        for j in range(start, old_end + 1):
            prev = old[j]
            k = self.key(prev)
            if patched >= to_be_patched:
                # every new slot already has a candidate
                self.handlers.unmount(k)
                continue
            new_index = key_to_new_index.get(k)
            if new_index is None or not self.same_node(prev, new[new_index]):
                self.handlers.unmount(k)
                continue
            correlation[new_index - start] = j
            if new_index >= max_new_index_so_far:
                max_new_index_so_far = new_index
            else:
                moved = True
            self.handlers.patch(k)
            patched += 1
        return correlation, moved

    def _emit(self, start: int, correlation: List[Optional[int]], moved: bool, stable: List[int]):
        last = len(stable) - 1
        for offset in range(len(correlation) - 1, -1, -1):
            k = self.key(self.new[start + offset])
            if correlation[offset] is None:
                self.handlers.mount_element(k)
            elif moved:
                if last < 0 or offset != stable[last]:
                    self.handlers.move(k)
                else:
                    last -= 1


def diff_keyed(old: Sequence[Any], new: Sequence[Any], handlers: Any,
               same_node: Optional[SameNode] = None, key: Optional[KeyFunc] = None,
               strict: bool = True) -> ReconcileStats:
    reconciler = KeyedReconciler(old, new, handlers, same_node=same_node, key=key, strict=strict)
    return reconciler.compute()


def reconcile(old: Sequence[Any], new: Sequence[Any], same_node: Optional[SameNode] = None,
              key: Optional[KeyFunc] = None, strict: bool = True) -> OperationScript:
    recorder = OperationRecorder()
    diff_keyed(old, new, recorder, same_node=same_node, key=key, strict=strict)
    return recorder.script


def reconcile_result(old: Sequence[Any], new: Sequence[Any], same_node: Optional[SameNode] = None,
                     key: Optional[KeyFunc] = None, strict: bool = True) -> ReconcileResult:
    script = reconcile(old, new, same_node=same_node, key=key, strict=strict)
    return ReconcileResult.from_script(script, len(old), len(new))
