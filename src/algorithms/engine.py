from typing import Any, List, Optional, Sequence, Tuple

from .reconcile import KeyFunc, SameNode, diff_keyed, reconcile
from .utils import Handlers, OperationScript, OpType, ReconcileResult, ReconcileStats, split_keys


class ReconcileEngine:
    def __init__(self, same_node: Optional[SameNode] = None, key: Optional[KeyFunc] = None,
                 strict: bool = True):
        self.same_node = same_node
        self.key = key
        self.strict = strict

    def apply(self, old: Sequence[Any], new: Sequence[Any], handlers: Any) -> ReconcileStats:
        return diff_keyed(old, new, handlers, same_node=self.same_node, key=self.key,
                          strict=self.strict)

    def reconcile(self, old: Sequence[Any], new: Sequence[Any]) -> OperationScript:
        return reconcile(old, new, same_node=self.same_node, key=self.key, strict=self.strict)

    def reconcile_strings(self, old: str, new: str, separator: Optional[str] = None) -> OperationScript:
        return self.reconcile(split_keys(old, separator), split_keys(new, separator))

    def result(self, old: Sequence[Any], new: Sequence[Any]) -> ReconcileResult:
        return ReconcileResult.from_script(self.reconcile(old, new), len(old), len(new))

    def stats(self, old: Sequence[Any], new: Sequence[Any]) -> ReconcileStats:
        return self.apply(old, new, Handlers())

    def move_count(self, old: Sequence[Any], new: Sequence[Any]) -> int:
        script = self.reconcile(old, new)
        return sum(1 for operation in script if operation.op == OpType.MOVE)

    def structural_change_count(self, old: Sequence[Any], new: Sequence[Any]) -> int:
        return self.result(old, new).structural_changes


class BatchReconciler:
    def __init__(self, engine: Optional[ReconcileEngine] = None):
        self.engine = engine or ReconcileEngine()

    def reconcile_multiple(self, pairs: List[Tuple[Sequence[Any], Sequence[Any]]]) -> List[OperationScript]:
        results = []
        for old, new in pairs:
            results.append(self.engine.reconcile(old, new))
        return results

    def reconcile_all_against_base(self, base: Sequence[Any],
                                   targets: List[Sequence[Any]]) -> List[OperationScript]:
        results = []
        for target in targets:
            results.append(self.engine.reconcile(base, target))
        return results
