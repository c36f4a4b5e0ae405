import re
from typing import Any, Callable, Dict, Hashable, List, NamedTuple, Optional, Tuple
from enum import Enum
from dataclasses import dataclass, field


class OpType(str, Enum):
    MOUNT = 'mount'
    PATCH = 'patch'
    UNMOUNT = 'unmount'
    MOVE = 'move'


STRUCTURAL_OPS = (OpType.MOUNT, OpType.UNMOUNT, OpType.MOVE)


class Operation(NamedTuple):
    op: OpType
    key: Hashable

    def __repr__(self) -> str:
        return f"Operation({self.op.value!r}, {self.key!r})"


OperationScript = List[Operation]


class KeyedElement(NamedTuple):
    """An element of a sibling group: a key plus an optional type tag and payload."""
    key: Hashable
    type: Optional[str] = None
    payload: Any = None


def key_of(element: Any) -> Hashable:
    if isinstance(element, KeyedElement):
        return element.key
    if isinstance(element, dict):
        return element.get('key')
    if hasattr(element, 'key'):
        return element.key
    return element


def type_of(element: Any) -> Optional[str]:
    if isinstance(element, KeyedElement):
        return element.type
    if isinstance(element, dict):
        return element.get('type')
    if hasattr(element, 'key'):
        return getattr(element, 'type', None)
    return None


def same_key(a: Any, b: Any) -> bool:
    return key_of(a) == key_of(b)


def same_key_and_type(a: Any, b: Any) -> bool:
    return key_of(a) == key_of(b) and type_of(a) == type_of(b)


def _ignore(key: Hashable) -> None:
    return None


@dataclass
class Handlers:
    mount_element: Callable[[Hashable], None] = _ignore
    patch: Callable[[Hashable], None] = _ignore
    unmount: Callable[[Hashable], None] = _ignore
    move: Callable[[Hashable], None] = _ignore


class OperationRecorder:
    """Records handler calls as an operation script.

    If ``forward_to`` is given, every call is passed on to it after being
    recorded, so a recorder can sit in front of a live tree.
    """

    def __init__(self, forward_to: Optional[Any] = None):
        self.script: OperationScript = []
        self.forward_to = forward_to

    def _record(self, op: OpType, key: Hashable):
        self.script.append(Operation(op, key))
        if self.forward_to is not None:
            getattr(self.forward_to, _HANDLER_NAMES[op])(key)

    def mount_element(self, key: Hashable):
        self._record(OpType.MOUNT, key)

    def patch(self, key: Hashable):
        self._record(OpType.PATCH, key)

    def unmount(self, key: Hashable):
        self._record(OpType.UNMOUNT, key)

    def move(self, key: Hashable):
        self._record(OpType.MOVE, key)

    def handlers(self) -> Handlers:
        return Handlers(self.mount_element, self.patch, self.unmount, self.move)

    def clear(self):
        self.script = []


_HANDLER_NAMES = {
    OpType.MOUNT: 'mount_element',
    OpType.PATCH: 'patch',
    OpType.UNMOUNT: 'unmount',
    OpType.MOVE: 'move',
}


@dataclass
class ReconcileStats:
    old_length: int
    new_length: int
    prefix_length: int = 0
    suffix_length: int = 0
    old_middle_length: int = 0
    new_middle_length: int = 0
    moved: bool = False
    stable_offsets: List[int] = field(default_factory=list)


@dataclass
class ReconcileResult:
    script: OperationScript
    old_length: int
    new_length: int
    mounts: int
    patches: int
    unmounts: int
    moves: int

    @property
    def structural_changes(self) -> int:
        return self.mounts + self.unmounts + self.moves

    @property
    def has_structural_changes(self) -> bool:
        return self.structural_changes > 0

    @classmethod
    def from_script(cls, script: OperationScript, old_len: int, new_len: int) -> 'ReconcileResult':
        counts = count_operations(script)
        return cls(
            script=script,
            old_length=old_len,
            new_length=new_len,
            mounts=counts['mounts'],
            patches=counts['patches'],
            unmounts=counts['unmounts'],
            moves=counts['moves']
        )


def make_mount(key: Hashable) -> Operation:
    return Operation(OpType.MOUNT, key)


def make_patch(key: Hashable) -> Operation:
    return Operation(OpType.PATCH, key)


def make_unmount(key: Hashable) -> Operation:
    return Operation(OpType.UNMOUNT, key)


def make_move(key: Hashable) -> Operation:
    return Operation(OpType.MOVE, key)


def script_to_tuples(script: OperationScript) -> List[Tuple[str, Hashable]]:
    return [(operation.op.value, operation.key) for operation in script]


def tuples_to_script(tuples: List[Tuple[str, Hashable]]) -> OperationScript:
    result = []
    for op_str, key in tuples:
        op = OpType(op_str)
        result.append(Operation(op, key))
    return result


def count_operations(script: OperationScript) -> Dict[str, int]:
    counts = {
        'mounts': 0,
        'patches': 0,
        'unmounts': 0,
        'moves': 0,
        'total': len(script)
    }
    for operation in script:
        if operation.op == OpType.MOUNT:
            counts['mounts'] += 1
        elif operation.op == OpType.PATCH:
            counts['patches'] += 1
        elif operation.op == OpType.UNMOUNT:
            counts['unmounts'] += 1
        elif operation.op == OpType.MOVE:
            counts['moves'] += 1
    return counts


def keys_with_op(script: OperationScript, op: OpType) -> List[Hashable]:
    return [operation.key for operation in script if operation.op == op]


def has_structural_changes(script: OperationScript) -> bool:
    return any(operation.op in STRUCTURAL_OPS for operation in script)


def split_keys(text: str, separator: Optional[str] = None) -> List[str]:
    if separator is None:
        return [k for k in re.split(r'[\s,]+', text) if k]
    return [k for k in text.split(separator) if k]
