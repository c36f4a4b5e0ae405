from typing import List, Optional, Sequence, Any
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from algorithms.utils import OpType, Operation, count_operations
from formatters.base import BaseFormatter, FormatterFactory


SIGILS = {
    OpType.MOUNT: '+',
    OpType.UNMOUNT: '-',
    OpType.MOVE: '>',
    OpType.PATCH: ' ',
}


class ScriptFormatter(BaseFormatter):
    """Header plus one sigil-prefixed line per operation, in emission order."""

    def _format_impl(self, script: List[Operation], label1: str, label2: str,
                     old: Optional[Sequence[Any]], new: Optional[Sequence[Any]]):
        self._writeln(f"{self.colors.bold}--- {label1}{self.colors.reset}")
        self._writeln(f"{self.colors.bold}+++ {label2}{self.colors.reset}")
        for operation in self.visible(script):
            sigil = SIGILS[operation.op]
            color = self.colors.for_op(operation.op)
            if color:
                self._writeln(f"{color}{sigil} {operation.key}{self.colors.reset}")
            else:
                self._writeln(f"{sigil} {operation.key}")
        if self.config.show_summary:
            self._writeln(f"{self.colors.cyan}{summary_line(script)}{self.colors.reset}")


class SummaryFormatter(BaseFormatter):
    def _format_impl(self, script: List[Operation], label1: str, label2: str,
                     old: Optional[Sequence[Any]], new: Optional[Sequence[Any]]):
        counts = count_operations(script)
        self._writeln(f"{label1} -> {label2}")
        if old is not None and new is not None:
            self._writeln(f"elements: {len(old)} -> {len(new)}")
        for name in ('mounts', 'patches', 'unmounts', 'moves'):
            self._writeln(f"{name}: {counts[name]}")
        changed = counts['mounts'] + counts['unmounts'] + counts['moves']
        self._writeln(f"structural changes: {changed}")


def summary_line(script: List[Operation]) -> str:
    counts = count_operations(script)
    return (f"# {counts['mounts']} mounted, {counts['unmounts']} unmounted, "
            f"{counts['moves']} moved, {counts['patches']} patched")


FormatterFactory.register("text", ScriptFormatter)
FormatterFactory.register("summary", SummaryFormatter)
