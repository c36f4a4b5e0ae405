from abc import ABC, abstractmethod
from typing import List, TextIO, Optional, Dict, Sequence, Any
from enum import Enum
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from algorithms.utils import OpType, Operation


class OutputTarget(Enum):
    FILE = "file"
    STRING = "string"


class FormatterConfig:
    def __init__(
        self,
        use_color: bool = True,
        show_patches: bool = True,
        show_summary: bool = True,
        indent: int = 2
    ):
        self.use_color = use_color
        self.show_patches = show_patches
        self.show_summary = show_summary
        self.indent = indent

    def copy(self) -> 'FormatterConfig':
        return FormatterConfig(
            use_color=self.use_color,
            show_patches=self.show_patches,
            show_summary=self.show_summary,
            indent=self.indent
        )

    def with_color(self, use_color: bool) -> 'FormatterConfig':
        cfg = self.copy()
        cfg.use_color = use_color
        return cfg

    def with_patches(self, show_patches: bool) -> 'FormatterConfig':
        cfg = self.copy()
        cfg.show_patches = show_patches
        return cfg


class ColorScheme:
    def __init__(self):
        self.reset = '\033[0m'
        self.bold = '\033[1m'
        self.red = '\033[31m'
        self.green = '\033[32m'
        self.yellow = '\033[33m'
        self.cyan = '\033[36m'

    def disable_colors(self):
        self.reset = ''
        self.bold = ''
        self.red = ''
        self.green = ''
        self.yellow = ''
        self.cyan = ''

    def for_op(self, op: OpType) -> str:
        if op == OpType.MOUNT:
            return self.green
        if op == OpType.UNMOUNT:
            return self.red
        if op == OpType.MOVE:
            return self.yellow
        return ''

    @classmethod
    def no_color(cls) -> 'ColorScheme':
        scheme = cls()
        scheme.disable_colors()
        return scheme


class OutputWriter:
    def __init__(self, target: OutputTarget, output: Optional[TextIO] = None):
        self.target = target
        self._output = output
        self._buffer: List[str] = []

    def write(self, text: str):
        if self.target == OutputTarget.STRING:
            self._buffer.append(text)
        else:
            self._output.write(text)

    def writeln(self, text: str = ""):
        self.write(text + "\n")

    def get_output(self) -> str:
        return "".join(self._buffer)


class BaseFormatter(ABC):
    def __init__(self, config: Optional[FormatterConfig] = None):
        self.config = config or FormatterConfig()
        self.colors = ColorScheme() if self.config.use_color else ColorScheme.no_color()
        self.writer: Optional[OutputWriter] = None

    def format(
        self,
        script: List[Operation],
        label1: str,
        label2: str,
        old: Optional[Sequence[Any]] = None,
        new: Optional[Sequence[Any]] = None,
        output: Optional[TextIO] = None
    ) -> str:
        if output is None:
            self.writer = OutputWriter(OutputTarget.STRING)
        else:
            self.writer = OutputWriter(OutputTarget.FILE, output)
        self._format_impl(script, label1, label2, old, new)
        if output is None:
            return self.writer.get_output()
        return ""

    @abstractmethod
    def _format_impl(
        self,
        script: List[Operation],
        label1: str,
        label2: str,
        old: Optional[Sequence[Any]],
        new: Optional[Sequence[Any]]
    ):
        pass

    def visible(self, script: List[Operation]) -> List[Operation]:
        if self.config.show_patches:
            return list(script)
        return [operation for operation in script if operation.op != OpType.PATCH]

    def _write(self, text: str):
        if self.writer:
            self.writer.write(text)

    def _writeln(self, text: str = ""):
        if self.writer:
            self.writer.writeln(text)


class SimpleFormatter(BaseFormatter):
    def _format_impl(
        self,
        script: List[Operation],
        label1: str,
        label2: str,
        old: Optional[Sequence[Any]],
        new: Optional[Sequence[Any]]
    ):
        for operation in self.visible(script):
            color = self.colors.for_op(operation.op)
            reset = self.colors.reset if color else ''
            self._writeln(f"{color}{operation.op.value} {operation.key}{reset}")


class FormatterFactory:
    _formatters: Dict[str, type] = {}

    @classmethod
    def register(cls, name: str, formatter_class: type):
        cls._formatters[name] = formatter_class

    @classmethod
    def create(cls, name: str, config: Optional[FormatterConfig] = None) -> BaseFormatter:
        if name not in cls._formatters:
            raise ValueError(f"Unknown formatter: {name}")
        return cls._formatters[name](config)

    @classmethod
    def available(cls) -> List[str]:
        return list(cls._formatters.keys())


FormatterFactory.register("simple", SimpleFormatter)
