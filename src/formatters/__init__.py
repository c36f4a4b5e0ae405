from formatters.base import (
    BaseFormatter, SimpleFormatter, FormatterConfig, FormatterFactory,
    ColorScheme, OutputWriter, OutputTarget
)
from formatters.text import ScriptFormatter, SummaryFormatter, summary_line
from formatters.html import HTMLFormatter, JSONFormatter


__all__ = [
    "BaseFormatter", "SimpleFormatter", "FormatterConfig", "FormatterFactory",
    "ColorScheme", "OutputWriter", "OutputTarget",
    "ScriptFormatter", "SummaryFormatter", "summary_line",
    "HTMLFormatter", "JSONFormatter"
]


def create_formatter(name: str, config: FormatterConfig = None) -> BaseFormatter:
    return FormatterFactory.create(name, config)


def get_available_formatters():
    return FormatterFactory.available()


def format_script(
    script,
    label1: str,
    label2: str,
    formatter_name: str = "text",
    config: FormatterConfig = None,
    old=None,
    new=None
) -> str:
    formatter = create_formatter(formatter_name, config)
    return formatter.format(script, label1, label2, old, new)
