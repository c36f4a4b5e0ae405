from typing import List, Optional, Sequence, Any
from html import escape as html_escape
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from algorithms.utils import Operation, count_operations
from formatters.base import BaseFormatter, FormatterFactory


DEFAULT_STYLES = """
body { font-family: monospace; margin: 20px; background: #fafafa; color: #333; }
.script-container { border: 1px solid #ddd; border-radius: 4px; overflow: hidden; margin-bottom: 20px; }
.script-header { background: #f7f7f7; padding: 10px 15px; border-bottom: 1px solid #ddd; font-weight: bold; }
table { width: 100%; border-collapse: collapse; font-size: 13px; }
td { padding: 2px 8px; vertical-align: top; white-space: pre-wrap; word-wrap: break-word; }
.step { width: 50px; text-align: right; color: #999; background: #f7f7f7; border-right: 1px solid #eee; }
.op { width: 80px; font-weight: bold; }
.patch { background: #fff; }
.mount { background: #e6ffed; }
.mount .op { color: #22863a; }
.unmount { background: #ffeef0; }
.unmount .op { color: #cb2431; }
.move { background: #fff8c5; }
.move .op { color: #b08800; }
.stats { padding: 10px 15px; background: #f7f7f7; border-top: 1px solid #ddd; font-size: 12px; }
.stats .mounts { color: #22863a; }
.stats .unmounts { color: #cb2431; }
.stats .moves { color: #b08800; }
"""


class HTMLFormatter(BaseFormatter):
    def _format_impl(self, script: List[Operation], label1: str, label2: str,
                     old: Optional[Sequence[Any]], new: Optional[Sequence[Any]]):
        rows = []
        for step, operation in enumerate(self.visible(script), 1):
            k = html_escape(str(operation.key))
            op = operation.op.value
            rows.append(f'<tr class="{op}"><td class="step">{step}</td>'
                        f'<td class="op">{op}</td><td>{k}</td></tr>')
        counts = count_operations(script)
        html = f"""<!DOCTYPE html>
<html><head><meta charset="UTF-8"><title>Reconcile: {html_escape(label1)} vs {html_escape(label2)}</title>
<style>{DEFAULT_STYLES}</style></head><body>
<div class="script-container">
<div class="script-header"><span>--- {html_escape(label1)}</span><br><span>+++ {html_escape(label2)}</span></div>
<table>{"".join(rows)}</table>
<div class="stats"><span class="mounts">+{counts['mounts']}</span>, <span class="unmounts">-{counts['unmounts']}</span>, <span class="moves">&gt;{counts['moves']}</span>, {counts['patches']} patched</div>
</div></body></html>"""
        self._write(html)


class JSONFormatter(BaseFormatter):
    def _format_impl(self, script: List[Operation], label1: str, label2: str,
                     old: Optional[Sequence[Any]], new: Optional[Sequence[Any]]):
        import json
        counts = count_operations(script)
        result = {
            "old": label1,
            "new": label2,
            "operations": [{"op": operation.op.value, "key": operation.key}
                           for operation in self.visible(script)],
            "stats": {name: counts[name] for name in ('mounts', 'patches', 'unmounts', 'moves')},
        }
        if old is not None and new is not None:
            result["stats"]["old_length"] = len(old)
            result["stats"]["new_length"] = len(new)
        self._write(json.dumps(result, indent=self.config.indent, ensure_ascii=False, default=str))


FormatterFactory.register("html", HTMLFormatter)
FormatterFactory.register("json", JSONFormatter)
