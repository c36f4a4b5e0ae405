#!/usr/bin/env python3
import argparse
import logging
import sys
import os
from typing import Any, Callable, List, Optional, TextIO

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


class ANSIColors:
    RESET = '\033[0m'
    RED = '\033[31m'

    @classmethod
    def disable(cls):
        cls.RESET = ''
        cls.RED = ''


class ColorPrinter:
    def __init__(self, use_color: bool = True, output: Optional[TextIO] = None):
        self.use_color = use_color
        self.output = output or sys.stdout
        if not use_color:
            ANSIColors.disable()

    def print(self, text: str, end: str = '\n'):
        self.output.write(text + end)

    def write(self, text: str):
        self.output.write(text)

    def print_error(self, text: str):
        sys.stderr.write(f"{ANSIColors.RED}Error: {text}{ANSIColors.RESET}\n")


def _normalizer(args) -> Optional[Callable[[Any], Any]]:
    steps = []
    if args.ignore_whitespace:
        steps.append(lambda k: k.strip() if isinstance(k, str) else k)
    if args.ignore_case:
        steps.append(lambda k: k.lower() if isinstance(k, str) else k)
    if not steps:
        return None

    def normalize(key: Any) -> Any:
        for step in steps:
            key = step(key)
        return key
    return normalize


class CLIApplication:
    def __init__(self):
        self.parser = self._create_parser()
        self.printer: Optional[ColorPrinter] = None

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog='keyed-diff',
            description='Compute the mount/patch/unmount/move operations that turn one keyed list into another',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog='''
Examples:
  %(prog)s old.txt new.txt
  %(prog)s --inline "a b c" "c b a"
  %(prog)s -f json old.json new.json
  %(prog)s --match-type old.json new.json
  %(prog)s -q old.txt new.txt
            '''
        )
        parser.add_argument('old', help='Old key file (or key list with --inline)')
        parser.add_argument('new', help='New key file (or key list with --inline)')
        parser.add_argument(
            '-f', '--format',
            choices=['simple', 'text', 'summary', 'json', 'html'],
            default='text',
            help='Output format (default: text)'
        )
        parser.add_argument(
            '--inline',
            action='store_true',
            help='Treat OLD and NEW as comma or space separated key lists'
        )
        parser.add_argument(
            '--input-format',
            choices=['auto', 'lines', 'json'],
            default='auto',
            help='Key file format (default: auto)'
        )
        parser.add_argument(
            '--match-type',
            action='store_true',
            help='Only reuse elements whose key and type both match'
        )
        parser.add_argument(
            '--allow-duplicates',
            action='store_true',
            help='Do not reject duplicate keys (later duplicates win)'
        )
        parser.add_argument(
            '--hide-patches',
            action='store_true',
            help='Omit patch operations from the output'
        )
        parser.add_argument(
            '--ignore-whitespace',
            action='store_true',
            help='Strip surrounding whitespace from keys'
        )
        parser.add_argument(
            '--ignore-case',
            action='store_true',
            help='Compare keys case-insensitively'
        )
        parser.add_argument(
            '-q', '--quiet',
            action='store_true',
            help='Report only whether the structure changed'
        )
        parser.add_argument(
            '--no-color',
            action='store_true',
            help='Disable colored output'
        )
        parser.add_argument(
            '-o', '--output',
            type=str,
            metavar='FILE',
            help='Write output to file'
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='Log reconciliation details to stderr'
        )
        parser.add_argument(
            '-v', '--version',
            action='version',
            version='%(prog)s 1.0.0'
        )
        return parser

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format='%(levelname)s %(name)s: %(message)s'
        )
        use_color = not args.no_color and sys.stdout.isatty()
        output_file = None
        if args.output:
            output_file = open(args.output, 'w', encoding='utf-8')
            self.printer = ColorPrinter(use_color=False, output=output_file)
        else:
            self.printer = ColorPrinter(use_color=use_color)
        try:
            result = self._execute(args)
        except KeyboardInterrupt:
            self.printer.print_error("Interrupted")
            result = 130
        except Exception as e:
            self.printer.print_error(str(e))
            result = 2
        finally:
            if output_file is not None:
                output_file.close()
        return result

    def _load(self, args, source: str) -> List[Any]:
        from keyfiles.reader import parse_keys, read_key_file
        if args.inline:
            return parse_keys(source, 'inline')
        return read_key_file(source, args.input_format)

    def _execute(self, args) -> int:
        from algorithms.engine import ReconcileEngine
        from algorithms.utils import has_structural_changes, key_of, same_key_and_type, type_of
        from formatters import FormatterConfig, create_formatter
        from keyfiles.reader import KeyFileError
        if not args.inline:
            for path in (args.old, args.new):
                if not os.path.exists(path):
                    self.printer.print_error(f"File not found: {path}")
                    return 2
        try:
            old = self._load(args, args.old)
            new = self._load(args, args.new)
        except KeyFileError as e:
            self.printer.print_error(str(e))
            return 2
        normalize = _normalizer(args)
        key = (lambda element: normalize(key_of(element))) if normalize else None
        same_node = None
        if args.match_type and normalize:
            same_node = lambda a, b: key(a) == key(b) and type_of(a) == type_of(b)
        elif args.match_type:
            same_node = same_key_and_type
        engine = ReconcileEngine(same_node=same_node, key=key, strict=not args.allow_duplicates)
        script = engine.reconcile(old, new)
        changed = has_structural_changes(script)
        if args.quiet:
            if changed:
                self.printer.print(f"Structure of {args.old} and {args.new} differs")
            return 1 if changed else 0
        config = FormatterConfig(use_color=self.printer.use_color, show_patches=not args.hide_patches)
        formatter = create_formatter(args.format, config)
        self.printer.write(formatter.format(script, args.old, args.new, old, new))
        if args.format in ('json', 'html'):
            self.printer.print('')
        return 1 if changed else 0


def main(argv: Optional[List[str]] = None) -> int:
    app = CLIApplication()
    return app.run(argv)


if __name__ == '__main__':
    sys.exit(main())
