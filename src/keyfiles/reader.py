import json
import logging
import os
from typing import Any, List, Optional

from algorithms.utils import KeyedElement, split_keys

logger = logging.getLogger(__name__)


KEY_FILE_FORMATS = ('auto', 'lines', 'json')

CHECK_SIZE = 8192
NON_TEXT_THRESHOLD = 0.30

BOM_ENCODINGS = {
    b'\xef\xbb\xbf': 'utf-8-sig',
    b'\xff\xfe': 'utf-16',
    b'\xfe\xff': 'utf-16',
}


class KeyFileError(ValueError):
    pass


def looks_binary(data: bytes) -> bool:
    if not data:
        return False
    for bom in BOM_ENCODINGS:
        if data.startswith(bom):
            return False
    if b'\x00' in data:
        return True
    try:
        data.decode('utf-8')
        return False
    except UnicodeDecodeError:
        pass
    text_chars = bytearray({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)))
    non_text = sum(1 for byte in data if byte not in text_chars)
    return (non_text / len(data)) > NON_TEXT_THRESHOLD


def detect_encoding(data: bytes) -> str:
    for bom, encoding in BOM_ENCODINGS.items():
        if data.startswith(bom):
            return encoding
    return 'utf-8'


def detect_format(filepath: str, text: str) -> str:
    if os.path.splitext(filepath)[1].lower() == '.json':
        return 'json'
    if text.lstrip().startswith('['):
        return 'json'
    return 'lines'


def parse_lines(text: str) -> List[str]:
    keys = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue
        keys.append(stripped)
    return keys


def parse_json(text: str) -> List[Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise KeyFileError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise KeyFileError("JSON key file must contain an array")
    elements: List[Any] = []
    for index, item in enumerate(data):
        if isinstance(item, dict):
            if 'key' not in item:
                raise KeyFileError(f"Object at index {index} has no \"key\"")
            elements.append(KeyedElement(item['key'], item.get('type'), item.get('payload')))
        elif isinstance(item, (str, int, float, bool)) or item is None:
            elements.append(item)
        else:
            raise KeyFileError(f"Unsupported key at index {index}: {item!r}")
    return elements


def parse_keys(text: str, fmt: str = 'lines') -> List[Any]:
    if fmt == 'lines':
        return parse_lines(text)
    if fmt == 'json':
        return parse_json(text)
    if fmt == 'inline':
        return split_keys(text)
    raise KeyFileError(f"Unknown key format: {fmt}")


def read_key_file(filepath: str, fmt: str = 'auto', encoding: Optional[str] = None) -> List[Any]:
    if fmt not in KEY_FILE_FORMATS:
        raise KeyFileError(f"Unknown key file format: {fmt}")
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"File not found: {filepath}")
    if not os.path.isfile(filepath):
        raise KeyFileError(f"Not a file: {filepath}")
    with open(filepath, 'rb') as f:
        raw = f.read()
    if looks_binary(raw[:CHECK_SIZE]):
        raise KeyFileError(f"Binary file: {filepath}")
    encoding = encoding or detect_encoding(raw)
    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise KeyFileError(f"Cannot decode {filepath} as {encoding}: {e.reason} at byte {e.start}") from e
    if fmt == 'auto':
        fmt = detect_format(filepath, text)
    logger.debug("reading %s as %s", filepath, fmt)
    return parse_keys(text, fmt)
