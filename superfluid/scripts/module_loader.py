"""Load exported constants from generated ABI modules without executing them.

The ABI CDN ships ES modules of the form::

    export const cfaAbi = [
      { type: 'function', name: 'createFlow', inputs: [...], ... },
    ] as const;

Only literal values are understood: objects, arrays, strings, numbers,
``true``/``false``/``null``/``undefined``, comments, trailing commas and
``as <Type>`` assertions. Declarations whose initializer is anything else are
skipped. A payload that is a JSON object is taken as ``{export_name: value}``.
"""

from __future__ import annotations

import json
import re
from typing import Any

DECL_RE = re.compile(r"\b(export\s+)?(?:const|let|var)\s+([A-Za-z_$][\w$]*)\s*=\s*")
EXPORT_LIST_RE = re.compile(r"\bexport\s*\{([^}]*)\}")
IDENT_RE = re.compile(r"[A-Za-z_$][\w$]*")
NUMBER_RE = re.compile(r"-?(?:0[xX][0-9a-fA-F]+n?|\d+n|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
ASSERTION_RE = re.compile(r"as\s+[A-Za-z_$][\w$]*\b")

KEYWORDS: dict[str, Any] = {"true": True, "false": False, "null": None, "undefined": None}
SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


class ModuleLoadError(ValueError):
    """The module text does not contain the literal exports we expect."""


class _LiteralReader:
    def __init__(self, text: str, pos: int) -> None:
        self.text = text
        self.pos = pos

    def _skip_ws(self) -> None:
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch.isspace():
                self.pos += 1
            elif text.startswith("//", self.pos):
                newline = text.find("\n", self.pos)
                self.pos = len(text) if newline == -1 else newline + 1
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                if end == -1:
                    raise ModuleLoadError("unterminated block comment")
                self.pos = end + 2
            else:
                break

    def _peek(self) -> str:
        self._skip_ws()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _expect(self, ch: str) -> None:
        if self._peek() != ch:
            raise ModuleLoadError(f"expected {ch!r} at offset {self.pos}")
        self.pos += 1

    def read_value(self) -> Any:
        value = self._value()
        while True:
            self._skip_ws()
            match = ASSERTION_RE.match(self.text, self.pos)
            if match is None:
                return value
            self.pos = match.end()

    def _value(self) -> Any:
        ch = self._peek()
        if ch == "{":
            return self._object()
        if ch == "[":
            return self._array()
        if ch in ("'", '"', "`"):
            return self._string()
        if ch == "-" or ch == "." or ch.isdigit():
            return self._number()
        match = IDENT_RE.match(self.text, self.pos)
        if match is not None and match.group(0) in KEYWORDS:
            self.pos = match.end()
            return KEYWORDS[match.group(0)]
        raise ModuleLoadError(f"unsupported expression at offset {self.pos}")

    def _object(self) -> dict[str, Any]:
        self._expect("{")
        out: dict[str, Any] = {}
        while True:
            if self._peek() == "}":
                self.pos += 1
                return out
            key = self._key()
            self._expect(":")
            out[key] = self.read_value()
            ch = self._peek()
            if ch == ",":
                self.pos += 1
            elif ch == "}":
                self.pos += 1
                return out
            else:
                raise ModuleLoadError(f"expected ',' or '}}' at offset {self.pos}")

    def _key(self) -> str:
        ch = self._peek()
        if ch in ("'", '"'):
            return self._string()
        if ch.isdigit():
            return str(self._number())
        match = IDENT_RE.match(self.text, self.pos)
        if match is None:
            raise ModuleLoadError(f"unsupported object key at offset {self.pos}")
        self.pos = match.end()
        return match.group(0)

    def _array(self) -> list[Any]:
        self._expect("[")
        out: list[Any] = []
        while True:
            if self._peek() == "]":
                self.pos += 1
                return out
            out.append(self.read_value())
            ch = self._peek()
            if ch == ",":
                self.pos += 1
            elif ch == "]":
                self.pos += 1
                return out
            else:
                raise ModuleLoadError(f"expected ',' or ']' at offset {self.pos}")

    def _string(self) -> str:
        text = self.text
        quote = text[self.pos]
        self.pos += 1
        chunks: list[str] = []
        while self.pos < len(text):
            ch = text[self.pos]
            if ch == quote:
                self.pos += 1
                return "".join(chunks)
            if ch == "\\":
                chunks.append(self._escape())
                continue
            if quote == "`" and text.startswith("${", self.pos):
                raise ModuleLoadError(f"template interpolation at offset {self.pos}")
            if ch == "\n" and quote != "`":
                break
            chunks.append(ch)
            self.pos += 1
        raise ModuleLoadError("unterminated string literal")

    def _escape(self) -> str:
        text = self.text
        if self.pos + 1 >= len(text):
            raise ModuleLoadError("dangling escape")
        ch = text[self.pos + 1]
        self.pos += 2
        if ch in SIMPLE_ESCAPES:
            return SIMPLE_ESCAPES[ch]
        if ch == "\n":
            return ""
        if ch == "x":
            digits = text[self.pos : self.pos + 2]
            self.pos += 2
            return chr(int(digits, 16))
        if ch == "u":
            if text.startswith("{", self.pos):
                end = text.index("}", self.pos)
                digits = text[self.pos + 1 : end]
                self.pos = end + 1
            else:
                digits = text[self.pos : self.pos + 4]
                self.pos += 4
            return chr(int(digits, 16))
        return ch

    def _number(self) -> int | float:
        self._skip_ws()
        match = NUMBER_RE.match(self.text, self.pos)
        if match is None:
            raise ModuleLoadError(f"invalid number at offset {self.pos}")
        raw = match.group(0)
        self.pos = match.end()
        if raw.endswith("n"):
            raw = raw[:-1]
        negative = raw.startswith("-")
        digits = raw[1:] if negative else raw
        if digits[:2] in ("0x", "0X"):
            value: int | float = int(digits, 16)
        elif "." in digits or "e" in digits or "E" in digits:
            value = float(digits)
        else:
            value = int(digits, 10)
        return -value if negative else value


def _load_json_exports(text: str) -> dict[str, Any]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as err:
        raise ModuleLoadError(f"invalid JSON module: {err}") from err
    if not isinstance(payload, dict):
        raise ModuleLoadError("JSON module must be an object keyed by export name")
    return payload


def load_module_exports(text: str) -> dict[str, Any]:
    if text.lstrip().startswith("{"):
        return _load_json_exports(text)

    bindings: dict[str, Any] = {}
    exports: dict[str, Any] = {}
    consumed = 0
    for match in DECL_RE.finditer(text):
        if match.start() < consumed:
            continue
        reader = _LiteralReader(text, match.end())
        try:
            value = reader.read_value()
        except (ModuleLoadError, ValueError):
            # Initializer is code, not a literal.
            continue
        consumed = reader.pos
        name = match.group(2)
        bindings[name] = value
        if match.group(1):
            exports[name] = value

    for clause in EXPORT_LIST_RE.finditer(text):
        for item in clause.group(1).split(","):
            parts = item.split()
            if not parts:
                continue
            local = parts[0]
            exported = parts[2] if len(parts) == 3 and parts[1] == "as" else local
            if local in bindings:
                exports[exported] = bindings[local]

    if not exports:
        raise ModuleLoadError("module does not export any literal constants")
    return exports


def load_module_bytes(payload: bytes) -> dict[str, Any]:
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as err:
        raise ModuleLoadError(f"module is not valid UTF-8: {err}") from err
    return load_module_exports(text)
