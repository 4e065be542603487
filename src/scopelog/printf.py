"""printf-style rendering for unstructured log lines.

Unstructured loggers format their message against the call-site arguments.
The verbs follow the classic printf family with ``%v`` (natural rendering
of any value) and ``%q`` (double-quoted string) added, so messages such as
``"validation error in %s: %v"`` work with any argument type.

Rendering never raises. Problems are written into the output instead:

    ==========================  ===============================
    Problem                     Rendered as
    ==========================  ===============================
    too few arguments           ``%!s(MISSING)``
    too many arguments          ``%!(EXTRA int=1, str=x)``
    verb does not fit the value ``%!d(str=abc)``
    format ends with ``%``      ``%!(NOVERB)``
    width over 1e6 or not int   ``%!(BADWIDTH)``
    precision over 1e6          ``%!(BADPREC)``
    rendering the value failed  ``%!d(PANIC=ValueError: ...)``
    ==========================  ===============================

Examples:
    >>> sprintf("hi %s", "there")
    'hi there'
    >>> sprintf("%d items", "three")
    '%!d(str=three) items'
    >>> sprintf("%s and %s", "one")
    'one and %!s(MISSING)'
"""

from __future__ import annotations

from typing import Any

_FLAGS = "-+# 0"

# widths and precisions above this are rejected
_MAX_NUM = 1_000_000
_DIGITS = "0123456789"

_INT_PREFIXES = {"x": "0x", "X": "0X", "o": "0o", "b": "0b"}

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def quote(text: str) -> str:
    """Double-quote ``text``, escaping quotes, backslashes and non-printables."""
    out = ['"']
    for ch in text:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x80:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) < 0x10000:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    out.append('"')
    return "".join(out)


def render_value(value: Any) -> str:
    """Natural text form of a value (what ``%v`` prints)."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    try:
        return str(value)
    except Exception as e:  # a broken __str__ must not break logging
        return f"%!v(PANIC=__str__ method: {e})"


def _type_name(value: Any) -> str:
    return type(value).__name__


def _bad_verb(verb: str, value: Any) -> str:
    return f"%!{verb}({_type_name(value)}={render_value(value)})"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class _Spec:
    """Flags, width and precision parsed from one directive."""

    __slots__ = ("minus", "plus", "sharp", "space", "zero", "width", "precision")

    def __init__(self) -> None:
        self.minus = False
        self.plus = False
        self.sharp = False
        self.space = False
        self.zero = False
        self.width: int | None = None
        self.precision: int | None = None

    def pad(self, text: str) -> str:
        if self.width is None or len(text) >= self.width:
            return text
        if self.minus:
            return text.ljust(self.width)
        return text.rjust(self.width)

    def number(self, value: int | float, pytype: str) -> str:
        if isinstance(value, int):
            # IntEnum and friends format as their name otherwise
            value = int(value)
            if self.precision is not None:
                return self.pad(self._digits(value, pytype))
        spec = "<" if self.minus else ""
        if self.plus:
            spec += "+"
        elif self.space:
            spec += " "
        if self.sharp and pytype in "xXob":
            spec += "#"
        if self.zero and not self.minus:
            spec += "0"
        if self.width is not None:
            spec += str(self.width)
        if self.precision is not None and pytype in "fFeEgG":
            spec += f".{self.precision}"
        return format(value, spec + pytype)

    def _digits(self, value: int, pytype: str) -> str:
        """Integer with a minimum digit count; the zero flag does not apply."""
        digits = format(abs(value), pytype)
        if self.precision == 0 and value == 0:
            digits = ""
        digits = digits.zfill(self.precision)
        if value < 0:
            sign = "-"
        elif self.plus:
            sign = "+"
        elif self.space:
            sign = " "
        else:
            sign = ""
        prefix = _INT_PREFIXES.get(pytype, "") if self.sharp else ""
        return sign + prefix + digits


def _parse_num(fmt: str, i: int) -> tuple[int | None, int]:
    """Read a run of digits at ``fmt[i]``. Returns (None, next) when too large."""
    start = i
    while i < len(fmt) and fmt[i] in _DIGITS:
        i += 1
    if i - start > len(str(_MAX_NUM)):
        return None, i
    num = int(fmt[start:i]) if i > start else 0
    return (num if num <= _MAX_NUM else None), i


def _int_arg(args: tuple[Any, ...], argi: int) -> int | None:
    """Integer argument for a ``*`` width or precision, or None if unusable."""
    if argi < len(args) and isinstance(args[argi], int) and not isinstance(args[argi], bool):
        try:
            num = int(args[argi])
        except Exception:  # broken __int__
            return None
        if -_MAX_NUM <= num <= _MAX_NUM:
            return num
    return None


def _format_one(verb: str, value: Any, spec: _Spec) -> str:
    try:
        return _render_one(verb, value, spec)
    except Exception as e:  # a value that cannot be rendered must not break logging
        return f"%!{verb}(PANIC={type(e).__name__}: {e})"


def _render_one(verb: str, value: Any, spec: _Spec) -> str:
    if verb == "v":
        return spec.pad(render_value(value))

    if verb == "s":
        text = value.decode("utf-8", "replace") if isinstance(value, bytes) else render_value(value)
        if spec.precision is not None:
            text = text[: spec.precision]
        return spec.pad(text)

    if verb == "q":
        if _is_int(value) and 0 <= value <= 0x10FFFF:
            return spec.pad("'" + chr(value) + "'")
        text = value if isinstance(value, str) else render_value(value)
        return spec.pad(quote(text))

    if verb == "t":
        if isinstance(value, bool):
            return spec.pad(render_value(value))
        return _bad_verb(verb, value)

    if verb == "d":
        if _is_int(value):
            return spec.number(value, "d")
        return _bad_verb(verb, value)

    if verb in "xX":
        if _is_int(value):
            return spec.number(value, verb)
        if isinstance(value, (str, bytes)):
            raw = value.encode() if isinstance(value, str) else value
            text = raw.hex()
            return spec.pad(text.upper() if verb == "X" else text)
        return _bad_verb(verb, value)

    if verb in "ob":
        if _is_int(value):
            return spec.number(value, verb)
        return _bad_verb(verb, value)

    if verb == "c":
        if _is_int(value) and 0 <= value <= 0x10FFFF:
            return spec.pad(chr(value))
        return _bad_verb(verb, value)

    if verb in "fFeEgG":
        if not _is_number(value):
            return _bad_verb(verb, value)
        if verb in "gG" and spec.precision is None:
            return spec.pad(render_value(float(value)))
        if spec.precision is None:
            spec.precision = 6
        return spec.number(float(value), verb)

    return _bad_verb(verb, value)


def sprintf(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt``. Never raises."""
    out: list[str] = []
    argi = 0
    i = 0
    end = len(fmt)

    while i < end:
        pct = fmt.find("%", i)
        if pct < 0:
            out.append(fmt[i:])
            break
        out.append(fmt[i:pct])
        i = pct + 1

        spec = _Spec()
        while i < end and fmt[i] in _FLAGS:
            flag = fmt[i]
            if flag == "-":
                spec.minus = True
            elif flag == "+":
                spec.plus = True
            elif flag == "#":
                spec.sharp = True
            elif flag == " ":
                spec.space = True
            else:
                spec.zero = True
            i += 1

        if i < end and fmt[i] == "*":
            i += 1
            width = _int_arg(args, argi)
            if width is None:
                out.append("%!(BADWIDTH)")
            else:
                spec.width = abs(width)
                spec.minus = spec.minus or width < 0
            argi += 1
        elif i < end and fmt[i] in _DIGITS:
            spec.width, i = _parse_num(fmt, i)
            if spec.width is None:
                out.append("%!(BADWIDTH)")

        if i < end and fmt[i] == ".":
            i += 1
            if i < end and fmt[i] == "*":
                i += 1
                precision = _int_arg(args, argi)
                if precision is None:
                    out.append("%!(BADPREC)")
                elif precision >= 0:
                    spec.precision = precision
                argi += 1
            else:
                spec.precision, i = _parse_num(fmt, i)
                if spec.precision is None:
                    out.append("%!(BADPREC)")

        if i >= end:
            out.append("%!(NOVERB)")
            break

        verb = fmt[i]
        i += 1

        if verb == "%":
            out.append("%")
            continue

        if argi >= len(args):
            out.append(f"%!{verb}(MISSING)")
            continue

        out.append(_format_one(verb, args[argi], spec))
        argi += 1

    if argi < len(args):
        extra = ", ".join(f"{_type_name(a)}={render_value(a)}" for a in args[argi:])
        out.append(f"%!(EXTRA {extra})")

    return "".join(out)


__all__ = ["quote", "render_value", "sprintf"]
