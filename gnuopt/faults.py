"""
gnuopt faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (errors and warnings), grouped by domain so logs and searches stay predictable.
- OptionException / OptionWarning: base types that carry a message plus structured
  options (the payload) and know how to render themselves in a friendly, lowercased,
  actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Payload
- every fault keeps its context in a read-only `options` mapping; the public
  attributes (option, type, value, error, route) are views over it, so callers
  can catch by kind and react without parsing messages.

Integration
- the parser raises faults while scanning and hands them to trigger(fault, **ctx).
- in non-shell mode exceptions are raised and warnings go through `warnings`;
  in shell mode both are rendered via rich on stderr (errors then exit with 1).
"""
import inspect
import os.path
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, nullify

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - resolution (2110x)
      • UNDEFINED_TYPE, CIRCULAR_REFERENCE
    - values (2111x)
      • INVALID_VALUE, INVALID_REPETATION
    - warnings (2211x)
      • EMPTY_INLINE_VALUE, DANGLING_OPTION
    """
    # --- resolution errors (21xxx) ---
    UNDEFINED_TYPE              = 21101
    CIRCULAR_REFERENCE          = 21102

    # --- value errors (21xxx) ---
    INVALID_VALUE               = 21111
    INVALID_REPETATION          = 21112

    # --- warnings (22xxx) ---
    EMPTY_INLINE_VALUE          = 22111
    DANGLING_OPTION             = 22112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, kind):
    """
    build the rich renderable shared by errors and warnings.

    layout
    - header: "[ prog — code | Title ]"
    - body: the message, then a single " → hint" line.
    - footer: the host-provided docs for the code, when getdoc() found any.
    - fancy: the same content wrapped in a panel titled by the header.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = getattr(main, "__prog__", options.get("prog") or os.path.basename(sys.argv[0]) or "gnuopt")
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        text(prog, styler("prog-name")),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "", styler("code")),
        " | ",
        text(str(options.get("title", kind)).title(), styler("%s-title" % kind)),
        " ]"
    )
    message = text(nullify(fault.message, ""), styler("%s-message" % kind))
    hint = Text.assemble(text(" → ", styler("hint-arrow")), text(options.get("hint"), styler("hint")))
    body = [message, hint]
    if (docs := options.get("docs")) is not None:
        body.append(text(docs, styler("docs")))

    if fancy:
        return Panel(Group(*body), title=header, title_align="left", width=console.width - 4)

    return Group(header, *body)


class OptionException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(nullify(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def option(self):
        """the option name as first typed by the user (before alias resolution)."""
        return self.options.get("option")

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "underline #00E5FF dim",  # host-provided docs footer
        }, "error")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from self.options.get("error")
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidValueError(OptionException):
    @property
    def type(self):
        return self.options.get("type")

    @property
    def value(self):
        """the raw token that failed, or None when no value was supplied at all."""
        return self.options.get("value")

    @property
    def error(self):
        """the failure raised by a custom coercer, if any."""
        return self.options.get("error")


class InvalidRepetationError(OptionException): ...


class UndefinedTypeError(OptionException):
    @property
    def type(self):
        return self.options.get("type")


class CircularReferenceError(OptionException):
    @property
    def route(self):
        """names traversed while resolving, the repeated name last."""
        return list(self.options.get("route", ()))


class OptionWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(nullify(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def option(self):
        return self.options.get("option")

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
            "docs": "underline #FFB400 dim",  # host-provided docs footer
        }, "warning")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyInlineValueWarning(OptionWarning): ...
class DanglingOptionWarning(OptionWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are
      raised (chained to the coercer failure when one exists) and warnings are
      emitted through the warnings module.

    typical options
    - shell, fancy, colorful, prog, and any other context the reporter may want
      to show (option, type, value, route, ...).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "OptionException",
    "InvalidValueError",
    "InvalidRepetationError",
    "UndefinedTypeError",
    "CircularReferenceError",
    "OptionWarning",
    "EmptyInlineValueWarning",
    "DanglingOptionWarning",
    "trigger",
    "getdoc",
)
