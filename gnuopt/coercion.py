"""
gnuopt value coercion: convert a raw token into the value its option declares.

Built-in types
- "string"   → the token verbatim.
- "number"   → float from the leading numeric prefix ("1.5kg" → 1.5, "Infinity" → inf).
- "integer"  → int from the leading numeric prefix, decimal or 0x-hexadecimal
               ("42px" → 42, "4.9" → 4, "0x1f" → 31).
- "switch"   → never takes a value; any attempt fails.

Custom types
- any callable is invoked with the raw token; whatever it raises is wrapped into
  InvalidValueError (the original failure stays reachable as `.error`).
"""
import re

from .faults import *

_NUMBER = re.compile(r"\s*([+-]?(?:Infinity|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))")
_INTEGER = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|([0-9]+))")


def describe(type, /):
    """display name for a type descriptor (callables by their __name__)."""
    if callable(type):
        return getattr(type, "__name__", repr(type))
    return str(type)


def invalid(value, type, origin, /, error=None):
    """
    build the InvalidValueError for `origin`.

    a None value means the option got no value at all (next flag or end of input).
    """
    if value is None:
        message = "option %r requires a value (%s)" % (origin, describe(type))
        hint = "pass a %s value right after %r" % (describe(type), origin)
    elif type == "switch":
        message = "switch %r cannot take the value %r" % (origin, value)
        hint = "switches only count occurrences; remove the value"
    else:
        message = "%r is invalid for option %r (%s)" % (value, origin, describe(type))
        hint = "pass a value that converts to %s" % describe(type)
        if error is not None:
            hint = "%s (%s)" % (hint, error)
    return InvalidValueError(
        message,
        title="invalid value",
        code=FaultCode.INVALID_VALUE,
        option=origin,
        type=type,
        value=value,
        error=error,
        hint=hint,
        docs=getdoc(FaultCode.INVALID_VALUE)
    )


def _number(value, origin):
    if not (match := _NUMBER.match(value)):
        raise invalid(value, "number", origin)
    return float(match[1])


def _integer(value, origin):
    if not (match := _INTEGER.match(value)) or not (digits := match[2] or match[3]):
        raise invalid(value, "integer", origin)
    try:
        number = int(digits, 16 if match[2] is not None else 10)
    except ValueError as error:
        # decimal strings past sys.get_int_max_str_digits()
        raise invalid(value, "integer", origin, error=error) from error
    return -number if match[1] == "-" else number


def coerce(value, type, origin, /):
    """
    convert `value` according to `type` on behalf of option `origin`.

    a callable type receives only the raw string; `origin` is not passed to it
    and shows up as `.option` on the InvalidValueError when it fails.

    raises
    - InvalidValueError: the value does not convert (or the type is "switch").
    - UndefinedTypeError: `type` is neither a built-in name nor a callable.
    """
    match type:
        case "string":
            return value
        case "number":
            return _number(value, origin)
        case "integer":
            return _integer(value, origin)
        case "switch":
            raise invalid(value, type, origin)

    if callable(type):
        try:
            return type(value)
        except Exception as error:
            raise invalid(value, type, origin, error=error) from error

    raise UndefinedTypeError(
        "%r is undefined type for option %r" % (type, origin),
        title="undefined type",
        code=FaultCode.UNDEFINED_TYPE,
        option=origin,
        type=type,
        hint="use string, number, integer, switch, a callable or a reference like '&name'",
        docs=getdoc(FaultCode.UNDEFINED_TYPE)
    )


__all__ = (
    "coerce",
    "describe",
    "invalid",
)
