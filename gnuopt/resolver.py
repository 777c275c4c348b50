r"""
gnuopt option resolution: turn a typed flag name into a concrete (name, type, sign).

Optmap grammar (per entry)
- "&name"                       alias; resolution continues at `name` (recursively).
- "[*~]?(string|number|integer|switch)"
                                typed, optionally repeatable ("*") or slurping ("~").
- callable                      custom coercion.
- key "-"                       wildcard default for names without an entry.

Rules
- the wildcard only answers for the typed name; alias targets must be declared keys.
- origin is always the name as first typed, whatever the number of aliases traversed.
- a chain revisiting a name fails with the full route, the repeated name last.
"""
from collections import namedtuple

from .faults import *

WILDCARD = "-"

Resolution = namedtuple("Resolution", (
    "name",
    "type",
    "sign",
    "origin"
))
Resolution.__doc__ = """
resolved option: the final `name`, its terminal `type` descriptor, the `sign`
("*", "~" or None) and the `origin` name as first typed.
"""


def solve(optmap, name, /):
    """
    resolve `name` against `optmap` through aliases and the wildcard entry.

    returns
    - Resolution(name, type, sign, origin)

    raises
    - UndefinedTypeError: no entry and no wildcard, or an alias pointing to a key
      that is not declared.
    - CircularReferenceError: an alias chain revisits a name.
    """
    origin = name
    type = optmap.get(name) or optmap.get(WILDCARD)
    if not type:
        raise UndefinedTypeError(
            "option %r is not defined" % origin,
            title="undefined option",
            code=FaultCode.UNDEFINED_TYPE,
            option=origin,
            type=None,
            hint="declare %r in the option map or add a %r wildcard entry" % (origin, WILDCARD),
            docs=getdoc(FaultCode.UNDEFINED_TYPE)
        )

    refs = ["&" + origin]
    while isinstance(type, str) and type.startswith("&"):
        if type in refs:
            refs.append(type)
            route = [ref[1:] for ref in refs]
            raise CircularReferenceError(
                "option %r has circular reference: %s" % (origin, " -> ".join(route)),
                title="circular reference",
                code=FaultCode.CIRCULAR_REFERENCE,
                option=origin,
                route=route,
                hint="break the cycle so one of the references ends in a concrete type",
                docs=getdoc(FaultCode.CIRCULAR_REFERENCE)
            )
        refs.append(type)
        name = type[1:]
        if name not in optmap:
            raise UndefinedTypeError(
                "%r is undefined type for option %r" % (type, origin),
                title="undefined reference",
                code=FaultCode.UNDEFINED_TYPE,
                option=origin,
                type=type,
                hint="point %r to a declared option (the wildcard does not answer references)" % origin,
                docs=getdoc(FaultCode.UNDEFINED_TYPE)
            )
        type = optmap[name]

    sign = None
    if isinstance(type, str) and type[:1] in ("*", "~"):
        sign, type = type[:1], type[1:]

    return Resolution(name, type, sign, origin)


__all__ = (
    "WILDCARD",
    "Resolution",
    "solve",
)
