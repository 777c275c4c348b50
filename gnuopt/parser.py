"""
gnuopt parser: map an argument vector into a result dict guided by an option map.

What this module provides
- gnuargs(args): the tokenizer; splits "--name=value" into "--name", "value".
- parse(args, optmap) / parse(optmap): the driver; the one-argument form reads
  sys.argv[1:].

Result
- a dict whose "$" key lists positional arguments in encounter order; every other
  key is a resolved option name mapped to its coerced value, a list of values
  ("*" repeated or "~" slurped), or an occurrence count (switches).

Scanning rules
- after a "~" option every remaining token is a value, flag-shaped or not.
- "--name" is one option, "-abc" is the cluster "-a -b -c".
- a value token goes to the pending option while it has none, otherwise to "$".
- an option still waiting for its value when the next flag (or the end) arrives
  is an InvalidValueError; a second occurrence of an unsigned option is an
  InvalidRepetationError.

Quick example
    >>> parse(["able", "-abc", "charlie"], {"a": "switch", "b": "switch", "c": "string"})
    {'$': ['able'], 'a': 1, 'b': 1, 'c': 'charlie'}
"""
import re
import shlex
import sys
from collections.abc import Iterable, Mapping

from .coercion import coerce, invalid
from .faults import *
from .resolver import solve
from .utils import Unset

_INLINE = re.compile(r"(--[^=]+)=(.*)", re.DOTALL)


class _Pending:
    """
    the most recently resolved option and the value it received since (Unset if none).
    """
    __slots__ = ("name", "type", "sign", "origin", "value")

    def __init__(self, resolution, value=Unset, /):
        self.name, self.type, self.sign, self.origin = resolution
        self.value = value

    def __repr__(self):
        return "<pending %r (%s%s) value=%r>" % (self.origin, self.sign or "", self.type, self.value)


def gnuargs(args, /, **options):
    """
    lazily yield tokens from `args`, expanding "--name=value" into two tokens.

    an empty inline value ("--name=") is still yielded (as "") and reported with
    EmptyInlineValueWarning through trigger(..., **options).
    """
    for arg in args:
        if match := _INLINE.fullmatch(arg):
            if not match[2]:
                trigger(EmptyInlineValueWarning(
                    "empty inline value for option %r" % match[1],
                    title="empty inline value",
                    code=FaultCode.EMPTY_INLINE_VALUE,
                    option=match[1][2:],
                    hint="add a value after '=' (for example: %s=<value>)" % match[1],
                    docs=getdoc(FaultCode.EMPTY_INLINE_VALUE)
                ), **options)
            yield match[1]
            yield match[2]
        else:
            yield arg


def _slurp(result, pending, token):
    value = coerce(token, pending.type, pending.origin)
    if result[pending.name] is None:
        result[pending.name] = []
    result[pending.name].append(value)
    pending.value = value
    return pending


def _flag(result, optmap, pending, token, options):
    if pending is not None and pending.value is Unset:
        raise invalid(None, pending.type, pending.origin)

    for name in [token[2:]] if token.startswith("--") else list(token[1:]):
        if pending is not None and pending.value is Unset:
            # only reachable inside a cluster: "-ab" where "a" wanted a value
            trigger(DanglingOptionWarning(
                "option %r in %r got no value" % (pending.origin, token),
                title="dangling option",
                code=FaultCode.DANGLING_OPTION,
                option=pending.origin,
                hint="move %r to the end of the cluster or give it its own token" % pending.origin,
                docs=getdoc(FaultCode.DANGLING_OPTION)
            ), **options)

        pending = _Pending(resolution := solve(optmap, name))

        if resolution.name in result:
            if not resolution.sign:
                raise InvalidRepetationError(
                    "option %r is unallowed to appear multiple times" % resolution.origin,
                    title="invalid repetition",
                    code=FaultCode.INVALID_REPETATION,
                    option=resolution.origin,
                    hint="keep a single %r or declare it repeatable with '*'" % resolution.origin,
                    docs=getdoc(FaultCode.INVALID_REPETATION)
                )
            if resolution.type == "switch":
                result[resolution.name] += 1
                pending.value = result[resolution.name]
        elif resolution.type == "switch":
            result[resolution.name] = pending.value = 1
        else:
            result[resolution.name] = None

    return pending


def _value(result, pending, token):
    if pending is None or pending.value is not Unset:
        result["$"].append(token)
    elif pending.sign == "*":
        value = coerce(token, pending.type, pending.origin)
        if result[pending.name] is None:
            result[pending.name] = []
        result[pending.name].append(value)
        pending.value = value
    else:
        result[pending.name] = pending.value = coerce(token, pending.type, pending.origin)
    return pending


def _parse(args, optmap, options):
    result = {"$": []}
    pending = None

    for token in gnuargs(args, **options):
        if pending is not None and pending.sign == "~":
            pending = _slurp(result, pending, token)
        elif token.startswith("-"):
            pending = _flag(result, optmap, pending, token, options)
        else:
            pending = _value(result, pending, token)

    if pending is not None and pending.value is Unset:
        raise invalid(None, pending.type, pending.origin)

    return result


def parse(*parameters, shell=False, fancy=False, colorful=True, prog=Unset):
    """
    parse an argument vector against an option map.

    invocation modes
    - parse(args, optmap): args is an iterable of strings, or a single shell-like
      string split with shlex.split.
    - parse(optmap): args are taken from sys.argv[1:].

    runtime options
    - shell: print faults through rich and exit(1) instead of raising.
    - fancy: render faults inside a panel.
    - colorful: style the rendered faults.
    - prog: program name shown in fault headers.

    returns
    - dict with "$" (positionals) and one key per resolved option.

    raises
    - InvalidValueError, InvalidRepetationError, UndefinedTypeError,
      CircularReferenceError (first fault aborts the call).
    - TypeError: bad invocation (wrong arity, non-mapping optmap, non-string args).
    - ValueError: a shell-like string that shlex cannot split (unclosed quote).
    """
    match parameters:
        case (Mapping() as optmap,):
            args = sys.argv[1:]
        case (str() as prompt, Mapping() as optmap):
            args = shlex.split(prompt)
        case (Iterable() as args, Mapping() as optmap):
            args = list(args)
        case _:
            raise TypeError("parse() takes an option map, optionally preceded by the arguments")

    if not all(isinstance(arg, str) for arg in args):
        raise TypeError("parse() arguments must be strings")

    options = {"shell": shell, "fancy": fancy, "colorful": colorful}
    if prog is not Unset:
        options["prog"] = prog

    try:
        return _parse(args, optmap, options)
    except OptionException as fault:
        trigger(fault, **options)


__all__ = (
    "gnuargs",
    "parse",
)
