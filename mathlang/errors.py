"""Error types for mathlang.

Two families of exceptions are raised by the library: `ParseError` for
input the grammar rejects and `EvalError` for well-formed formulas that
cannot be evaluated. Both convert into a single `MathError`, a span plus a
message, which is what gets shown to the user.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .ast import Bounds, Span


class MathlangError(Exception):
    """Base class of every exception raised by mathlang."""


class MathError(MathlangError):
    """A user-displayable error, optionally anchored to a span of the input."""
    def __init__(self, message: str, span: Optional[Bounds] = None):
        super().__init__(message)
        self.message = message
        self.span = span

    def __repr__(self) -> str:
        return f"MathError(span={self.span!r}, message={self.message!r})"

    def __eq__(self, other):
        if not isinstance(other, MathError):
            return NotImplemented
        return (self.span, self.message) == (other.span, other.message)

    __hash__ = MathlangError.__hash__

    def render(self, source: str) -> str:
        """Return the message with the offending part of `source` underlined."""
        if self.span is None:
            return self.message
        left, right = self.span
        left = min(left, len(source))
        marker = ' ' * left + '^' * max(right - left, 1)
        return f"{self.message}\n{source}\n{marker}"


###############################################################################
# Parse errors
###############################################################################

class ParseError(MathlangError):
    """Raised by the parser when the input is not a valid formula."""

    def to_math_error(self) -> MathError:
        raise NotImplementedError


class InvalidToken(ParseError):
    def __init__(self, location: int):
        super().__init__(f"invalid token at {location}")
        self.location = location

    def to_math_error(self) -> MathError:
        return MathError("You lost me here...", (self.location, self.location + 1))


class UnrecognizedToken(ParseError):
    def __init__(self, token: Span[str], expected: Tuple[str, ...] = ()):
        super().__init__(f"unexpected token {token.value!r} at {token.start}")
        self.token = token
        self.expected = expected

    def to_math_error(self) -> MathError:
        return MathError("You lost me here...", self.token.span)


class ExtraToken(UnrecognizedToken):
    """A complete formula was followed by more input."""


class UnrecognizedEOF(ParseError):
    def __init__(self, location: int, expected: Tuple[str, ...] = ()):
        super().__init__(f"unexpected end of input at {location}")
        self.location = location
        self.expected = expected

    def to_math_error(self) -> MathError:
        return MathError("Expression ended unexpectedly", (self.location, self.location + 1))


class InternalParseError(ParseError):
    """The grammar itself misbehaved; not attributable to the input."""

    def to_math_error(self) -> MathError:
        return MathError("An unknown error occured while parsing your expression")


###############################################################################
# Evaluation errors
###############################################################################

class EvalError(MathlangError):
    """Raised by the evaluator.

    `call_site` is set when the error happened inside the body of a called
    function; it holds the name span of the outermost call in the evaluated
    expression, since the body's own spans point into the definition text.
    """
    call_site: Optional[Span[str]] = None

    def to_math_error(self) -> MathError:
        if self.call_site is not None:
            return MathError(
                f"An unexpected error occurred while evaluating `{self.call_site.value}`",
                self.call_site.span,
            )
        return self._math_error()

    def _math_error(self) -> MathError:
        raise NotImplementedError


class _NameError(EvalError):
    template = ''

    def __init__(self, name: Span[str]):
        super().__init__(self.template.format(name.value))
        self.name = name

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.name == other.name

    __hash__ = EvalError.__hash__

    def _math_error(self) -> MathError:
        return MathError(str(self), self.name.span)


class UnknownVariable(_NameError):
    template = "No such variable: `{}`"


class UnknownFunction(_NameError):
    template = "No such function: `{}`"


class NotAVariable(_NameError):
    template = "`{}` is a function, not a variable"


class NotAFunction(_NameError):
    template = "`{}` is a variable, not a function"


class Arity(EvalError):
    def __init__(self, function: Span[str], arglist: Bounds, expected: int, actual: int):
        super().__init__(
            f"`{function.value}` takes {expected} arguments, but {actual} were provided"
        )
        self.function = function
        self.arglist = arglist
        self.expected = expected
        self.actual = actual

    def __eq__(self, other):
        if not isinstance(other, Arity):
            return NotImplemented
        return (self.function, self.arglist, self.expected, self.actual) == \
            (other.function, other.arglist, other.expected, other.actual)

    __hash__ = EvalError.__hash__

    def _math_error(self) -> MathError:
        return MathError(str(self), self.arglist)


class DivisionByZero(EvalError):
    def __init__(self, span: Bounds):
        super().__init__("Tried to divide by zero")
        self.span = span

    def __eq__(self, other):
        if not isinstance(other, DivisionByZero):
            return NotImplemented
        return self.span == other.span

    __hash__ = EvalError.__hash__

    def _math_error(self) -> MathError:
        return MathError(str(self), self.span)


def to_math_error(error: MathlangError) -> MathError:
    """Convert any mathlang exception into the user-facing `MathError`."""
    if isinstance(error, MathError):
        return error
    if isinstance(error, (ParseError, EvalError)):
        return error.to_math_error()
    raise TypeError(f"not a mathlang error: {error!r}")
