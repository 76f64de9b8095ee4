"""Result type for explicit success/failure propagation.

A Result is exactly one of two variants, each holding one non-None payload:

- ``Success``: the operation produced a value
- ``Failure``: the operation produced a domain failure

Combinators only ever call the callback that matches the variant, so a
chain of ``map``/``flat_map``/``fanout`` steps short-circuits on the first
Failure without any branch checks at the call site.

Reading the payload of the wrong variant is a programmer error and raises
``ContractViolation``; it is never turned into a Failure or a default.

Example:
    >>> def parse_port(raw: str) -> Result[int, str]:
    ...     return success(int(raw)) if raw.isdigit() else failure(f"not a port: {raw!r}")
    >>>
    >>> parse_port("8080").map(lambda p: p + 1).then(str, lambda e: e)
    '8081'
    >>> parse_port("http").map(lambda p: p + 1).then(str, lambda e: e)
    "not a port: 'http'"
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import (
    TYPE_CHECKING,
    Callable,
    Generic,
    NamedTuple,
    NoReturn,
    TypeVar,
    final,
    overload,
)

from resultant.errors import ViolationCode, violation

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

S = TypeVar("S", covariant=True)  # Success type
F = TypeVar("F")  # Failure type
T = TypeVar("T")  # Mapped success type
G = TypeVar("G")  # Mapped failure type
R = TypeVar("R")  # Fold result type
A = TypeVar("A")
B = TypeVar("B")

_VARIANTS = frozenset({"Success", "Failure"})
_MISSING = object()


class Partition(NamedTuple, Generic[A, B]):
    """Payloads split out of a batch of Results, each list in input order."""

    successes: list[A]
    failures: list[B]


class Result(ABC, Generic[S, F]):
    """Closed sum type over ``Success`` and ``Failure``.

    Instances are immutable values compared structurally: two Results are
    equal iff they are the same variant with equal payloads. Construct one
    with ``Success(v)``/``Failure(e)`` or the ``success``/``failure``
    functions, which return the value typed as ``Result[S, F]``.

    Supports structural pattern matching:
        >>> match success(3):
        ...     case Success(v): print("got", v)
        ...     case Failure(e): print("failed", e)
        got 3
    """

    __slots__ = ()
    __match_args__ = ("value",)

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__ or cls.__name__ not in _VARIANTS:
            raise TypeError(f"Result has exactly two variants, Success and Failure; cannot define {cls.__name__}")

    # ─────────────────────────────────────────────────────────────────
    # Variant predicates & payload access
    # ─────────────────────────────────────────────────────────────────

    @abstractmethod
    def is_success(self) -> bool:
        """True iff this is the Success variant."""

    def is_failure(self) -> bool:
        """True iff this is the Failure variant."""
        return not self.is_success()

    @property
    @abstractmethod
    def value(self) -> object:
        """Payload of whichever variant this is."""

    @property
    @abstractmethod
    def success(self) -> S:
        """Success payload.

        Raises:
            ContractViolation: If this is a Failure
        """

    @property
    @abstractmethod
    def failure(self) -> F:
        """Failure payload.

        Raises:
            ContractViolation: If this is a Success
        """

    # ─────────────────────────────────────────────────────────────────
    # Inspection
    # ─────────────────────────────────────────────────────────────────

    def on_success(self, fn: Callable[[S], object]) -> None:
        """Call fn with the payload if Success, otherwise do nothing."""
        if self.is_success():
            fn(self.success)

    def on_failure(self, fn: Callable[[F], object]) -> None:
        """Call fn with the payload if Failure, otherwise do nothing."""
        if self.is_failure():
            fn(self.failure)

    def tap(
        self,
        on_success: Callable[[S], object] | None = None,
        on_failure: Callable[[F], object] | None = None,
    ) -> Result[S, F]:
        """Run the callback matching the variant for its side effect, return self.

        Example:
            >>> seen = []
            >>> success(1).tap(on_success=seen.append).map(lambda x: x + 1)
            Success(2)
            >>> seen
            [1]
        """
        if self.is_success():
            if on_success is not None:
                on_success(self.success)
        elif on_failure is not None:
            on_failure(self.failure)
        return self

    # ─────────────────────────────────────────────────────────────────
    # Folding
    # ─────────────────────────────────────────────────────────────────

    def then(self, on_success: Callable[[S], R], on_failure: Callable[[F], R]) -> R:
        """Fold into a single value by calling exactly one branch.

        Every other combinator can be written in terms of this one.

        Example:
            >>> success("x").then(len, lambda f: -1)
            1
            >>> failure("err").then(lambda s: -1, len)
            3
        """
        if self.is_success():
            return on_success(self.success)
        return on_failure(self.failure)

    # ─────────────────────────────────────────────────────────────────
    # Transformation
    # ─────────────────────────────────────────────────────────────────

    @abstractmethod
    def map(self, mapper: Callable[[S], T]) -> Result[T, F]:
        """Transform the success payload; a Failure passes through untouched."""

    @abstractmethod
    def map_failure(self, mapper: Callable[[F], G]) -> Result[S, G]:
        """Transform the failure payload; a Success passes through untouched."""

    def flat_map(self, mapper: Callable[[S], Result[T, F]]) -> Result[T, F]:
        """Chain a fallible step (monadic bind).

        On Success the mapper's Result is returned as-is, without extra
        wrapping. On Failure the mapper is never called.

        Raises:
            ContractViolation: If mapper returns something other than a Result
        """
        if self.is_failure():
            return Failure(self.failure)
        return _ensure_result(mapper(self.success), "flat_map")

    def fanout(self, fn: Callable[[S], Result[T, F]]) -> Result[tuple[S, T], F]:
        """Derive a second value while keeping the first.

        Example:
            >>> success(1).fanout(lambda x: success(x + 1))
            Success((1, 2))
            >>> success(1).fanout(lambda x: failure("e"))
            Failure('e')
        """
        if self.is_failure():
            return Failure(self.failure)
        original = self.success
        return _ensure_result(fn(original), "fanout").map(lambda derived: (original, derived))

    # ─────────────────────────────────────────────────────────────────
    # Conversion
    # ─────────────────────────────────────────────────────────────────

    def to_nullable(self) -> S | None:
        """Success payload, or None for a Failure (the failure is discarded)."""
        return self.success if self.is_success() else None

    @overload
    @staticmethod
    def from_nullable(maybe_null: A | None, when_null: B) -> Result[A, B]: ...

    @overload
    @staticmethod
    def from_nullable(maybe_null: A | None, *, when_null_factory: Callable[[], B]) -> Result[A, B]: ...

    @staticmethod
    def from_nullable(
        maybe_null: A | None,
        when_null: object = _MISSING,
        *,
        when_null_factory: Callable[[], B] | None = None,
    ) -> Result[A, object]:
        """Lift an optional value into a Result.

        Pass the failure payload eagerly as ``when_null`` or lazily as
        ``when_null_factory``; the factory only runs when the value is None.
        The forms are told apart by keyword, so a callable failure payload
        such as an exception class is fine as ``when_null``.

        Warning:
            A producer passed positionally is treated as the payload itself:
            ``from_nullable(None, lambda: "E")`` is ``Failure(<lambda>)``, not
            ``Failure("E")``. Use ``when_null_factory=`` for deferred payloads.

        Example:
            >>> from_nullable(None, "missing")
            Failure('missing')
            >>> from_nullable("v", when_null_factory=lambda: 1 / 0)
            Success('v')

        Raises:
            TypeError: Unless exactly one of when_null/when_null_factory is given
        """
        if (when_null is _MISSING) == (when_null_factory is None):
            raise TypeError("from_nullable() takes exactly one of 'when_null' or 'when_null_factory'")
        if maybe_null is not None:
            return Success(maybe_null)
        return Failure(when_null_factory() if when_null_factory is not None else when_null)

    @staticmethod
    def partition(results: Iterable[Result[A, B]]) -> Partition[A, B]:
        """Split Results into success and failure payloads, keeping relative order.

        Example:
            >>> partition([failure("a"), success(1), failure("b"), success(2)])
            Partition(successes=[1, 2], failures=['a', 'b'])
        """
        successes: list[A] = []
        failures: list[B] = []
        for result in results:
            if result.is_success():
                successes.append(result.success)
            else:
                failures.append(result.failure)
        return Partition(successes, failures)

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type[Result[S, F]], tuple[object]]:
        return type(self), (self.value,)

    def __eq__(self, other: object) -> bool:
        """Structural equality: same variant, equal payloads."""
        if not isinstance(other, Result):
            return NotImplemented
        return type(self) is type(other) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

    __str__ = __repr__

    def __iter__(self) -> Iterator[S]:
        """Yield the success payload once, or nothing for a Failure."""
        if self.is_success():
            yield self.success


@final
class Success(Result[S, F]):
    """Success variant."""

    __slots__ = ("_value",)

    def __init__(self, value: S) -> None:
        if value is None:
            raise violation(ViolationCode.MISSING_PAYLOAD, "Success", "payload must not be None")
        object.__setattr__(self, "_value", value)

    def is_success(self) -> bool:
        return True

    @property
    def value(self) -> S:
        return self._value

    @property
    def success(self) -> S:
        return self._value

    @property
    def failure(self) -> NoReturn:
        raise violation(
            ViolationCode.WRONG_VARIANT, "failure", "not a failure", variant="Success", payload=self._value,
        )

    def map(self, mapper: Callable[[S], T]) -> Result[T, F]:
        return Success(mapper(self._value))

    def map_failure(self, mapper: Callable[[F], G]) -> Result[S, G]:
        return Success(self._value)


@final
class Failure(Result[S, F]):
    """Failure variant."""

    __slots__ = ("_value",)

    def __init__(self, value: F) -> None:
        if value is None:
            raise violation(ViolationCode.MISSING_PAYLOAD, "Failure", "payload must not be None")
        object.__setattr__(self, "_value", value)

    def is_success(self) -> bool:
        return False

    @property
    def value(self) -> F:
        return self._value

    @property
    def success(self) -> NoReturn:
        raise violation(
            ViolationCode.WRONG_VARIANT, "success", "not a success", variant="Failure", payload=self._value,
        )

    @property
    def failure(self) -> F:
        return self._value

    def map(self, mapper: Callable[[S], T]) -> Result[T, F]:
        return Failure(self._value)

    def map_failure(self, mapper: Callable[[F], G]) -> Result[S, G]:
        return Failure(mapper(self._value))


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def success(value: A) -> Result[A, B]:
    """Construct the Success variant, typed as a Result."""
    return Success(value)


def failure(value: B) -> Result[A, B]:
    """Construct the Failure variant, typed as a Result."""
    return Failure(value)


from_nullable = Result.from_nullable
partition = Result.partition


def _ensure_result(candidate: object, operation: str) -> Result[T, F]:
    if not isinstance(candidate, Result):
        raise violation(
            ViolationCode.NOT_A_RESULT, operation, "mapper must return a Result", payload=candidate,
        )
    return candidate
