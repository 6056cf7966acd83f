"""
Failure kinds — the taxonomy every captured failure is classified into.

A FailureKind is a (name, parent) node. Recoverable-set membership for a
kind is an ancestry walk over those nodes, so guest-defined kinds and
native Python exceptions are treated uniformly. A native exception type
listed in a recoverable set matches only instances of that type:

    Exception
    ├── StandardError
    │   ├── RuntimeError ── FrozenError
    │   ├── TypeError
    │   ├── ArgumentError
    │   ├── IndexError ──── KeyError, StopIteration
    │   ├── RangeError ──── FloatDomainError
    │   ├── NameError ───── NoMethodError
    │   └── ZeroDivisionError, LocalJumpError, RegexpError, IOError, FiberError
    ├── ScriptError ─────── SyntaxError, NotImplementedError
    ├── SystemStackError
    └── NoMemoryError

Native exceptions are mapped onto kinds by a KindRegistry: the first bound
type found in the exception's MRO decides its kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Union


@dataclass(frozen=True, slots=True)
class FailureKind:
    """
    A node in the failure taxonomy.

    Kinds compare by identity of (name, parent chain), so two registries
    that define the same name under the same parent agree on equality.

    >>> EXCEPTION.is_a(EXCEPTION)
    True
    >>> RANGE_ERROR.is_a(STANDARD_ERROR)
    True
    >>> STANDARD_ERROR.is_a(RANGE_ERROR)
    False
    """

    name: str
    parent: Optional[FailureKind] = field(default=None, repr=False)

    def ancestors(self) -> Iterator[FailureKind]:
        """Yield this kind, then each parent up to the root."""
        kind: Optional[FailureKind] = self
        while kind is not None:
            yield kind
            kind = kind.parent

    def is_a(self, other: FailureKind) -> bool:
        """True when `other` is this kind or one of its ancestors."""
        return any(kind == other for kind in self.ancestors())

    @property
    def depth(self) -> int:
        """Distance from the root kind (the root has depth 0)."""
        return sum(1 for _ in self.ancestors()) - 1

    def __str__(self) -> str:
        return self.name


# ──────────────────────── Built-in taxonomy ────────────────────────

EXCEPTION = FailureKind("Exception")
STANDARD_ERROR = FailureKind("StandardError", EXCEPTION)
RUNTIME_ERROR = FailureKind("RuntimeError", STANDARD_ERROR)
FROZEN_ERROR = FailureKind("FrozenError", RUNTIME_ERROR)
TYPE_ERROR = FailureKind("TypeError", STANDARD_ERROR)
ARGUMENT_ERROR = FailureKind("ArgumentError", STANDARD_ERROR)
INDEX_ERROR = FailureKind("IndexError", STANDARD_ERROR)
KEY_ERROR = FailureKind("KeyError", INDEX_ERROR)
STOP_ITERATION = FailureKind("StopIteration", INDEX_ERROR)
RANGE_ERROR = FailureKind("RangeError", STANDARD_ERROR)
FLOAT_DOMAIN_ERROR = FailureKind("FloatDomainError", RANGE_ERROR)
NAME_ERROR = FailureKind("NameError", STANDARD_ERROR)
NO_METHOD_ERROR = FailureKind("NoMethodError", NAME_ERROR)
ZERO_DIVISION_ERROR = FailureKind("ZeroDivisionError", STANDARD_ERROR)
LOCAL_JUMP_ERROR = FailureKind("LocalJumpError", STANDARD_ERROR)
REGEXP_ERROR = FailureKind("RegexpError", STANDARD_ERROR)
IO_ERROR = FailureKind("IOError", STANDARD_ERROR)
FIBER_ERROR = FailureKind("FiberError", STANDARD_ERROR)
SCRIPT_ERROR = FailureKind("ScriptError", EXCEPTION)
SYNTAX_ERROR = FailureKind("SyntaxError", SCRIPT_ERROR)
NOT_IMPLEMENTED_ERROR = FailureKind("NotImplementedError", SCRIPT_ERROR)
SYSTEM_STACK_ERROR = FailureKind("SystemStackError", EXCEPTION)
NO_MEMORY_ERROR = FailureKind("NoMemoryError", EXCEPTION)

BUILTIN_KINDS: tuple[FailureKind, ...] = (
    EXCEPTION,
    STANDARD_ERROR,
    RUNTIME_ERROR,
    FROZEN_ERROR,
    TYPE_ERROR,
    ARGUMENT_ERROR,
    INDEX_ERROR,
    KEY_ERROR,
    STOP_ITERATION,
    RANGE_ERROR,
    FLOAT_DOMAIN_ERROR,
    NAME_ERROR,
    NO_METHOD_ERROR,
    ZERO_DIVISION_ERROR,
    LOCAL_JUMP_ERROR,
    REGEXP_ERROR,
    IO_ERROR,
    FIBER_ERROR,
    SCRIPT_ERROR,
    SYNTAX_ERROR,
    NOT_IMPLEMENTED_ERROR,
    SYSTEM_STACK_ERROR,
    NO_MEMORY_ERROR,
)

# Native exception type → kind. Order is irrelevant: classify() walks the MRO.
BUILTIN_BINDINGS: tuple[tuple[type[BaseException], FailureKind], ...] = (
    (BaseException, EXCEPTION),
    (Exception, STANDARD_ERROR),
    (RuntimeError, RUNTIME_ERROR),
    (TypeError, TYPE_ERROR),
    (ValueError, ARGUMENT_ERROR),
    (LookupError, INDEX_ERROR),
    (IndexError, INDEX_ERROR),
    (KeyError, KEY_ERROR),
    (StopIteration, STOP_ITERATION),
    (OverflowError, RANGE_ERROR),
    (FloatingPointError, FLOAT_DOMAIN_ERROR),
    (ZeroDivisionError, ZERO_DIVISION_ERROR),
    (NameError, NAME_ERROR),
    (AttributeError, NO_METHOD_ERROR),
    (OSError, IO_ERROR),
    (SyntaxError, SYNTAX_ERROR),
    (NotImplementedError, NOT_IMPLEMENTED_ERROR),
    (RecursionError, SYSTEM_STACK_ERROR),
    (MemoryError, NO_MEMORY_ERROR),
)

KindRef = Union[FailureKind, str, type[BaseException]]
Recoverable = Union[FailureKind, type[BaseException]]


# ──────────────────────── Registry ────────────────────────


class KindRegistry:
    """
    Named kinds plus the bindings that map native exception types onto them.

    Populate it at setup time (define/bind), then use it read-only on the
    call path (get/classify/resolve).

        registry = KindRegistry.with_builtins()
        custom = registry.define("CustomExp", parent=EXCEPTION)
        registry.classify(KeyError("x"))   # → KEY_ERROR
    """

    def __init__(self) -> None:
        self._kinds: dict[str, FailureKind] = {}
        self._bindings: dict[type[BaseException], FailureKind] = {}

    @classmethod
    def with_builtins(cls) -> KindRegistry:
        """Create a registry holding the built-in taxonomy and bindings."""
        registry = cls()
        for kind in BUILTIN_KINDS:
            registry.register(kind)
        for exc_type, kind in BUILTIN_BINDINGS:
            registry.bind(exc_type, kind)
        return registry

    def copy(self) -> KindRegistry:
        """Independent registry with the same kinds and bindings."""
        clone = KindRegistry()
        clone._kinds = dict(self._kinds)
        clone._bindings = dict(self._bindings)
        return clone

    # ──────────────────────── Population ────────────────────────

    def register(self, kind: FailureKind) -> FailureKind:
        """Add an existing FailureKind. Its parent must already be registered."""
        if kind.name in self._kinds:
            raise ValueError(f"Failure kind already defined: {kind.name}")
        if kind.parent is not None and self._kinds.get(kind.parent.name) != kind.parent:
            raise LookupError(
                f"Parent kind {kind.parent.name!r} of {kind.name!r} is not registered"
            )
        self._kinds[kind.name] = kind
        return kind

    def define(self, name: str, parent: FailureKind | str = STANDARD_ERROR) -> FailureKind:
        """
        Define and register a new kind under `parent`.

        Guest code extends the taxonomy this way, like subclassing an
        exception class:

            custom = registry.define("CustomExp", parent="Exception")
        """
        if not name:
            raise ValueError("Failure kind name must not be empty")
        parent_kind = self.get(parent) if isinstance(parent, str) else parent
        return self.register(FailureKind(name, parent_kind))

    def bind(self, exc_type: type[BaseException], kind: FailureKind | str) -> None:
        """Map a native exception type (and its subclasses) onto a kind."""
        if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
            raise TypeError(f"Expected an exception type, got {exc_type!r}")
        resolved = self.get(kind) if isinstance(kind, str) else kind
        if resolved.name not in self._kinds:
            raise LookupError(f"Unknown failure kind: {resolved.name}")
        self._bindings[exc_type] = resolved

    # ──────────────────────── Lookup ────────────────────────

    def get(self, name: str) -> FailureKind:
        try:
            return self._kinds[name]
        except KeyError:
            raise LookupError(f"Unknown failure kind: {name}") from None

    def kind_for_type(self, exc_type: type[BaseException]) -> FailureKind:
        """The kind bound to the nearest type in `exc_type`'s MRO."""
        for klass in exc_type.__mro__:
            kind = self._bindings.get(klass)
            if kind is not None:
                return kind
        raise LookupError(f"No failure kind bound for {exc_type.__name__}")

    def classify(self, exc: BaseException) -> FailureKind:
        """
        Classify a raised object.

        A GuestError carries its kind explicitly; anything else is mapped
        through the native-type bindings. Types with no binding at all
        classify as the root kind.
        """
        kind = getattr(exc, "kind", None)
        if isinstance(kind, FailureKind):
            return kind
        try:
            return self.kind_for_type(type(exc))
        except LookupError:
            return EXCEPTION

    def resolve(self, entries: KindRef | Iterable[KindRef]) -> tuple[Recoverable, ...]:
        """
        Normalize a recoverable set, preserving order.

        Kind names become FailureKinds. Native exception types are kept as
        types and match by isinstance() against the captured exception, so
        an unbound type never widens into the kind of its nearest base.
        Accepts a sequence or a single entry.
        """
        if isinstance(entries, (FailureKind, str, type)):
            entries = (entries,)
        resolved: list[Recoverable] = []
        for entry in entries:
            match entry:
                case FailureKind():
                    resolved.append(entry)
                case str():
                    resolved.append(self.get(entry))
                case type() if issubclass(entry, BaseException):
                    resolved.append(entry)
                case _:
                    raise TypeError(
                        f"Recoverable entries must be kinds, kind names or exception types, "
                        f"got {entry!r}"
                    )
        return tuple(resolved)

    # ──────────────────────── Dunder methods ────────────────────────

    def __contains__(self, item: object) -> bool:
        if isinstance(item, FailureKind):
            return self._kinds.get(item.name) == item
        return item in self._kinds

    def __iter__(self) -> Iterator[FailureKind]:
        return iter(self._kinds.values())

    def __len__(self) -> int:
        return len(self._kinds)


_DEFAULT_REGISTRY = KindRegistry.with_builtins()


def default_registry() -> KindRegistry:
    """The process-wide registry used by the module-level primitives."""
    return _DEFAULT_REGISTRY
