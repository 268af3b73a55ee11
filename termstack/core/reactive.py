"""Push-style data sources that feed views.

A source implements ``Observable.subscribe(observer)``; the observer gets
three callbacks: ``on_next`` for each value, then at most one of
``on_error`` or ``on_completed``.  ``Subject`` is the in-process source used
by the CLI and tests; any object with the same shape works.

Views never hold a concurrency primitive of their own.  When a source can
emit from another thread while a render is in progress, give the
``Subject`` the render loop's lock so that an emission and a render pass
never interleave.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from termstack.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class SubjectCompletedError(RuntimeError):
    """Raised when emitting into a subject that has already terminated."""


class SignalPolicy(str, Enum):
    """What an observing view does with a source's error signal."""

    IGNORE = "ignore"
    LOG = "log"
    RAISE = "raise"


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class Observer(Protocol[T_contra]):
    """Receiver of a push-style stream."""

    def on_next(self, value: T_contra) -> None: ...

    def on_error(self, error: BaseException) -> None: ...

    def on_completed(self) -> None: ...


@runtime_checkable
class Observable(Protocol[T]):
    """A push-style stream that observers can attach to."""

    def subscribe(self, observer: Observer[T]) -> Subscription: ...


class Subscription:
    """Handle returned by ``subscribe``; ``dispose()`` detaches the observer."""

    def __init__(self, dispose: Callable[[], None] | None = None) -> None:
        self._dispose = dispose
        self.disposed = False

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        if self._dispose is not None:
            self._dispose()


# ---------------------------------------------------------------------------
# Observers
# ---------------------------------------------------------------------------


class CallbackObserver(Generic[T]):
    """Observer built from a value callback plus optional signal handlers.

    Parameters
    ----------
    on_next:
        Called with every emitted value.
    on_error:
        Optional callback for the source's error signal.  Runs before the
        policy is applied.
    on_completed:
        Optional callback for the source's completion signal.
    policy:
        How an error signal is surfaced.  Defaults to
        ``settings.signal_errors``.
    name:
        Label used in log messages.
    """

    def __init__(
        self,
        on_next: Callable[[T], None],
        *,
        on_error: Callable[[BaseException], None] | None = None,
        on_completed: Callable[[], None] | None = None,
        policy: SignalPolicy | None = None,
        name: str = "observer",
    ) -> None:
        if on_next is None:
            raise ValueError("on_next must not be None")
        self._on_next = on_next
        self._on_error = on_error
        self._on_completed = on_completed
        self.policy = SignalPolicy(policy or settings.signal_errors)
        self.name = name
        self.completed = False
        self.error: BaseException | None = None

    def on_next(self, value: T) -> None:
        self._on_next(value)

    def on_error(self, error: BaseException) -> None:
        self.error = error
        if self._on_error is not None:
            self._on_error(error)
        if self.policy is SignalPolicy.LOG:
            logger.warning("Data source for %s signalled an error: %s", self.name, error)
        elif self.policy is SignalPolicy.RAISE:
            raise error

    def on_completed(self) -> None:
        self.completed = True
        logger.debug("Data source for %s completed", self.name)
        if self._on_completed is not None:
            self._on_completed()


# ---------------------------------------------------------------------------
# Subject
# ---------------------------------------------------------------------------


class Subject(Generic[T]):
    """A hot, multicast source: values pushed in are fanned out to observers.

    Observers are called synchronously, in subscription order, on the
    emitting thread.  If *lock* is given, every emission holds it for the
    duration of the fan-out.
    """

    def __init__(self, lock: Any | None = None) -> None:
        self._observers: list[Observer[T]] = []
        self._lock = lock
        self._error: BaseException | None = None
        self._done = False
        self._guard = threading.Lock()

    @property
    def is_stopped(self) -> bool:
        return self._done

    def subscribe(self, observer: Observer[T]) -> Subscription:
        if observer is None:
            raise ValueError("observer must not be None")

        with self._guard:
            if not self._done:
                self._observers.append(observer)
                return Subscription(lambda: self._unsubscribe(observer))

        # Late subscribers see the terminal signal straight away.
        if self._error is not None:
            observer.on_error(self._error)
        else:
            observer.on_completed()
        return Subscription()

    def _unsubscribe(self, observer: Observer[T]) -> None:
        with self._guard:
            if observer in self._observers:
                self._observers.remove(observer)

    def _snapshot(self) -> list[Observer[T]]:
        with self._guard:
            if self._done:
                raise SubjectCompletedError("Subject has already terminated")
            return list(self._observers)

    def _emit(self, deliver: Callable[[Observer[T]], None], observers: list[Observer[T]]) -> None:
        if self._lock is None:
            for observer in observers:
                deliver(observer)
            return
        with self._lock:
            for observer in observers:
                deliver(observer)

    def on_next(self, value: T) -> None:
        self._emit(lambda o: o.on_next(value), self._snapshot())

    def on_error(self, error: BaseException) -> None:
        observers = self._snapshot()
        with self._guard:
            self._done = True
            self._error = error
            self._observers.clear()
        self._emit(lambda o: o.on_error(error), observers)

    def on_completed(self) -> None:
        observers = self._snapshot()
        with self._guard:
            self._done = True
            self._observers.clear()
        self._emit(lambda o: o.on_completed(), observers)
