"""Tree of nested assertion contexts.

Every wrapper (Value, Object, Array, ...) holds a chain node. Each wrapper
method enters a child node, checks something, records a failure with fail()
if the check does not hold, and leaves the node:

    with self._chain.enter("is_equal()") as op:
        if op.failed():
            return self
        ...
        op.fail(AssertionFailure(...))

Nested calls form a path such as ``Value().object().value('foo')``. When an
entered node leaves with a failure anywhere in its subtree, every ancestor is
marked as having failed children, up to the first node marked as root. The
recorded failures travel with the leaving nodes until they reach a reporting
point, where they are handed to the assertion handler exactly once.

Navigation methods return a new wrapper built on ``op.clone()``; the clone keeps
the path and the failure state of ``op`` but fails independently of it.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable

from apiexpect.assertion import (
    AssertionContext,
    AssertionFailure,
    AssertionSeverity,
    validate_failure,
)
from apiexpect.config import Config
from apiexpect.errors import UsageError


class Chain:
    def __init__(self, name: str = "", config=None) -> None:
        config = (config or Config()).with_defaults()

        self._parent: Chain | None = None
        self._entered = False
        self._closed = False
        self._is_root = False
        self._failed = False
        self._failed_children = False
        self._open_children: list[Chain] = []
        self._pending: list[tuple[AssertionContext, AssertionFailure]] = []
        self._fail_callback: Callable[[], None] | None = None
        self._callback_here = False

        self._path: list[str] = [name] if name else []
        self._aliased_path: list[str] = list(self._path)
        self._aliased_here = False

        self._handler = config.assertion_handler
        self._severity: AssertionSeverity = config.severity
        self._test_name = config.test_name
        self._request_name = ""
        self._request: Any = None
        self._response: Any = None
        self._environment = config.environment

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self._path)

    @property
    def aliased_path(self) -> tuple[str, ...]:
        return tuple(self._aliased_path)

    @property
    def severity(self) -> AssertionSeverity:
        return self._severity

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def env(self):
        return self._environment

    @property
    def request(self) -> Any:
        return self._request

    @property
    def response(self) -> Any:
        return self._response

    def context(self) -> AssertionContext:
        return AssertionContext(
            test_name=self._test_name,
            request_name=self._request_name,
            path=tuple(self._path),
            aliased_path=tuple(self._aliased_path),
            request=self._request,
            response=self._response,
            environment=self._environment,
        )

    def clone(self) -> Chain:
        """Return an open node that shares this node's state but fails on its own."""
        self._ensure_open("clone")
        return self._derive()

    def enter(self, name: str, *args: Any) -> Chain:
        """Create a child node for one assertion; it must be left with leave()."""
        self._ensure_open("enter")
        segment = name % args if args else name
        if not segment and not self._path:
            raise UsageError("enter() with empty name requires non-empty path")

        child = self._derive()
        child._entered = True
        if segment:
            child._path.append(segment)
            child._aliased_path.append(segment)
        self._open_children.append(child)
        return child

    def replace(self, name: str, *args: Any) -> Chain:
        """Rename the last path segment in place."""
        self._ensure_open("replace")
        if not self._path:
            raise UsageError("replace() requires non-empty path")

        segment = name % args if args else name
        self._path[-1] = segment
        if self._aliased_path and not self._aliased_here:
            self._aliased_path[-1] = segment
        return self

    def leave(self) -> None:
        if self._closed:
            raise UsageError("leave() called on a chain that was already left")
        if not self._entered:
            raise UsageError("leave() allowed only for chains created by enter()")
        if self._open_children:
            raise UsageError("leave() called before nested chains were left")

        parent = self._parent
        if parent is not None:
            if not parent._open_children or parent._open_children[-1] is not self:
                raise UsageError("unpaired enter() and leave()")
            parent._open_children.pop()

        self._closed = True
        pending, self._pending = self._pending, []

        if not self.tree_failed():
            if self._is_reporting_point():
                self._handler.success(self.context())
            return

        if not self._is_root:
            node = parent
            while node is not None:
                node._failed_children = True
                if node._is_root:
                    break
                node = node._parent

        if self._is_reporting_point():
            for context, failure in pending:
                self._handler.failure(context, failure)
        else:
            parent._pending.extend(pending)

    def fail(self, failure: AssertionFailure) -> None:
        """Record a failed check on this node.

        Only the first failure of a node is recorded; later calls still invoke
        the fail callback.
        """
        self._ensure_open("fail")
        validate_failure(failure)

        if not self._failed:
            self._failed = True
            if failure.severity is None:
                failure = replace(failure, severity=self._severity)
            record = (self.context(), failure)
            if self._entered:
                self._pending.append(record)
            else:
                # Nothing will ever leave this node, so it reports by itself.
                self._handler.failure(*record)

        if self._fail_callback is not None:
            self._fail_callback()

    def failed(self) -> bool:
        return self._failed

    def tree_failed(self) -> bool:
        return self._failed or self._failed_children

    def set_root(self) -> None:
        """Stop failures of this subtree from propagating to the parent."""
        self._ensure_open("set_root")
        self._is_root = True

    def set_severity(self, severity: AssertionSeverity) -> None:
        self._ensure_open("set_severity")
        self._severity = severity

    def set_fail_callback(self, callback: Callable[[], None]) -> None:
        self._ensure_open("set_fail_callback")
        if self._callback_here:
            raise UsageError("fail callback already set")
        self._fail_callback = callback
        self._callback_here = True

    def set_alias(self, name: str) -> None:
        # An empty alias hides the path instead of restoring it.
        self._ensure_open("set_alias")
        self._aliased_path = [name] if name else []
        self._aliased_here = True

    def set_request_name(self, name: str) -> None:
        self._ensure_open("set_request_name")
        self._request_name = name

    def set_request(self, request: Any) -> None:
        self._ensure_open("set_request")
        if self._request is not None:
            raise UsageError("request already set")
        self._request = request

    def set_response(self, response: Any) -> None:
        self._ensure_open("set_response")
        if self._response is not None:
            raise UsageError("response already set")
        self._response = response

    def set_environment(self, environment: Any) -> None:
        self._ensure_open("set_environment")
        if self._environment is not None:
            raise UsageError("environment already set")
        self._environment = environment

    def _derive(self) -> Chain:
        child = Chain.__new__(Chain)
        child._parent = self
        child._entered = False
        child._closed = False
        child._is_root = False
        child._failed = self._failed
        child._failed_children = False
        child._open_children = []
        child._pending = []
        child._fail_callback = self._fail_callback
        child._callback_here = False
        child._path = list(self._path)
        child._aliased_path = list(self._aliased_path)
        child._aliased_here = False
        child._handler = self._handler
        child._severity = self._severity
        child._test_name = self._test_name
        child._request_name = self._request_name
        child._request = self._request
        child._response = self._response
        child._environment = self._environment
        return child

    def _is_reporting_point(self) -> bool:
        parent = self._parent
        return self._is_root or parent is None or not parent._entered or parent._closed

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise UsageError(f"{operation}() called on a chain that was already left")

    def __enter__(self) -> Chain:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._closed:
            return
        if exc_type is not None and self._open_children:
            # Nested chains were abandoned by the exception; let it propagate.
            return
        self.leave()
