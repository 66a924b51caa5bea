# ============================================================================
# SHIM BASE CLASS
# ============================================================================
# STATUS: Core - Shared shim contract
# PURPOSE: Parameter merging, parameter access, success/fail protocol
# CREATED: 19 OCT 2026
# ============================================================================
"""
Shim Base Class

Every shim extends Shim. A shim is built with a parameter mapping and
optional callbacks, runs once, and reports its outcome by calling
success() or fail() exactly once.

Usage:
    class Greet(Shim):
        name = "greet"
        defaults = {"greeting": "Hello"}

        def run(self, who="World"):
            return self.success({"message": f"{self.get_param('greeting')}, {who}!"})

    shim = Greet({"who": "Ada"}, on_success=lambda data: data["message"])
    shim.execute()          # -> "Hello, Ada!"
    shim.has_errors()       # -> False
"""

import copy
import inspect
import logging
from collections.abc import Mapping
from typing import Any, Callable, ClassVar, Dict, List, Optional

from core.contracts import ShimFailure, ShimResult, ShimStatus, ShimSuccess
from core.logging import log_context

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[Any], Any]
FailCallback = Callable[[List[str], Any], Any]


def merge_params(defaults: Mapping, overrides: Mapping) -> Dict[str, Any]:
    """
    Recursively merge overrides over defaults.

    Override values win on key collision; when both sides hold a mapping
    the merge recurses instead of replacing the subtree. Neither input is
    modified.
    """
    merged = copy.deepcopy(dict(defaults))
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_params(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class Shim:
    """
    Base class for shims.

    Subclasses set `name` (the bare registry name), optionally `defaults`,
    and implement run(). run() may declare keyword parameters; execute()
    fills them from the merged parameters by name.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    defaults: ClassVar[Dict[str, Any]] = {}

    def __init__(
        self,
        params: Optional[Mapping] = None,
        on_success: Optional[SuccessCallback] = None,
        on_fail: Optional[FailCallback] = None,
        *,
        content: Optional[str] = None,
    ):
        if isinstance(params, Mapping):
            self._params = merge_params(self.defaults, params)
        else:
            if params is not None:
                logger.debug(
                    f"Ignoring non-mapping params for {type(self).__name__}: "
                    f"{type(params).__name__}"
                )
            self._params = copy.deepcopy(dict(self.defaults))

        self.content = content
        self._on_success: Optional[SuccessCallback] = None
        self._on_fail: Optional[FailCallback] = None
        self._result: Optional[ShimResult] = None

        self.set_on_success(on_success)
        self.set_on_fail(on_fail)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} status={self.status.value}>"

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def set_on_success(self, on_success: Optional[SuccessCallback] = None) -> "Shim":
        """Set the callback invoked by success(). Non-callables are ignored."""
        if callable(on_success):
            self._on_success = on_success
        return self

    def set_on_fail(self, on_fail: Optional[FailCallback] = None) -> "Shim":
        """Set the callback invoked by fail(). Non-callables are ignored."""
        if callable(on_fail):
            self._on_fail = on_fail
        return self

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @property
    def params(self) -> Dict[str, Any]:
        """Copy of the merged parameters."""
        return copy.deepcopy(self._params)

    def get_param(self, path: str = "", default: Any = None) -> Any:
        """
        Get a value from the merged parameters.

        Args:
            path: Keys separated by colons for nested values,
                e.g. "outer:inner". Integer segments index into lists.
            default: Returned as soon as any segment is missing or None

        Returns:
            The value at path, or default
        """
        item: Any = self._params
        for part in path.split(":"):
            if isinstance(item, Mapping):
                item = item.get(part)
            elif isinstance(item, (list, tuple)) and part.lstrip("-").isdigit():
                index = int(part)
                item = item[index] if -len(item) <= index < len(item) else None
            else:
                return default
            if item is None:
                return default
        return item

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self) -> Any:
        """Perform the shim's operation. The base implementation does nothing."""
        return None

    def execute(self) -> Any:
        """
        Run the shim.

        Named parameters of run() are bound from the merged parameters.
        A missing required parameter, or an exception raised by run(), is
        reported through fail().

        Returns:
            Whatever run() returns (usually a callback's return value)
        """
        with log_context(shim=self.name or type(self).__name__, operation="execute"):
            kwargs, missing = self._bind_run_arguments()
            if missing:
                return self.fail(
                    [f"Missing required parameter: {param}" for param in missing]
                )

            try:
                return self.run(**kwargs)
            except Exception as e:
                logger.exception(f"Shim {self.name or type(self).__name__} raised: {e}")
                return self.fail(str(e))

    def _bind_run_arguments(self):
        kwargs: Dict[str, Any] = {}
        missing: List[str] = []

        for param in inspect.signature(self.run).parameters.values():
            if param.kind == param.VAR_KEYWORD:
                for key, value in self._params.items():
                    kwargs.setdefault(key, copy.deepcopy(value))
            elif param.kind == param.VAR_POSITIONAL:
                continue
            elif param.name in self._params:
                kwargs[param.name] = copy.deepcopy(self._params[param.name])
            elif param.default is param.empty:
                missing.append(param.name)

        return kwargs, missing

    # ------------------------------------------------------------------
    # Result protocol
    # ------------------------------------------------------------------

    def success(self, data: Any = None) -> Any:
        """
        Record a successful outcome.

        Clears any earlier failure and invokes the success callback with
        the data as its only argument.

        Returns:
            The callback's return value, or None without a callback
        """
        self._result = ShimSuccess(data={} if data is None else data)
        logger.debug(f"{type(self).__name__} succeeded")

        if self._on_success is not None:
            return self._on_success(self._result.data)
        return None

    def fail(self, errors: Any = None, data: Any = None) -> Any:
        """
        Record a failed outcome.

        Args:
            errors: A list of messages, or a single message string
            data: Optional payload for the fail callback

        Returns:
            The fail callback's return value, or None without a callback
        """
        self._result = ShimFailure(errors=errors, data={} if data is None else data)
        logger.warning(f"{type(self).__name__} failed: {self._result.errors}")

        if self._on_fail is not None:
            return self._on_fail(list(self._result.errors), self._result.data)
        return None

    @property
    def result(self) -> Optional[ShimResult]:
        """The recorded outcome, or None before success()/fail()."""
        return self._result

    @property
    def status(self) -> ShimStatus:
        if isinstance(self._result, ShimSuccess):
            return ShimStatus.SUCCEEDED
        if isinstance(self._result, ShimFailure):
            return ShimStatus.FAILED
        return ShimStatus.PENDING

    def has_errors(self) -> bool:
        """True if the last result call was fail() with at least one error."""
        return bool(self.get_errors())

    def get_success_data(self) -> Any:
        """Data passed to success(), or {} if success() was not the last call."""
        if isinstance(self._result, ShimSuccess):
            return self._result.data
        return {}

    def get_errors(self) -> List[str]:
        """Errors passed to fail(), always as a list."""
        if isinstance(self._result, ShimFailure):
            return list(self._result.errors)
        return []

    def get_error_data(self) -> Any:
        """Data passed to fail(), or {} if fail() was not the last call."""
        if isinstance(self._result, ShimFailure):
            return self._result.data
        return {}


__all__ = [
    "Shim",
    "SuccessCallback",
    "FailCallback",
    "merge_params",
]
