"""
Error handling policies for MemberTree.

Reading a live object graph means running arbitrary user code: property
getters, ``__getattr__`` hooks, type-hint evaluation. Any of it can raise.
The builder contains those failures and hands them to a policy, which
decides whether to record, log, or re-raise them.
"""

from abc import ABC, abstractmethod
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    ``handle`` is called from inside an ``except`` block. Returning
    normally lets the builder apply its fallback for the failed operation
    (sentinel value, no members, no annotations); raising aborts the build.
    """

    @abstractmethod
    def handle(self, error: Exception, operation: str, descriptor: Any = None,
               owner: Any = None) -> None:
        """
        Handle an error that occurred while building a tree.

        Args:
            error: The exception that was raised
            operation: What was being done ('read', 'members', 'annotations')
            descriptor: The MemberInfo (or type) being processed, if any
            owner: The instance that holds the member, if any
        """
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error, stopping the build.

    Not the default: a single broken getter would otherwise hide the rest
    of the graph. Useful when developing a custom introspector.
    """

    def handle(self, error: Exception, operation: str, descriptor: Any = None,
               owner: Any = None) -> None:
        """Re-raise the error immediately."""
        raise error


class _RecordingPolicy(ErrorPolicy):
    """Shared bookkeeping for policies that keep going.

    Records keep the error type and message, not the exception itself.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []
        self.unreadable_members: List[str] = []

    def _record(self, error: Exception, operation: str, descriptor: Any,
                owner: Any) -> Dict[str, Any]:
        member = _describe(descriptor)
        record = {
            'member': member,
            'operation': operation,
            'owner_type': type(owner).__name__ if owner is not None else None,
            'error_type': type(error).__name__,
            'error_message': str(error),
        }
        self.errors.append(record)

        if operation == 'read' and member:
            self.unreadable_members.append(member)

        return record

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        by_operation: Dict[str, int] = {}
        for record in self.errors:
            by_operation[record['operation']] = by_operation.get(record['operation'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_operation': by_operation,
            'unreadable_members': len(self.unreadable_members),
            'errors': self.errors,  # Full error details
        }

    def clear(self) -> None:
        """Forget everything recorded so far."""
        self.errors.clear()
        self.unreadable_members.clear()


class ContinueOnErrorsPolicy(_RecordingPolicy):
    """
    Policy that records errors and continues the build.

    This is the default. Errors are always logged at DEBUG level; with
    ``verbose`` they are logged as warnings.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for every error
        """
        super().__init__()
        self.verbose = verbose

    def handle(self, error: Exception, operation: str, descriptor: Any = None,
               owner: Any = None) -> None:
        record = self._record(error, operation, descriptor, owner)
        level = logging.WARNING if self.verbose else logging.DEBUG
        logger.log(level, "Error in %s for '%s' on %s: %s",
                   operation, record['member'], record['owner_type'], error)


class CollectErrorsPolicy(_RecordingPolicy):
    """
    Policy that collects all errors without logging, for batch reporting.
    """

    def handle(self, error: Exception, operation: str, descriptor: Any = None,
               owner: Any = None) -> None:
        """Silently collect the error."""
        self._record(error, operation, descriptor, owner)


def _describe(descriptor: Any) -> Optional[str]:
    if descriptor is None:
        return None
    if isinstance(descriptor, type):
        return descriptor.__qualname__
    name = getattr(descriptor, 'name', None)
    declaring = getattr(descriptor, 'declaring_type', None)
    if name and declaring is not None:
        return f"{declaring.__qualname__}.{name}"
    return name or repr(descriptor)
