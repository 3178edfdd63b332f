"""Exceptions raised by MemberTree.

Traversal-time problems never surface as exceptions (see
``error_policies``); only refusing to start a build does.
"""


class MemberTreeError(Exception):
    """Base class for errors raised by MemberTree itself."""
    pass


class InvalidRootError(MemberTreeError, ValueError):
    """Raised when a tree is requested for a root that cannot be introspected."""
    pass


class InvalidConfigError(MemberTreeError, ValueError):
    """Raised when a BuildConfig fails validation."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__(f"Invalid configuration: {'; '.join(self.errors)}")
