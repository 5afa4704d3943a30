"""Glossary staging exceptions

Local filesystem failures surface as OSError subclasses so callers can catch
them as IOError. Backend rejections surface as StorageError with the original
SDK exception attached.
"""

from typing import Optional


class GlossaryError(Exception):
    """Base exception for glossary staging errors."""
    pass


class GlossaryPathError(GlossaryError, OSError):
    """Raised when a registered path is neither a readable file nor a readable directory."""

    def __init__(self, path: str, reason: str = "not a readable file or directory"):
        self.path = path
        self.reason = reason
        super().__init__(f"Glossary path {path!r} is {reason}")


class StorageError(GlossaryError):
    """Raised when the storage backend rejects a request."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        container: Optional[str] = None,
        original: Optional[BaseException] = None,
    ):
        self.operation = operation
        self.container = container
        self.original = original
        super().__init__(message)


class ContainerNotFoundError(StorageError):
    """Raised when tearing down a container that does not exist."""

    def __init__(self, container: str, original: Optional[BaseException] = None):
        super().__init__(
            f"Glossary container {container!r} does not exist",
            operation="delete_container",
            container=container,
            original=original,
        )


class ContainerDestroyedError(GlossaryError):
    """Raised when a container handle is used after teardown."""

    def __init__(self, container: str):
        self.container = container
        super().__init__(
            f"Glossary container {container!r} was already torn down and cannot be reused"
        )
