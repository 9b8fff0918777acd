"""
Error handling module for UV Channel Transfer.
Provides the error types and a small history-keeping handler.
"""

from typing import Optional, Callable
import traceback


class UVTransferError(Exception):
    """Base exception for UV Channel Transfer."""

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 0
        self.details = details or {}
        self.stack_trace = traceback.format_exc()

    def to_dict(self) -> dict:
        """Convert error to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "stack_trace": self.stack_trace,
        }

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class MeshStoreError(UVTransferError):
    """Mesh asset persistence errors."""

    ERROR_CODES = {
        1001: "Mesh file not found",
        1002: "Mesh file read error",
        1003: "Mesh file write error",
        1004: "Invalid mesh file format",
    }

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        file_path: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, error_code, kwargs)
        self.file_path = file_path
        if file_path:
            self.details["file_path"] = file_path


class ValidationError(UVTransferError):
    """UV and raster input validation errors."""

    ERROR_CODES = {
        2001: "UV data incomplete",
        2002: "UV coordinate out of range",
        2005: "UV channel missing",
        2006: "UV data corrupted",
        2011: "Invalid preview resolution",
    }


class TransferError(UVTransferError):
    """Base class for errors reported by a UV channel transfer."""

    ERROR_CODES = {
        3101: "Vertex count mismatch",
        3102: "UV channel missing on source",
        3103: "Unsupported UV channel",
        3104: "Object has no mesh",
    }

    fatal = True

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.error_code == other.error_code and self.details == other.details

    def __hash__(self):
        return hash((type(self).__name__, self.error_code, tuple(sorted(self.details.items()))))


class VertexCountMismatch(TransferError):
    """Source and target meshes do not share a vertex count."""

    def __init__(self, source_count: int, target_count: int):
        super().__init__(
            f"Meshes must have the same vertex count! "
            f"Source: {source_count} vs Target: {target_count}",
            error_code=3101,
            details={"source_count": source_count, "target_count": target_count},
        )
        self.source_count = source_count
        self.target_count = target_count


class ChannelMissing(TransferError):
    """Source mesh has no data on the requested UV channel."""

    fatal = False

    def __init__(self, channel: int):
        super().__init__(
            f"Source mesh doesn't have UV channel {channel}.",
            error_code=3102,
            details={"channel": channel},
        )
        self.channel = channel


class UnsupportedChannel(TransferError):
    """UV channel selector outside 0-3."""

    def __init__(self, channel):
        super().__init__(
            f"Unsupported UV channel: {channel}",
            error_code=3103,
            details={"channel": channel},
        )
        self.channel = channel


class NoMeshError(TransferError):
    """A scene object has no resolvable mesh."""

    def __init__(self, role: str, object_name: Optional[str] = None):
        if object_name is None:
            message = f"Please select a {role} object!"
        else:
            message = f"{role.capitalize()} object '{object_name}' doesn't have a mesh!"
        super().__init__(
            message,
            error_code=3104,
            details={"role": role, "object_name": object_name},
        )
        self.role = role
        self.object_name = object_name


class ConfigError(UVTransferError):
    """Configuration related errors."""

    ERROR_CODES = {
        4001: "Config file not found",
        4002: "Config parse error",
        4003: "Invalid config value",
        4004: "Missing required config",
    }


class ErrorHandler:
    """Centralized error handling manager."""

    def __init__(self, logger=None):
        self.logger = logger
        self.error_history: list = []
        self.max_history = 100

    def handle(
        self,
        error: Exception,
        operation: str = "unknown",
        reraise: bool = True,
        recovery: Optional[Callable[[], None]] = None
    ) -> bool:
        """
        Handle an error with logging and optional recovery.

        Args:
            error: The exception to handle
            operation: Operation name for context
            reraise: Whether to reraise the error
            recovery: Optional recovery function

        Returns:
            True if error was recovered, False otherwise
        """
        error_info = {
            "operation": operation,
            "error": str(error),
            "type": type(error).__name__,
        }

        if isinstance(error, UVTransferError):
            error_info.update(error.to_dict())

        self.error_history.append(error_info)
        if len(self.error_history) > self.max_history:
            self.error_history.pop(0)

        if self.logger:
            self.logger.error(
                f"Error in {operation}: {error}",
                extra={"operation": operation}
            )

        if recovery:
            try:
                recovery()
                return True
            except Exception as e:
                if self.logger:
                    self.logger.error(f"Recovery failed: {e}")

        if reraise:
            raise error

        return False

    def get_last_error(self) -> Optional[dict]:
        """Get the last error from history."""
        return self.error_history[-1] if self.error_history else None

    def clear_history(self):
        """Clear error history."""
        self.error_history.clear()
