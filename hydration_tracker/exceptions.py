"""
Standardized exception hierarchy for hydration-tracker
Provides rich context, consistent logging, and user-friendly error messages
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class HydrationTrackerError(Exception):
    """
    Base exception for all hydration-tracker errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise HydrationTrackerError(
            message="Failed to save intake history",
            operation="record_intake",
            context={"amount_ml": 250}
        )
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for display layers"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (User Input)
# ==========================================

class ValidationError(HydrationTrackerError):
    """
    Raised when user input fails validation

    Examples:
    - Non-numeric or non-positive weight
    - Zero or negative intake amount
    - Reminder frequency outside the offered range

    Example:
        raise ValidationError(
            message="Please enter a valid weight value",
            field="weight",
            value="abc"
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context={"field": field, "value": value},
            **kwargs
        )


# ==========================================
# Storage Errors
# ==========================================

class StorageError(HydrationTrackerError):
    """
    Base class for key-value persistence errors
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        **kwargs
    ):
        self.key = key
        kwargs.setdefault("user_message", "We couldn't save your data. It will be retried on your next change.")
        kwargs.setdefault("context", {"key": key})
        super().__init__(message=message, **kwargs)


class StorageUnavailableError(StorageError):
    """Persistence backend could not be reached"""

    def __init__(self, message: str = "Storage backend unavailable", **kwargs):
        super().__init__(
            message=message,
            user_message="Storage is unavailable right now. Your changes are kept until it comes back.",
            **kwargs
        )


class CorruptPayloadError(StorageError):
    """Persisted snapshot could not be deserialized"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            user_message="Saved data could not be read and was reset.",
            **kwargs
        )


# ==========================================
# Notification Errors
# ==========================================

class NotificationError(HydrationTrackerError):
    """
    Base class for notification capability failures
    """
    pass


class NotificationTransportError(NotificationError):
    """Notification transport rejected a schedule or send request"""

    def __init__(
        self,
        message: str,
        transport: Optional[str] = None,
        **kwargs
    ):
        self.transport = transport
        super().__init__(
            message=message,
            user_message=f"We couldn't reach {transport or 'the notification service'}. Reminders may be delayed.",
            context={"transport": transport},
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(HydrationTrackerError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The app is not properly configured.",
            context={"config_key": config_key},
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_external_exception(
    error: Exception,
    operation: str,
    key: Optional[str] = None,
    user_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> HydrationTrackerError:
    """
    Wrap external exceptions (redis, OSError, telegram) into our exception hierarchy

    Args:
        error: Original exception
        operation: What operation was being performed
        key: Storage key involved, if any
        user_id: User ID if applicable
        context: Additional context

    Returns:
        Appropriate HydrationTrackerError subclass

    Example:
        try:
            await client.set(key, value)
        except redis.RedisError as e:
            raise wrap_external_exception(e, operation="store_set", key=key)
    """
    import redis
    import telegram.error

    if isinstance(error, (redis.ConnectionError, redis.TimeoutError)):
        return StorageUnavailableError(
            message=f"Redis unavailable during {operation}: {error}",
            key=key,
            user_id=user_id,
            operation=operation,
            cause=error
        )
    elif isinstance(error, redis.RedisError):
        return StorageError(
            message=f"Redis command failed during {operation}: {error}",
            key=key,
            user_id=user_id,
            operation=operation,
            cause=error
        )
    elif isinstance(error, OSError):
        return StorageUnavailableError(
            message=f"File storage failed during {operation}: {error}",
            key=key,
            user_id=user_id,
            operation=operation,
            cause=error
        )
    elif isinstance(error, telegram.error.TelegramError):
        return NotificationTransportError(
            message=f"Telegram request failed during {operation}: {error}",
            transport="Telegram",
            user_id=user_id,
            operation=operation,
            cause=error
        )

    # Generic fallback
    else:
        return HydrationTrackerError(
            message=f"{operation} failed: {str(error)}",
            user_id=user_id,
            operation=operation,
            context=context,
            cause=error
        )
