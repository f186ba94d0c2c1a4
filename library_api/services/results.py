"""
Service Results

Every service operation returns a ServiceResult instead of raising for
expected outcomes. The route layer turns it into the JSON envelope:

    {route, timestamp, success, data, message, status}

ServiceResult.ok(...) and ServiceResult.fail(...) are the only ways the
services build one, so the envelope shape cannot drift between modules.

BulkDeleteResult accumulates the per-id outcome of a delete-by-list.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fastapi import status


@dataclass(frozen=True)
class ServiceResult:
    """
    Tagged success/failure result of a service operation.

    Attributes:
        success: The tag; False for every 4xx/5xx outcome
        status: HTTP status the envelope is sent with
        message: Human readable summary
        data: Payload; an empty dict when there is nothing to return
        timestamp: When the result was produced (UTC)
    """

    success: bool
    status: int
    message: str
    data: Any = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def ok(
        cls,
        data: Any = None,
        message: str = "",
        status_code: int = status.HTTP_200_OK,
    ) -> "ServiceResult":
        return cls(
            success=True,
            status=status_code,
            message=message,
            data={} if data is None else data,
        )

    @classmethod
    def fail(
        cls,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ) -> "ServiceResult":
        return cls(success=False, status=status_code, message=message, data={})

    @classmethod
    def not_found(cls, message: str) -> "ServiceResult":
        return cls.fail(message, status.HTTP_404_NOT_FOUND)

    @classmethod
    def conflict(cls, message: str) -> "ServiceResult":
        return cls.fail(message, status.HTTP_409_CONFLICT)

    @classmethod
    def internal_error(cls, message: str) -> "ServiceResult":
        return cls.fail(message, status.HTTP_500_INTERNAL_SERVER_ERROR)

    def envelope(self, route: str) -> dict[str, Any]:
        """Envelope body for the given route (data left unencoded)."""
        return {
            "route": route,
            "timestamp": self.timestamp,
            "success": self.success,
            "data": self.data,
            "message": self.message,
            "status": self.status,
        }


@dataclass
class BulkDeleteResult:
    """
    Outcome of deleting a list of ids one by one.

    Every id ends up in exactly one bucket. Missing ids are not failures:
    the batch succeeds as long as nothing failed.
    """

    deleted: list[str] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.deleted) + len(self.not_found) + len(self.failed)

    @property
    def success(self) -> bool:
        return not self.failed

    @property
    def message(self) -> str:
        return (
            f"Deleted {len(self.deleted)}, Not found {len(self.not_found)}, "
            f"Failed {len(self.failed)}."
        )

    def summary(self) -> dict[str, Any]:
        return {
            "deleted": len(self.deleted),
            "notFound": len(self.not_found),
            "failed": len(self.failed),
            "deletedIds": self.deleted,
            "notFoundIds": self.not_found,
            "failedIds": self.failed,
        }

    def to_result(self) -> ServiceResult:
        return ServiceResult(
            success=self.success,
            status=status.HTTP_200_OK,
            message=self.message,
            data=self.summary(),
        )
