"""
Custom exceptions for the SI-Pedipontren data service.

Usage:
    from errors import InvalidPath, InstitutionNotFound

    if item is None:
        raise InstitutionNotFound(institution_id)
"""

from typing import Any, Dict, Optional


class PedipontrenError(Exception):
    """Base exception for all service errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class InvalidPath(PedipontrenError):
    """Field path is not defined for the record's variant, or the value does not fit it"""

    status_code = 422

    def __init__(self, path: str, institution_type: str, reason: str = "unknown field"):
        super().__init__(
            f"Cannot set '{path}' on {institution_type} record: {reason}",
            code="INVALID_PATH",
            details={"path": path, "type": institution_type, "reason": reason}
        )


class InstitutionNotFound(PedipontrenError):
    status_code = 404

    def __init__(self, institution_id: str):
        super().__init__(
            f"Institution with ID '{institution_id}' not found",
            code="NOT_FOUND",
            details={"id": institution_id}
        )


class DuplicateInstitutionId(PedipontrenError):
    """Two records in one list share an id"""

    status_code = 409

    def __init__(self, institution_id: str):
        super().__init__(
            f"Duplicate institution ID '{institution_id}'",
            code="DUPLICATE_ID",
            details={"id": institution_id}
        )


class IdMismatch(PedipontrenError):
    status_code = 400

    def __init__(self, path_id: str, body_id: str):
        super().__init__(
            f"Body ID '{body_id}' does not match URL ID '{path_id}'",
            code="ID_MISMATCH",
            details={"path_id": path_id, "body_id": body_id}
        )
