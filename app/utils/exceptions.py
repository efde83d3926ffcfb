from fastapi import HTTPException, status


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CODES: machine-readable constants the frontend switches on
# ═══════════════════════════════════════════════════════════════════════════════
class ErrorCode:
    VALIDATION_ERROR          = "VALIDATION_ERROR"
    UNAUTHORIZED              = "UNAUTHORIZED"
    TOKEN_EXPIRED             = "TOKEN_EXPIRED"
    FORBIDDEN                 = "FORBIDDEN"
    PROFILE_NOT_FOUND         = "PROFILE_NOT_FOUND"
    NOT_FOUND                 = "NOT_FOUND"
    DUPLICATE_ENTRY           = "DUPLICATE_ENTRY"
    INVALID_DATE_RANGE        = "INVALID_DATE_RANGE"
    INSUFFICIENT_STOCK        = "INSUFFICIENT_STOCK"
    LPO_NOT_ACTIVE            = "LPO_NOT_ACTIVE"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    INTERNAL_SERVER_ERROR     = "INTERNAL_SERVER_ERROR"


# ═══════════════════════════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════════════════════════
class AppException(HTTPException):
    """
    Base exception for all application-level errors.
    Carries a machine-readable error_code for frontend handling.
    """
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str,
        details: list | None = None,
        field: str | None = None,
    ):
        super().__init__(status_code=status_code, detail={
            "message": message,
            "error": {
                "code": error_code,
                "details": details,
                "field": field,
            }
        })


# ═══════════════════════════════════════════════════════════════════════════════
# CONCRETE EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════════

class UnauthorizedException(AppException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, message, ErrorCode.UNAUTHORIZED)


class TokenExpiredException(AppException):
    def __init__(self):
        super().__init__(status.HTTP_401_UNAUTHORIZED, "Access token has expired", ErrorCode.TOKEN_EXPIRED)


class ForbiddenException(AppException):
    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(status.HTTP_403_FORBIDDEN, message, ErrorCode.FORBIDDEN)


class ProfileNotFoundException(AppException):
    def __init__(self):
        super().__init__(
            status.HTTP_403_FORBIDDEN,
            "No user profile is registered for this account",
            ErrorCode.PROFILE_NOT_FOUND,
        )


class NotFoundException(AppException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(status.HTTP_404_NOT_FOUND, f"{resource} not found", ErrorCode.NOT_FOUND)


class DuplicateEntryException(AppException):
    def __init__(self, message: str = "Record already exists", field: str | None = None):
        super().__init__(status.HTTP_409_CONFLICT, message, ErrorCode.DUPLICATE_ENTRY, field=field)


class InvalidDateRangeException(AppException):
    def __init__(self, message: str = "Arrival time must not be before departure time"):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, ErrorCode.INVALID_DATE_RANGE)


class InsufficientStockException(AppException):
    def __init__(self, name: str | None, available: int, requested: int):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            f"Stock is insufficient for {name or 'this item'}: "
            f"{available} available, {requested} requested",
            ErrorCode.INSUFFICIENT_STOCK,
            field="quantity",
        )


class LPONotActiveException(AppException):
    def __init__(self):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            "Stock can only be received against an Active LPO",
            ErrorCode.LPO_NOT_ACTIVE,
            field="lpoId",
        )


class InvalidStatusTransitionException(AppException):
    def __init__(self, entity: str, current: str, target: str):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            f"{entity} cannot move from {current} to {target}",
            ErrorCode.INVALID_STATUS_TRANSITION,
        )
