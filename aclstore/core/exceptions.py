"""
Custom exceptions for the ACL store.
"""

from typing import Optional, Any


# Machine-readable error codes returned in HTTP error bodies.
CODE_ACL_NOT_FOUND = "ACL not found"
CODE_BAD_REQUEST = "bad request"
CODE_FORBIDDEN = "forbidden"
CODE_NOT_FOUND = "not found"
CODE_UNAUTHORIZED = "unauthorized"
CODE_UNSUPPORTED = "unsupported"
CODE_INTERNAL_ERROR = "internal error"


class ACLStoreException(Exception):
    """Base exception for ACL store errors"""
    
    status_code: int = 500
    code: str = CODE_INTERNAL_ERROR
    
    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)
    
    def to_dict(self) -> dict:
        """Error body as written on the wire."""
        return {"code": self.code, "message": self.message}


class ACLNotFoundError(ACLStoreException):
    """The named ACL does not exist"""
    
    status_code = 404
    code = CODE_ACL_NOT_FOUND
    
    def __init__(self, message: str = CODE_ACL_NOT_FOUND, details: Optional[Any] = None):
        super().__init__(message, details)


class BadRequestError(ACLStoreException):
    """Malformed or contradictory request"""
    
    status_code = 400
    code = CODE_BAD_REQUEST


class BadUsernameError(BadRequestError):
    """A user name is empty or contains the member separator"""


class InvalidACLNameError(BadRequestError):
    """An ACL name uses the reserved meta-ACL prefix"""


class ForbiddenError(ACLStoreException):
    """The authenticated identity is not allowed to access the ACL"""
    
    status_code = 403
    code = CODE_FORBIDDEN
    
    def __init__(self, message: str = CODE_FORBIDDEN, details: Optional[Any] = None):
        super().__init__(message, details)


class UnsupportedError(ACLStoreException):
    """The backend lacks a required optional capability"""
    
    status_code = 501
    code = CODE_UNSUPPORTED


class BackendError(ACLStoreException):
    """Key-value backend failure"""
    
    def __init__(self, message: str, original_exception: Optional[Exception] = None, details: Optional[Any] = None):
        self.original_exception = original_exception
        super().__init__(message, details)


class KeyNotFoundError(ACLStoreException):
    """The key-value backend holds no entry for a key"""
    
    status_code = 404
    code = CODE_NOT_FOUND
    
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"key {key!r} not found")


class ConfigurationError(ACLStoreException):
    """Configuration related errors"""


class AuthenticationFailed(Exception):
    """
    Raised by an authenticator that has already prepared the response
    the caller should see. The HTTP layer returns ``response`` verbatim
    and writes nothing of its own.
    """
    
    def __init__(self, response, reason: str = "authentication failed"):
        self.response = response
        self.reason = reason
        super().__init__(reason)


class PermissionCheckError(ACLStoreException):
    """The permission check itself could not be completed"""
    
    def __init__(self, message: str, original_exception: Optional[Exception] = None, details: Optional[Any] = None):
        self.original_exception = original_exception
        super().__init__(message, details)
