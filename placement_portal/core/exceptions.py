"""
Exception hierarchy for the placement portal.

Services raise these; the handlers in main.py turn them into
`{"message": ...}` responses with the matching status code.
"""


class PlacementError(Exception):
    """Base exception for all domain errors"""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnauthorizedError(PlacementError):
    """No valid session"""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(PlacementError):
    """Authenticated but not allowed"""

    status_code = 403


class NotFoundError(PlacementError):
    """Requested resource not found"""

    status_code = 404

    def __init__(self, resource_type: str, message: str = None):
        self.resource_type = resource_type
        super().__init__(message or f"{resource_type} not found")


class ConflictError(PlacementError):
    """Resource already exists or state does not allow the change"""

    status_code = 409


class ValidationError(PlacementError):
    """Missing or invalid input"""

    status_code = 400
