"""Error taxonomy for the location and discovery core."""

import enum


class ErrorKind(enum.StrEnum):
    """Kind of failure surfaced to callers."""

    INVALID_COORDINATE = "invalid_coordinate"
    INVALID_PARAMETER = "invalid_parameter"
    NOT_AUTHORIZED = "not_authorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORE_UNAVAILABLE = "store_unavailable"


class VanzoneError(Exception):
    """Base exception for all vanzone errors."""

    kind: ErrorKind


class InvalidCoordinate(VanzoneError):
    """A latitude or longitude is outside its valid range."""

    kind = ErrorKind.INVALID_COORDINATE

    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(f"Invalid coordinate: ({latitude}, {longitude})")


class InvalidParameter(VanzoneError):
    """A query parameter is missing or out of range."""

    kind = ErrorKind.INVALID_PARAMETER

    def __init__(self, name: str, detail: str):
        self.name = name
        super().__init__(f"Invalid parameter '{name}': {detail}")


class NotAuthorized(VanzoneError):
    """The caller may not perform this operation on the target profile."""

    kind = ErrorKind.NOT_AUTHORIZED

    def __init__(self, detail: str = "Operation not permitted"):
        super().__init__(detail)


class NotFound(VanzoneError):
    """The profile does not exist or is hidden from the caller.

    Both cases share this error so a hidden profile cannot be told apart
    from an absent one.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, profile_id: str):
        self.profile_id = profile_id
        super().__init__("Profile not found")


class Conflict(VanzoneError):
    """A profile or username already exists."""

    kind = ErrorKind.CONFLICT

    def __init__(self, detail: str):
        super().__init__(detail)


class StoreUnavailable(VanzoneError):
    """The profile store could not be reached or failed mid-operation."""

    kind = ErrorKind.STORE_UNAVAILABLE

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Profile store unavailable during {operation}")
