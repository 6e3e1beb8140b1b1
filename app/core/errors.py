# app/core/errors.py
"""
Errores de dominio. Los servicios los levantan; cada operación los atrapa en
su propio borde, los loguea y devuelve un valor vacío + mensaje para el
usuario (nunca una excepción cruda).
"""


class AppError(Exception):
    code = "app_error"
    message = "An unknown error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class AuthenticationMissingError(AppError):
    code = "authentication_missing"
    message = "User not authenticated"


class NotFoundError(AppError):
    code = "not_found"
    message = "Resource not found"


class ProfileIncompleteError(NotFoundError):
    code = "profile_incomplete"
    message = "Profile information is incomplete"


class ExternalCallError(AppError):
    code = "external_call_failed"
    message = "External service call failed"


class LocationUnavailableError(AppError):
    code = "location_unavailable"
    message = "No location information available. Please enable GPS or update your profile address."


class InvalidStatusError(AppError):
    code = "invalid_status"
    message = "Invalid status for this record"


def user_message(exc: Exception, default: str = "An unknown error occurred") -> str:
    # errores de infraestructura no se muestran tal cual al usuario
    if isinstance(exc, AppError):
        return exc.message
    return default
