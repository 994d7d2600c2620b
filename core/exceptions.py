"""Errors surfaced to the user as blocking notices.

All of them subclass ``ValueError`` so pages can keep the
``except ValueError as e: st.error(str(e))`` pattern.
"""


class ClinicError(ValueError):
    """Base class. The operation was aborted and nothing was persisted."""


class RecordNotFoundError(ClinicError):
    def __init__(self, message: str = "Registro no encontrado.", national_id: str = None):
        self.national_id = national_id
        super().__init__(message)


class DuplicateKeyError(ClinicError):
    field = None

    def __init__(self, message: str, value: str = None):
        self.value = value
        super().__init__(message)


class DuplicateNationalIdError(DuplicateKeyError):
    field = "national_id"


class DuplicateUsernameError(DuplicateKeyError):
    field = "username"


class ProtectedRecordError(ClinicError):
    pass


class MalformedStoredDataError(ClinicError):
    def __init__(self, key: str, details: str = ""):
        self.key = key
        self.details = details
        super().__init__(f"Error al leer los datos guardados ({key}).")


class ValidationError(ClinicError):
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)
