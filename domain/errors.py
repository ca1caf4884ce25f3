class RegistrationError(Exception):
    """Base for every failure surfaced to the user."""


class ValidationError(RegistrationError):
    """Input rejected before any network call; message is user-facing."""


class DuplicateCpfError(ValidationError):
    pass


class RegistrationClosedError(ValidationError):
    pass


class NotFoundError(RegistrationError):
    pass


class DataServiceError(RegistrationError):
    """The hosted store (or another external service) failed the call."""


class ConstraintError(DataServiceError):
    """The store rejected a write on a constraint (unique, not null, ...)."""


class CepLookupError(DataServiceError):
    pass


class PersistenceMismatchError(RegistrationError):
    """Write reported success but the stored row disagrees with the intended value."""
