from sqlalchemy.exc import SQLAlchemyError


class ServiceException(Exception):
    status_code = 500


class ValidationError(ServiceException):
    status_code = 400


class NotFoundError(ServiceException):
    status_code = 404


class ConflictError(ServiceException):
    status_code = 400


class StorageError(ServiceException):
    status_code = 500


def describe(exc: Exception) -> str:
    """Driver message for a SQLAlchemy error, without the SQL echo."""
    if isinstance(exc, SQLAlchemyError) and getattr(exc, "orig", None) is not None:
        return str(exc.orig)
    return str(exc)
