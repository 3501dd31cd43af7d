from sqlalchemy.exc import IntegrityError

# Raised by the storage engine on duplicate usernames or unknown message parties.
ConstraintViolation = IntegrityError


class MessagelyError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(MessagelyError):
    """ No user or message with the requested key """
    status_code = 404
