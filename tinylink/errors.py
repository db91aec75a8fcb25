"""Error taxonomy for the link registry."""


class TinyLinkError(Exception):
    """Base class for link registry errors.

    Each subclass carries the HTTP status the request layer answers with.
    """

    status_code = 500

    @property
    def code(self) -> str:
        return type(self).__name__


class InvalidCodeFormat(TinyLinkError):
    """Short code is not 6-8 alphanumeric characters."""

    status_code = 400

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__("Short code must be 6-8 alphanumeric characters.")


class InvalidTargetURL(TinyLinkError):
    """Target URL failed validation."""

    status_code = 400


class CodeAlreadyInUse(TinyLinkError):
    """Custom short code collides with an existing link."""

    status_code = 409

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"The custom code '{short_code}' is already in use.")


class CodeSpaceExhausted(TinyLinkError):
    """Every generated candidate collided with an existing link."""

    status_code = 500

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Unable to generate a unique short code after {attempts} attempts.")


class NotFound(TinyLinkError):
    """No link exists for the short code."""

    status_code = 404

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Link with code '{short_code}' not found.")


class StoreUnavailable(TinyLinkError):
    """The link store could not be reached or failed unexpectedly."""

    status_code = 503
