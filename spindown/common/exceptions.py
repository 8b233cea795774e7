class SpindownException(Exception):
    pass


class ConfigValidationError(SpindownException):
    """Invalid config value exception."""


class ExternalCommandError(SpindownException):
    pass
