class SkuaError(Exception):
    pass


class ConfigurationError(SkuaError, ValueError):
    pass


class InvalidDsn(ConfigurationError):
    pass


class TransportError(SkuaError):
    def __init__(self, message, error=None):
        super(TransportError, self).__init__(message)
        self.message = message
        self.error = error

    def __str__(self):
        return self.message
