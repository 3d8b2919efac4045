class FetchError(Exception):
    """Base class for every per-request fetch failure."""


class InvalidUrlError(FetchError):
    pass


class UnsupportedSchemeError(FetchError):
    pass


class ResolutionError(FetchError):
    pass


class AddressBlockedError(FetchError):
    """No resolved address for the host is publicly routable."""


class RedirectExhaustedError(FetchError):
    pass


class TransportError(FetchError):
    pass


class ConfigurationError(Exception):
    pass
