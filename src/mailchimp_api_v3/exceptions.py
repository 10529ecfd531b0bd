class MailChimpError(Exception):
    """Base class for errors raised by the MailChimp client."""
    def __init__(self, message, response=None):
        super().__init__(message)
        self.response = response

    @property
    def status_code(self):
        if self.response is None:
            return None
        return self.response.status_code


class ConnectivityError(MailChimpError):
    """No response could be obtained from the API (DNS, TCP, TLS, timeout)."""
    def __init__(self, message='Could not connect to API. Check your credentials.'):
        super().__init__(message)


class FetchError(MailChimpError):
    """The API answered, but not with the status the operation requires.

    ``error`` holds the decoded problem document MailChimp sent back, if any.
    """
    def __init__(self, message, response, error=None):
        super().__init__(message, response)
        self.error = error

    @property
    def title(self):
        try:
            return self.error['title']
        except (TypeError, KeyError):
            return None


class DecodeError(MailChimpError, ValueError):
    """A response body was not the JSON document that was expected."""
    pass
