"""Errors raised while building a seminar post.

Every failure in the pipeline is a ``SeminarPostError`` so the command line
entry point can report it once and exit.
"""


class SeminarPostError(Exception):
    """Base error for the seminar post pipeline."""

    stage = 'unknown'

    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class ConfigMissing(SeminarPostError):
    stage = 'config'

    def __init__(self, names):
        self.names = list(names)
        super().__init__(f"Missing required configuration: {', '.join(self.names)}")


class TransportError(SeminarPostError):
    stage = 'fetch'

    def __init__(self, url, cause):
        self.url = url
        self.cause = cause
        super().__init__(f"Request to {url} failed: {cause}")


class InvalidHeaderValue(SeminarPostError):
    stage = 'fetch'

    def __init__(self, name):
        self.name = name
        super().__init__(f"Value for header {name} cannot be sent in an HTTP request")


class UnexpectedStatus(SeminarPostError):
    stage = 'fetch'

    def __init__(self, url, status_code):
        self.url = url
        self.status_code = status_code
        super().__init__(f"GitHub returned status {status_code} for {url}")


class MalformedResponse(SeminarPostError):
    stage = 'fetch'

    def __init__(self, url, detail):
        self.url = url
        self.detail = detail
        super().__init__(f"Unexpected response from {url}: {detail}")


class MalformedLink(SeminarPostError):
    stage = 'render'

    def __init__(self, line, reason):
        self.line = line
        self.reason = reason
        super().__init__(f"Invalid link {line!r}: {reason}")


class FileIoError(SeminarPostError):
    stage = 'write'

    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not write {path}: {cause}")
