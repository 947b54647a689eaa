"""Error taxonomy for the StatCounter client.

Every failure surfaced by the client carries the human-readable message
text the StatCounter API wrappers have always used, so calling code can
branch on either the exception type or the message.
"""


class StatCounterError(Exception):
    """Base class for all StatCounter client failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(StatCounterError):
    """The remote service rejected the account credentials."""


class InvalidParameterError(StatCounterError):
    """A device, date, or timezone failed validation before any request."""


class RemoteServiceError(StatCounterError):
    """The remote service returned a non-"ok" status for a statistics call."""


CREDENTIALS_MESSAGE = "XML error: Check your username and password."
CREATE_PROJECT_MESSAGE = "Unable to create project. Check your login details."
PROJECT_MESSAGE = "XML Error: Check your project ID and login credentials."
SUMMARY_MESSAGE = "XML error: Check your login information and project ID."
VISITOR_MESSAGE = "XML Error: Check your login credentials and project ID."

INVALID_DEVICE_MESSAGE = "Invalid device entered."
INVALID_DATES_MESSAGE = "Invalid date(s) entered."
INVALID_TIMEZONE_MESSAGE = "Invalid timezone entered"
