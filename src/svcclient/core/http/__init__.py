from .classifier import NOT_FOUND_EXCEPTION, CallResult, Err, Ok, Outcome, classify
from .errors import ClientError, ServerError, ServiceError
from .transport import HttpService

__all__ = [
    "classify",
    "CallResult",
    "Ok",
    "Err",
    "Outcome",
    "NOT_FOUND_EXCEPTION",
    "HttpService",
    "ServiceError",
    "ClientError",
    "ServerError",
]
