# pos_api/core/errors.py
#
# Domain errors raised by the service layer. main.py maps each one to an
# HTTP status with a {"detail": ...} body.

import json

from fastapi import status


class POSError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(POSError):
    status_code = status.HTTP_404_NOT_FOUND


class NotUniqueError(POSError):
    status_code = status.HTTP_409_CONFLICT


class ValidationFailure(POSError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class MalformedRequestError(POSError):
    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamServiceError(POSError):
    status_code = status.HTTP_502_BAD_GATEWAY


def describe(query_info) -> str:
    return json.dumps(query_info, sort_keys=True, default=str)


def require_found(value, name: str, query_info):
    if value is None:
        raise NotFoundError(f"Couldn't find {name} matching {describe(query_info)}")
    return value


def require_unique(values: list, name: str, query_info):
    if len(values) == 0:
        raise NotFoundError(f"Couldn't find {name} matching {describe(query_info)}")
    if len(values) > 1:
        raise NotUniqueError(f"Found multiple {name} matching {describe(query_info)}")
    return values[0]
