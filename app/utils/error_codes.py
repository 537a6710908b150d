# app/utils/error_codes.py

ERROR_CODES = {
    "BAD_REQUEST": "BAD_REQUEST",
    "VALIDATION_ERROR": "VALIDATION_ERROR",
    "UNAUTHORIZED": "UNAUTHORIZED",
    "FORBIDDEN": "FORBIDDEN",
    "NOT_FOUND": "NOT_FOUND",
    "CONFLICT": "CONFLICT",
    "EXPECTATION_FAILED": "EXPECTATION_FAILED",
    "SERVER_ERROR": "SERVER_ERROR",
    "SERVICE_UNAVAILABLE": "SERVICE_UNAVAILABLE",
}

HTTP_STATUS_TO_ERROR_CODE = {
    400: ERROR_CODES["BAD_REQUEST"],
    401: ERROR_CODES["UNAUTHORIZED"],
    403: ERROR_CODES["FORBIDDEN"],
    404: ERROR_CODES["NOT_FOUND"],
    405: ERROR_CODES["BAD_REQUEST"],
    409: ERROR_CODES["CONFLICT"],
    417: ERROR_CODES["EXPECTATION_FAILED"],
    422: ERROR_CODES["VALIDATION_ERROR"],
    500: ERROR_CODES["SERVER_ERROR"],
    503: ERROR_CODES["SERVICE_UNAVAILABLE"],
}
