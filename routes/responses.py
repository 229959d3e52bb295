from fastapi import Response, status
from fastapi.responses import JSONResponse

from services.result import ErrorKind, ServiceError

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INFRASTRUCTURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(error: ServiceError) -> Response:
    """Translate a failed service result into its HTTP response"""
    status_code = STATUS_BY_KIND[error.kind]
    if error.kind is ErrorKind.NOT_FOUND:
        return Response(status_code=status_code)
    return JSONResponse(status_code=status_code, content={"detail": error.message})
