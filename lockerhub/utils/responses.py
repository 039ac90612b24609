# lockerhub/utils/responses.py
"""Maps an engine envelope onto the HTTP status code of the response."""

from fastapi import Response, status

from lockerhub.errors import ErrorCode
from lockerhub.schemas.common import ApiResponse

ERROR_STATUS = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def respond(result: ApiResponse, response: Response, success_status: int = status.HTTP_200_OK) -> ApiResponse:
    if result.success:
        response.status_code = success_status
    else:
        response.status_code = ERROR_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST)
    return result
