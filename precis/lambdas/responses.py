"""API Gateway (Lambda proxy) response builders.

Error bodies always carry a human readable `message` and, where known, an
`error_code` from precis.constants.ErrorCode.
"""

import json
from typing import Any

from precis.types import LambdaResponse


def _response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> LambdaResponse:
    response = {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **(headers or {})},
        'body': json.dumps(body),
    }
    return response


def _error_body(base: str, message: str | None, error_code: str | None, **extra: Any) -> dict[str, Any]:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['error_code'] = error_code
    body.update(extra)
    return body


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return _response(200, body)


def response_302(*, location: str) -> LambdaResponse:
    return _response(302, {}, headers={'Location': location})  # no body needed for redirects


def response_400(message: str | None = None, error_code: str | None = None, **extra: Any) -> LambdaResponse:
    return _response(400, _error_body('Bad Request', message, error_code, **extra))


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _response(404, _error_body('Not Found', message, error_code))


def response_409(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _response(409, _error_body('Conflict', message, error_code))


def response_410(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _response(410, _error_body('Gone', message, error_code))


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _response(500, _error_body('Internal Server Error', message, error_code))
