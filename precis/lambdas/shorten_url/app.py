import json
import logging
from datetime import timedelta

from botocore.exceptions import BotoCoreError, ClientError

from precis.constants import ErrorCode, LogEvent
from precis.dao.redis import UrlRecordRedisDAO
from precis.dao.exceptions import DataStoreError
from precis.exceptions import ConfigurationError
from precis.lambdas.responses import response_200, response_400, response_409, response_500
from precis.services import ShorteningService, Ok, Err, ValidationFailed, AliasConflict
from precis.types import LambdaEvent, LambdaContext, LambdaResponse
from precis.utils import load_config, get_short_url, app_prefix, guarantee_500_response


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Load the lambda's configuration
    - Step 2: Extract long URL and optional custom alias from request body
    - Step 3: Shorten the URL (validation, alias check, persistence)
    - Step 4: Respond to the client

    HTTP responses:
        200: Successful URL shortening
            message, long_url, short_url, shortcode, created_at, expires_at
        400: Bad client request
            invalid JSON body, wrongly typed fields or failed validation
        409: Conflict
            custom alias is already in use
        500: Internal server error

    Example:
        >>> event = {'body': '{"long_url": "https://example.com", "custom_alias": "my-link"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortcode']
        'my-link'
    """
    # 1- Get application's config
    try:
        app_config = load_config('shorten_url')
    except (ConfigurationError, BotoCoreError, ClientError):
        logger.exception('Failed to load AppConfig for shorten URL function. Responding with 500.')
        return response_500(error_code=ErrorCode.INTERNAL_SERVER_ERROR)
    else:
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}
        ttl_seconds = app_config.get('link_ttl_seconds')

    # 2- Extract long URL and custom alias from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': LogEvent.INVALID_REQUEST_BODY})
        return response_400(message='invalid JSON body', error_code=ErrorCode.INVALID_REQUEST_BODY)

    if not isinstance(request_body, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': LogEvent.INVALID_REQUEST_BODY})
        return response_400(message='JSON body must be an object', error_code=ErrorCode.INVALID_REQUEST_BODY)

    long_url = request_body.get('long_url')
    custom_alias = request_body.get('custom_alias')
    if not isinstance(long_url, (str, type(None))) or not isinstance(custom_alias, (str, type(None))):
        logger.info('Wrongly typed request fields. Responding with 400.', extra={'event': LogEvent.INVALID_REQUEST_BODY})
        return response_400(
            message="'long_url' and 'custom_alias' must be strings",
            error_code=ErrorCode.INVALID_REQUEST_BODY,
        )

    # 3- Shorten the URL
    try:
        dao = UrlRecordRedisDAO(**redis_config, prefix=app_prefix())
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 500.')
        return response_500(error_code=ErrorCode.INTERNAL_SERVER_ERROR)

    service = ShorteningService(dao, ttl=timedelta(seconds=ttl_seconds) if ttl_seconds else None)
    result = service.shorten(long_url, custom_alias)

    # 4- Respond to the client
    match result:
        case Ok(record):
            short_url = get_short_url(record.shortcode, event)
            logger.info('Shortened URL. Responding with 200.', extra={'shortcode': record.shortcode})
            return response_200(
                {
                    'message': f'Successfully shortened {record.long_url} to {short_url}',
                    'long_url': record.long_url,
                    'short_url': short_url,
                    'shortcode': record.shortcode,
                    'created_at': record.created_at.isoformat(),
                    'expires_at': record.expires_at.isoformat() if record.expires_at else None,
                }
            )
        case Err(ValidationFailed() as failure):
            violations = [{'field': v.field, 'rule': v.rule, 'message': v.message} for v in failure.violations]
            return response_400(message=failure.message, error_code=failure.error_code, violations=violations)
        case Err(AliasConflict() as conflict):
            return response_409(message=conflict.message, error_code=conflict.error_code)
        case Err(error):
            return response_500(error_code=error.error_code)
