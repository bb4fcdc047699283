import logging

from botocore.exceptions import BotoCoreError, ClientError

from precis.constants import ErrorCode, LogEvent
from precis.dao.redis import UrlRecordRedisDAO
from precis.dao.exceptions import DataStoreError
from precis.exceptions import ConfigurationError
from precis.lambdas.responses import response_302, response_400, response_404, response_410, response_500
from precis.services import LookupService, Ok, Err, NotFound
from precis.types import LambdaEvent, LambdaContext, LambdaResponse
from precis.utils import load_config, get_short_url, app_prefix, guarantee_500_response


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Load the lambda's configuration
    - Step 2: Extract shortcode from request path
    - Step 3: Resolve the shortcode
    - Step 4: Redirect client to the long URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: long URL
        400: Bad client request
            missing shortcode in path parameters
        404: Not found
            unknown shortcode
        410: Gone
            record's expiry timestamp has passed
        500: Internal server error

    Example:
        >>> event = {'pathParameters': {'shortcode': 'my-link'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com'
    """
    # 1- Get application's config
    try:
        app_config = load_config('redirect_url')
    except (ConfigurationError, BotoCoreError, ClientError):
        logger.exception('Failed to load AppConfig for redirect URL function. Responding with 500.')
        return response_500(error_code=ErrorCode.INTERNAL_SERVER_ERROR)
    else:
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 2- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': LogEvent.MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=ErrorCode.MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 3- Resolve the shortcode
    try:
        dao = UrlRecordRedisDAO(**redis_config, prefix=app_prefix())
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 500.')
        return response_500(error_code=ErrorCode.INTERNAL_SERVER_ERROR)

    result = LookupService(dao).resolve(shortcode)

    # 4- Redirect client to the long URL
    match result:
        case Ok(record) if record.is_expired:
            logger.info('Short URL expired. Responding with 410.', extra={'shortcode': shortcode, 'event': LogEvent.LINK_EXPIRED})
            return response_410(
                message=f'short url {get_short_url(shortcode, event)} has expired',
                error_code=ErrorCode.LINK_EXPIRED,
            )
        case Ok(record):
            logger.info('Redirecting client to long URL. Responding with 302.', extra={'shortcode': shortcode, 'event': LogEvent.REDIRECT_SUCCESS})
            return response_302(location=record.long_url)
        case Err(NotFound()):
            return response_404(
                message=f"short url {get_short_url(shortcode, event)} doesn't exist",
                error_code=ErrorCode.NOT_FOUND,
            )
        case Err(error):
            return response_500(error_code=error.error_code)
