"""Unit tests for helper functions in helpers.py.

Test coverage includes:

1. base_url() correct extraction
   - 1.1. Ensures URLs include the stage (e.g., `/Prod`) when invoked via AWS.
   - 1.2. Ensures URLs do NOT include stage information for custom domains.
   - 1.3. Confirms a proper localhost fallback is returned when no domain is present.

2. get_short_url() retrieves short URL string representation

3. require_environment() decorator behavior

4. guarantee_500_response() decorator behavior
"""

import json

import pytest

from precis.exceptions import ConfigurationError, MissingEnvironmentVariableError
from precis.utils.helpers import (
    base_url,
    get_short_url,
    require_environment,
    guarantee_500_response,
)


# -------------------------------
# 1.1. AWS default domain handling
# -------------------------------


@pytest.mark.parametrize(
    'domain, stage, expected',
    [
        ('abc123.execute-api.us-east-1.amazonaws.com', 'Dev', 'https://abc123.execute-api.us-east-1.amazonaws.com/Dev'),
        ('abc123.execute-api.us-east-1.amazonaws.com', 'Prod', 'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'),
    ],
)
def test_base_url_with_aws_domain(domain, stage, expected):
    event = {'requestContext': {'domainName': domain, 'stage': stage}}
    assert base_url(event) == expected


# -------------------------------
# 1.2. Custom domain handling
# -------------------------------


@pytest.mark.parametrize(
    'domain, stage, expected',
    [
        ('precis.example', 'Dev', 'https://precis.example'),
        ('example.com', 'Prod', 'https://example.com'),
    ],
)
def test_base_url_with_custom_domain(domain, stage, expected):
    event = {'requestContext': {'domainName': domain, 'stage': stage}}
    assert base_url(event) == expected


# -------------------------------
# 1.3. Local fallback behavior
# -------------------------------


@pytest.mark.parametrize(
    'event',
    [
        {},
        {'requestContext': {}},
        {'requestContext': {'domainName': ''}},
        {'requestContext': {'stage': 'Dev'}},
    ],
)
def test_base_url_local_fallback(event):
    assert base_url(event) == 'http://localhost:3000'


# -------------------------------
# 2. Get short url string representation
# -------------------------------


@pytest.mark.parametrize(
    'shortcode, domain, expected',
    [
        ('JT0UJwME', 'precis.example', 'https://precis.example/JT0UJwME'),
        ('my-link', 'precis.example', 'https://precis.example/my-link'),
    ],
)
def test_get_short_url(shortcode, domain, expected):
    event = {'requestContext': {'domainName': domain, 'stage': 'Prod'}}
    assert get_short_url(shortcode, event) == expected


# -------------------------------
# 3. require_environment()
# -------------------------------


def test_require_environment_happy_path(monkeypatch):
    """Decorated function executes when all env vars are present."""
    monkeypatch.setenv('ENV1', 'value1')
    monkeypatch.setenv('ENV2', 'value2')

    @require_environment('ENV1', 'ENV2')
    def sample_function(x: int) -> int:
        return x + 1

    assert sample_function(1) == 2


@pytest.mark.parametrize(
    'env_setup, missing_names',
    [
        ({'ENV1': None, 'ENV2': 'value2'}, ["'ENV1'"]),
        ({'ENV1': '', 'ENV2': 'value2'}, ["'ENV1'"]),
        ({'ENV1': None, 'ENV2': None}, ["'ENV1'", "'ENV2'"]),
    ],
)
def test_require_environment_missing_or_empty(monkeypatch, env_setup, missing_names):
    """Missing or empty env vars raise a descriptive MissingEnvironmentVariableError."""
    for name, value in env_setup.items():
        if value is None:
            monkeypatch.delenv(name, raising=False)
        else:
            monkeypatch.setenv(name, value)

    @require_environment('ENV1', 'ENV2')
    def sample_function() -> None:
        pass

    expected_message = f'Missing required environment variables: {", ".join(missing_names)}'
    with pytest.raises(MissingEnvironmentVariableError, match=expected_message) as exc_info:
        sample_function()

    assert isinstance(exc_info.value, ConfigurationError)
    assert isinstance(exc_info.value, KeyError)


# -------------------------------
# 4. guarantee_500_response()
# -------------------------------


def test_guarantee_500_response(monkeypatch):
    """Faulty lambda handler returns 500 response when not running locally."""
    monkeypatch.setattr('precis.utils.helpers.running_locally', lambda: False)

    @guarantee_500_response
    def faulty_lambda_handler(event, context):
        raise RuntimeError('boom')

    response = faulty_lambda_handler({}, None)
    body = json.loads(response['body'])

    assert response['statusCode'] == 500
    assert body['message'] == 'Internal Server Error'
    assert body['error_code'] == 'INTERNAL_SERVER_ERROR'
    assert 'boom' not in response['body']


def test_guarantee_500_response_reraises_when_running_locally(monkeypatch):
    monkeypatch.setattr('precis.utils.helpers.running_locally', lambda: True)

    @guarantee_500_response
    def faulty_lambda_handler(event, context):
        raise RuntimeError('boom')

    with pytest.raises(RuntimeError, match='boom'):
        faulty_lambda_handler({}, None)


def test_guarantee_500_response_passes_through_results(monkeypatch):
    monkeypatch.setattr('precis.utils.helpers.running_locally', lambda: False)

    @guarantee_500_response
    def lambda_handler(event, context):
        return {'statusCode': 200, 'body': '{}'}

    assert lambda_handler({}, None) == {'statusCode': 200, 'body': '{}'}
