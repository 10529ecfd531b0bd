import pytest
from mailchimp_api_v3 import MailChimp
from mailchimp_api_v3.config import (ClientConfig, DEFAULT_REQUEST_TIMEOUT,
                                     DEFAULT_USER_AGENT)


def test_defaults():
    cfg = ClientConfig({'api_key': 'abc-us1'})
    assert cfg.api_key == 'abc-us1'
    assert cfg.user_agent == DEFAULT_USER_AGENT
    assert cfg.request_timeout == DEFAULT_REQUEST_TIMEOUT == 10
    assert cfg.list_id is None


def test_api_key_required():
    with pytest.raises(KeyError):
        ClientConfig({'list_id': 'x'})


@pytest.mark.parametrize('timeout', ['soon', -5, 0, None])
def test_bad_timeout_falls_back_to_default(timeout):
    cfg = ClientConfig({'api_key': 'abc-us1', 'request_timeout': timeout})
    assert cfg.request_timeout == DEFAULT_REQUEST_TIMEOUT


def test_api_key_is_masked():
    cfg = ClientConfig({'api_key': 'abc-us1'})
    assert 'abc-us1' not in str(cfg)
    assert 'abc-us1' not in repr(cfg)


def test_client_from_config():
    client = MailChimp.from_config({'api_key': 'abc-us9',
                                    'user_agent': 'acme/2',
                                    'request_timeout': '30'})
    assert client.base_url == 'https://us9.api.mailchimp.com/3.0/'
    assert client.headers['User-Agent'] == 'acme/2'
    assert '30' in repr(client)


@pytest.mark.parametrize('timeout, expected', [
    (0.5, 0.5), (2.5, 2.5), ('2.5', 2.5), (30, 30), ('30', 30),
])
def test_fractional_timeouts_are_kept(timeout, expected):
    cfg = ClientConfig({'api_key': 'abc-us1', 'request_timeout': timeout})
    assert cfg.request_timeout == expected
