import hashlib
import json
from urllib.parse import parse_qs, urlparse
import pytest
from mailchimp_api_v3 import MailChimp

API_KEY = 'abc123-us6'
BASE_URL = 'https://us6.api.mailchimp.com/3.0/'
LIST_ID = 'a1b2c3'
EMAIL = 'Jane@Example.com'
EMAIL_HASH = hashlib.md5(b'jane@example.com').hexdigest()
MEMBER_URL = '{}lists/{}/members/{}'.format(BASE_URL, LIST_ID, EMAIL_HASH)


def query(call):
    """Query parameters of a recorded call, single values unwrapped."""
    qs = parse_qs(urlparse(call.request.url).query, keep_blank_values=True)
    return {k: v[0] if len(v) == 1 else v for k, v in qs.items()}


def body(call):
    return json.loads(call.request.body)


@pytest.fixture
def client():
    with MailChimp(API_KEY) as c:
        yield c
