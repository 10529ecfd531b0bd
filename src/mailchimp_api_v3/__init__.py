"""Client for the MailChimp API v3.

Usage:

    >>> from mailchimp_api_v3 import MailChimp
    >>> client = MailChimp('0123456789abcdef-us6')
    >>> client.is_subscribed('a1b2c3', 'jane@example.com')

Command line:

    $ mailchimp-api-v3 -c config.json status a1b2c3 jane@example.com
"""

__version__ = '0.1.0'

from mailchimp_api_v3.client import MailChimp, Method, Status, CallResult
from mailchimp_api_v3.exceptions import (MailChimpError, ConnectivityError,
                                         FetchError, DecodeError)
from mailchimp_api_v3.main import main
