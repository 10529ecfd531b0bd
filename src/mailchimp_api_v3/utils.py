"""Utility functions for the MailChimp API v3 client."""

from datetime import datetime
import hashlib
import math
import dateutil.parser
import dateutil.tz
import mailchimp_api_v3.logger as logger


API_ENDPOINT_TEMPLATE = 'https://{dc}.api.mailchimp.com/3.0/'


def datacenter(api_key):
    """Return the datacenter suffix of a MailChimp API key.

    Keys look like ``0123456789abcdef-us6``; the part after the first dash
    names the regional API host.

    Raises:
        ValueError: The key carries no datacenter suffix.
    """
    parts = api_key.split('-')
    if len(parts) < 2 or not parts[1]:
        raise ValueError('API key has no datacenter suffix')
    return parts[1]


def api_endpoint(api_key):
    return API_ENDPOINT_TEMPLATE.format(dc=datacenter(api_key))


def subscriber_hash(email_address):
    """MD5 hex digest of the lowercased address, MailChimp's member id."""
    hasher = hashlib.md5()
    hasher.update(email_address.lower().encode('utf-8'))
    return hasher.hexdigest()


def join_fields(fields):
    return ','.join(fields or ())


def datify(dt):
    """Parse a MailChimp timestamp into a timezone-aware datetime.

    Empty values, which MailChimp sends for unset timestamps, become None.
    Naive timestamps are taken to be UTC.
    """
    if dt is None or dt == '':
        return None
    if isinstance(dt, datetime):
        dtobj = dt
    else:
        dtobj = dateutil.parser.parse(dt)
    if dtobj.tzinfo is None:
        return dtobj.replace(tzinfo=dateutil.tz.tzutc())
    return dtobj


def datify_or_none(dt):
    try:
        return datify(dt)
    except (TypeError, ValueError, OverflowError) as e:
        logger.exception(e, action='replace', old_value=dt, new_value=None)
        return None


def number_or_none(v, default=None):
    """Parse a number of seconds, keeping ints for integral values."""
    try:
        n = float(v)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(n):
        return default
    return int(n) if n.is_integer() else n
