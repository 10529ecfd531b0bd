"""Client for the MailChimp API v3 lists endpoints.

The client covers subscription management, merge fields, interest
categories and member tags:

1. A generic dispatcher (:meth:`MailChimp.request` / :meth:`MailChimp.call`)
   that signs requests with the API key and separates "the API answered"
   from "the API could not be reached".
2. Domain operations that interpret MailChimp's status codes, including the
   ``Member Exists`` quirk of re-subscribing a pending member.

Usage:
    >>> client = MailChimp('0123456789abcdef-us6')
    >>> client.subscribe_to_list('a1b2c3', 'jane@example.com',
    ...                          merge_vars={'FNAME': 'Jane'})
    True

.. _`MailChimp API v3`:
   https://mailchimp.com/developer/marketing/api/
"""

from collections import namedtuple
import threading
import requests
from singer import Timer
from singer.metrics import Metric, Tag
from .config import (ClientConfig, DEFAULT_REQUEST_TIMEOUT,
                     DEFAULT_USER_AGENT)
from .exceptions import ConnectivityError, DecodeError, FetchError
from .models import (Account, Member, MergeFieldsPage, InterestCategoriesPage,
                     InterestsPage, MemberTagsPage)
from .utils import api_endpoint, join_fields, subscriber_hash
import mailchimp_api_v3.logger as logger
import mailchimp_api_v3.jsonext as json


MEMBER_EXISTS = 'Member Exists'
CONTENT_TYPE = 'application/vnd.api+json'


class Status:
    subscribed = 'subscribed'
    pending = 'pending'
    archived = 'archived'
    unsubscribed = 'unsubscribed'
    cleaned = 'cleaned'
    transactional = 'transactional'
    _available = (subscribed, pending, archived, unsubscribed, cleaned,
                  transactional)


class TagStatus:
    active = 'active'
    inactive = 'inactive'
    _available = (active, inactive)


class Method:
    get = 'GET'
    post = 'POST'
    patch = 'PATCH'
    put = 'PUT'
    delete = 'DELETE'
    _available = (get, post, patch, put, delete)
    # Verbs whose parameters travel in the query string; the rest send JSON.
    _query = (get, delete)

    @classmethod
    def coerce(cls, method):
        """Map ``method`` onto a known verb, falling back to GET."""
        try:
            verb = method.upper()
        except AttributeError:
            return cls.get
        return verb if verb in cls._available else cls.get


CallResult = namedtuple('CallResult', ['response', 'error'])
CallResult.__doc__ = """Outcome of a dispatched request.

``error`` is None for 2xx/3xx responses. For 4xx/5xx responses it holds the
decoded problem document, or a DecodeError if the body was not JSON.
"""


class MailChimp:
    """MailChimp API v3 client.

    One instance owns a :class:`requests.Session`. The most recent dispatcher
    error is kept per thread (see :attr:`last_error`); the session itself is
    not synchronized, so share a client across threads only if the transport
    allows it.
    """

    def __init__(self, api_key, user_agent=None, timeout=None, session=None):
        self._api_key = api_key
        self._base_url = api_endpoint(api_key)
        self._timeout = timeout if timeout is not None else DEFAULT_REQUEST_TIMEOUT
        self._headers = {'Accept': CONTENT_TYPE,
                         'Content-Type': CONTENT_TYPE,
                         'Authorization': 'apikey {}'.format(api_key),
                         'User-Agent': user_agent or DEFAULT_USER_AGENT}
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._local = threading.local()

    @classmethod
    def from_config(cls, config, session=None):
        if not isinstance(config, ClientConfig):
            config = ClientConfig(config)
        return cls(config.api_key,
                   user_agent=config.user_agent,
                   timeout=config.request_timeout,
                   session=session)

    @property
    def base_url(self):
        return self._base_url

    @property
    def headers(self):
        return dict(self._headers)

    @property
    def last_error(self):
        """Error of the last dispatcher call made from this thread."""
        return getattr(self._local, 'last_error', None)

    def get_last_error(self):
        return self.last_error

    def close(self):
        if self._owns_session:
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __str__(self):
        return '{}({!r})'.format(type(self).__name__, self._base_url)

    def __repr__(self):
        fmt = '{}(base_url={!r}, timeout={!r}, user_agent={!r})'
        return fmt.format(type(self).__name__, self._base_url, self._timeout,
                          self._headers['User-Agent'])

    # Dispatcher

    def request(self, method=Method.get, path='', args=None, timeout=None):
        """Send one request and return a :data:`CallResult`.

        GET and DELETE send ``args`` as the query string, other verbs as a
        JSON body. The API key is added to ``args`` on every call.

        Raises:
            ConnectivityError: No response was received at all.
        """
        method = Method.coerce(method)
        params = dict(args or {})
        params['apikey'] = self._api_key
        url = self._base_url + path
        options = {'headers': self._headers,
                   'timeout': timeout if timeout is not None else self._timeout}
        if method in Method._query:
            options['params'] = params
        else:
            options['data'] = json.encode_body(params)
        tags = {Tag.endpoint: path or 'root', 'method': method}
        try:
            with Timer(Metric.http_request_duration, tags) as timer:
                response = self._session.request(method, url, **options)
                timer.tags[Tag.http_status_code] = response.status_code
        except requests.RequestException as e:
            if getattr(e, 'response', None) is None:
                raise ConnectivityError() from e
            response = e.response
        logger.debug({'action': 'request',
                      'method': method,
                      'path': path,
                      'args': logger.redact(params),
                      'status': response.status_code})
        return CallResult(response, self._error_for(response))

    def call(self, method=Method.get, path='', args=None, timeout=None):
        """Dispatch a request and return the response.

        The error part of the result is kept in :attr:`last_error`. A
        ConnectivityError is stored there as well before it propagates.
        """
        try:
            result = self.request(method, path, args, timeout)
        except ConnectivityError as e:
            self._local.last_error = e
            logger.warning({'action': 'request',
                            'method': Method.coerce(method),
                            'path': path,
                            'error': str(e),
                            'cause': type(e.__cause__).__name__})
            raise
        self._local.last_error = result.error
        return result.response

    def get(self, path='', args=None, timeout=None):
        return self.call(Method.get, path, args, timeout)

    def post(self, path='', args=None, timeout=None):
        return self.call(Method.post, path, args, timeout)

    def patch(self, path='', args=None, timeout=None):
        return self.call(Method.patch, path, args, timeout)

    def put(self, path='', args=None, timeout=None):
        return self.call(Method.put, path, args, timeout)

    def delete(self, path='', args=None, timeout=None):
        return self.call(Method.delete, path, args, timeout)

    # Account

    def validate_api_key(self):
        try:
            response = self.get()
        except ConnectivityError:
            return False
        return response.status_code == 200

    def get_account_details(self):
        try:
            response = self.get('')
        except ConnectivityError:
            return None
        return Account(self._decode(response))

    # Members

    def get_subscriber_hash(self, email):
        return subscriber_hash(email)

    def get_subscriber_status(self, list_id, email):
        """Return the member's status string.

        Missing members come back as MailChimp's 404 problem document, whose
        numeric ``status`` is returned as a string (``'404'``).
        """
        response = self.get(self._member_path(list_id, email))
        body = self._decode(response)
        try:
            return str(body['status'])
        except (TypeError, KeyError) as e:
            raise DecodeError('Response has no member status.',
                              response) from e

    def is_subscribed(self, list_id, email):
        return self.get_subscriber_status(list_id, email) == Status.subscribed

    def get_member(self, list_id, email):
        response = self.get(self._member_path(list_id, email))
        self._require(response, 200, 'Could not fetch member from API.')
        return Member(self._decode(response))

    def subscribe_to_list(self, list_id, email, merge_vars=None,
                          double_opt_in=True, interests=None):
        """Subscribe ``email``, or re-subscribe an archived member.

        Returns False without writing anything when the member is already
        subscribed.
        """
        status = self.get_subscriber_status(list_id, email)
        if status == Status.subscribed:
            logger.info({'action': 'skip',
                         'reason': 'already subscribed',
                         'list_id': list_id})
            return False
        data = {'id': list_id,
                'email_address': email,
                'status': Status.pending if double_opt_in else Status.subscribed}
        if merge_vars:
            data['merge_fields'] = merge_vars
        if interests:
            data['interests'] = interests
        method = Method.patch if status == Status.archived else Method.put
        result = self._request(method, self._member_path(list_id, email), data)
        if result.response.status_code == 400 and \
                self._error_title(result.error) == MEMBER_EXISTS:
            return True
        return result.response.status_code == 200

    def unsubscribe_from_list(self, list_id, email):
        response = self.patch(self._member_path(list_id, email),
                              {'status': Status.unsubscribed})
        return response.status_code == 200

    def remove_from_list(self, list_id, email):
        response = self.delete(self._member_path(list_id, email))
        return response.status_code == 204

    # Lists

    def get_list_fields(self, list_id, offset=0, limit=10):
        response = self.get('lists/{}/merge-fields'.format(list_id),
                            {'offset': offset, 'limit': limit})
        self._require(response, 200, 'Could not fetch merge-fields from API.')
        return MergeFieldsPage(self._decode(response))

    def get_list_group_categories(self, list_id, offset=0, limit=10):
        response = self.get('lists/{}/interest-categories'.format(list_id),
                            {'offset': offset, 'limit': limit})
        self._require(response, 200,
                      'Could not fetch interest-categories from API.')
        return InterestCategoriesPage(self._decode(response))

    def get_list_group(self, list_id, group_id, offset=0, limit=10):
        path = 'lists/{}/interest-categories/{}/interests'.format(list_id,
                                                                  group_id)
        response = self.get(path, {'offset': offset, 'limit': limit})
        self._require(response, 200, 'Could not fetch interest group from API.')
        return InterestsPage(self._decode(response))

    # Tags

    def get_member_tags(self, list_id, email, fields=None, exclude_fields=None,
                        count=10, offset=0):
        response = self.get(self._tags_path(list_id, email),
                            {'fields': join_fields(fields),
                             'exclude_fields': join_fields(exclude_fields),
                             'count': count,
                             'offset': offset})
        self._require(response, 200, 'Could not fetch member tags from API.')
        return MemberTagsPage(self._decode(response))

    def add_member_tags(self, list_id, email, tags=(), is_syncing=False):
        return self.add_or_remove_member_tags(
            list_id, email, self._tag_statuses(tags, TagStatus.active),
            is_syncing)

    def remove_member_tags(self, list_id, email, tags=(), is_syncing=False):
        return self.add_or_remove_member_tags(
            list_id, email, self._tag_statuses(tags, TagStatus.inactive),
            is_syncing)

    def add_or_remove_member_tags(self, list_id, email, tags=(),
                                  is_syncing=False):
        response = self.post(self._tags_path(list_id, email),
                             {'tags': list(tags), 'is_syncing': is_syncing})
        return response.status_code == 204

    # Helpers

    def _request(self, method, path, args):
        """Like :meth:`call`, but hand back the whole CallResult."""
        response = self.call(method, path, args)
        return CallResult(response, self.last_error)

    def _member_path(self, list_id, email):
        return 'lists/{}/members/{}'.format(list_id, subscriber_hash(email))

    def _tags_path(self, list_id, email):
        return '{}/tags'.format(self._member_path(list_id, email))

    @staticmethod
    def _tag_statuses(tags, status):
        return [{'name': tag, 'status': status} for tag in tags]

    @staticmethod
    def _error_title(error):
        try:
            return error['title']
        except (TypeError, KeyError):
            return None

    def _require(self, response, status_code, message):
        if response.status_code != status_code:
            # response.url carries the apikey query parameter; keep it out.
            logger.warning({'action': 'reject',
                            'reason': message,
                            'status': response.status_code,
                            'expected': status_code})
            raise FetchError(message, response, self.last_error)

    @staticmethod
    def _decode(response):
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError('Response body is not valid JSON: {}'.format(e),
                              response) from e

    @classmethod
    def _error_for(cls, response):
        try:
            response.raise_for_status()
        except requests.HTTPError:
            try:
                return cls._decode(response)
            except DecodeError as e:
                return e
        return None
