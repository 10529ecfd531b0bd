"""Typed records for MailChimp API v3 responses.

Every record keeps the decoded document it was built from, so callers that
want fields this module does not model can still read them::

    >>> page = client.get_list_fields('abc123')
    >>> page.total_items
    2
    >>> page['merge_fields'][0]['tag']
    'FNAME'

Fields MailChimp may omit default to None (or an empty collection).
"""

from collections import abc
import copy
from .exceptions import DecodeError
from .jsonext import JsonObject
from .utils import datify_or_none


class Record(JsonObject):
    """A JsonObject that remembers its source document."""

    required_keys = ()
    defaults = {}
    datetime_keys = ()

    def __init__(self, data):
        data = data if data is not None else {}
        if not isinstance(data, abc.Mapping):
            raise DecodeError('Expected a JSON object, got {}.'
                              .format(type(data).__name__))
        super().__init__(data,
                         required_keys=self.required_keys,
                         defaults={k: copy.copy(v)
                                   for k, v in self.defaults.items()})
        for k in self.datetime_keys:
            setattr(self, k, datify_or_none(getattr(self, k)))
        self._data = data

    @property
    def data(self):
        return self._data

    def __json__(self):
        return self._data

    def __getitem__(self, key):
        return self._data[key]

    def __contains__(self, key):
        return key in self._data

    def get(self, key, default=None):
        return self._data.get(key, default)


class Page(Record):
    """One page of a MailChimp collection response."""

    collection_key = None
    item_class = Record

    defaults = {'total_items': 0}

    def __init__(self, data):
        super().__init__(data)
        self.items = [self.item_class(item)
                      for item in self._data.get(self.collection_key) or []]

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)


class Account(Record):
    defaults = {'account_id': None,
                'login_id': None,
                'account_name': None,
                'email': None,
                'first_name': None,
                'last_name': None,
                'username': None,
                'role': None,
                'total_subscribers': None,
                'member_since': None}
    datetime_keys = ('member_since',)


class Member(Record):
    defaults = {'id': None,
                'email_address': None,
                'unique_email_id': None,
                'status': None,
                'list_id': None,
                'merge_fields': {},
                'interests': {},
                'tags': [],
                'ip_signup': None,
                'timestamp_signup': None,
                'ip_opt': None,
                'timestamp_opt': None,
                'last_changed': None}
    datetime_keys = ('timestamp_signup', 'timestamp_opt', 'last_changed')


class MergeField(Record):
    defaults = {'merge_id': None,
                'tag': None,
                'name': None,
                'type': None,
                'required': False,
                'default_value': None,
                'public': None,
                'display_order': None,
                'list_id': None}


class MergeFieldsPage(Page):
    collection_key = 'merge_fields'
    item_class = MergeField
    defaults = {'total_items': 0, 'list_id': None}


class InterestCategory(Record):
    defaults = {'id': None,
                'list_id': None,
                'title': None,
                'display_order': None,
                'type': None}


class InterestCategoriesPage(Page):
    collection_key = 'categories'
    item_class = InterestCategory
    defaults = {'total_items': 0, 'list_id': None}


class Interest(Record):
    defaults = {'id': None,
                'category_id': None,
                'list_id': None,
                'name': None,
                'subscriber_count': None,
                'display_order': None}


class InterestsPage(Page):
    collection_key = 'interests'
    item_class = Interest
    defaults = {'total_items': 0, 'list_id': None, 'category_id': None}


class MemberTag(Record):
    defaults = {'id': None, 'name': None, 'date_added': None}
    datetime_keys = ('date_added',)


class MemberTagsPage(Page):
    collection_key = 'tags'
    item_class = MemberTag
