import logging
import pytest
import requests
import responses
from mailchimp_api_v3 import ConnectivityError
from mailchimp_api_v3 import logger
from mailchimp_api_v3 import jsonext as json
from conftest import API_KEY, BASE_URL, EMAIL, LIST_ID, MEMBER_URL


@pytest.fixture
def logged(monkeypatch):
    lines = []
    monkeypatch.setattr(logger, 'log',
                        lambda level, obj: lines.append((level, obj)))
    return lines


@responses.activate
def test_unreachable_api_logs_a_warning_without_traceback(client, logged):
    responses.add(responses.GET, BASE_URL,
                  body=requests.ConnectionError('refused'))
    assert client.validate_api_key() is False
    levels = [level for level, _ in logged]
    assert logging.WARNING in levels
    assert logging.ERROR not in levels
    assert not any('traceback' in obj for _, obj in logged)
    warning = next(obj for level, obj in logged if level == logging.WARNING)
    assert warning['cause'] == 'ConnectionError'


@responses.activate
def test_unreachable_api_still_raises_for_writes(client, logged):
    responses.add(responses.PATCH, MEMBER_URL,
                  body=requests.ConnectionError('refused'))
    with pytest.raises(ConnectivityError):
        client.unsubscribe_from_list(LIST_ID, EMAIL)


@responses.activate
def test_request_log_hides_key_and_subscriber_data(client, logged):
    responses.add(responses.GET, MEMBER_URL, json={'status': 'unsubscribed'})
    responses.add(responses.PUT, MEMBER_URL, json={'status': 'subscribed'})
    client.subscribe_to_list(LIST_ID, EMAIL, merge_vars={'FNAME': 'Janet'},
                             double_opt_in=False)
    text = json.dumps([obj for _, obj in logged])
    assert API_KEY not in text
    assert EMAIL not in text
    assert 'Janet' not in text
    put = [obj for _, obj in logged
           if obj.get('action') == 'request' and obj.get('method') == 'PUT']
    assert put[0]['args']['status'] == 'subscribed'
