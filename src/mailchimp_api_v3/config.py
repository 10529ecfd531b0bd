import mailchimp_api_v3.logger as logger
from .jsonext import JsonObject
from .utils import number_or_none


DEFAULT_REQUEST_TIMEOUT = 10
DEFAULT_USER_AGENT = ('mailchimp-api-v3/python '
                      '(https://github.com/1up-lab/mailchimp-api-v3)')


class Keys:
    api_key = 'api_key'
    user_agent = 'user_agent'
    request_timeout = 'request_timeout'
    list_id = 'list_id'


class ClientConfig(JsonObject):

    required_keys = [Keys.api_key]

    defaults = {Keys.user_agent: DEFAULT_USER_AGENT,
                Keys.request_timeout: DEFAULT_REQUEST_TIMEOUT,
                Keys.list_id: None}

    def __init__(self, cfg):
        super().__init__(cfg,
                         required_keys=self.required_keys,
                         defaults=self.defaults)
        self.request_timeout = self._parse_timeout(self.request_timeout)

    def __json__(self):
        d = super().__json__()
        d[Keys.api_key] = '***'
        return d

    @staticmethod
    def _parse_timeout(t):
        timeout = number_or_none(t)
        if timeout is None or timeout <= 0:
            logger.debug({'action': 'replace',
                          'target': 'config.request_timeout',
                          'old': t,
                          'new': DEFAULT_REQUEST_TIMEOUT})
            return DEFAULT_REQUEST_TIMEOUT
        return timeout
