from logging import DEBUG, INFO, WARNING, ERROR, CRITICAL
import traceback
import re
import singer
import mailchimp_api_v3.jsonext as json

_logger = None

def get_logger():
    global _logger
    if _logger is None:
        _logger = singer.get_logger()
    return _logger

_level = {DEBUG: 'debug',
          INFO: 'info',
          WARNING: 'warning',
          ERROR: 'error',
          CRITICAL: 'critical'}

def _msg(level, obj):
    try:
        return json.dumps(dict(obj, level=_level.get(level, 'notset')),
                          skipkeys=True)
    except TypeError:
        # Last effort to log as JSON
        return json.dumps({'action': 'stringify',
                           'reason': 'unserializable object',
                           'level': _level.get(level, 'notset'),
                           'obj_type': type(obj).__name__,
                           'obj_str': str(obj)})

def log_json(logger, level, obj):
    logger.log(level, 'JSON: %s', _msg(level, obj))

def log(level, obj):
    log_json(get_logger(), level, obj)

def debug(obj):
    log(DEBUG, obj)

def info(obj):
    log(INFO, obj)

def warning(obj):
    log(WARNING, obj)

def error(obj):
    log(ERROR, obj)

def exception(e, **context):
    error({'type': 'exception',
           'exception_type': type(e).__name__,
           'message': str(e),
           'args': [str(a) for a in e.args],
           'context': context,
           'traceback': traceback.format_exception(type(e), e,
                                                   e.__traceback__)})

def parse(line):
    match = re.match(r'^[A-Z]+ JSON: (.*)$', line)
    if match:
        return json.loads(match.group(1))
    else:
        return None

SECRET_KEYS = ('apikey', 'email_address', 'merge_fields', 'interests')

def redact(params, secret_keys=SECRET_KEYS):
    """Copy of ``params`` with credentials and subscriber data masked."""
    return {k: ('***' if k in secret_keys else v)
            for k, v in (params or {}).items()}
