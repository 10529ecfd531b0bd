import json
from json import load, loads


class JsonObject:
    """Attribute view over a JSON mapping.

    Keys listed in ``required_keys`` must be present in ``d``; keys in
    ``defaults`` fall back to the given value when missing.
    """
    def __init__(self, d, required_keys=None, defaults=None):
        if required_keys:
            for k in required_keys:
                setattr(self, k, d[k])
        if defaults:
            for k, v in defaults.items():
                setattr(self, k, d.get(k, v))

    def __json__(self):
        return {k: getattr(self, k) for k in self.__dict__ if k[:1] != '_'}

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.__json__() == other.__json__()

    def __str__(self):
        return dumps(self)

    def __repr__(self):
        return '%s(%r)' % (type(self).__name__, self.__json__())


class JsonEncoderExt(json.JSONEncoder):
    def default(self, obj):
        if hasattr(obj, '__json__'):
            return obj.__json__()
        elif hasattr(obj, 'isoformat'):
            return obj.isoformat()
        elif isinstance(obj, set):
            return sorted(obj)
        elif isinstance(obj, BaseException):
            return {'exception_type': type(obj).__name__,
                    'message': str(obj)}
        return super().default(obj)


def dump(obj, fp, *, cls=JsonEncoderExt, **kwargs):
    json.dump(obj, fp, cls=cls, **kwargs)


def dumps(obj, *, cls=JsonEncoderExt, **kwargs):
    return json.dumps(obj, cls=cls, **kwargs)


def encode_body(obj):
    """Serialize a request payload to UTF-8 JSON bytes."""
    return dumps(obj, ensure_ascii=False).encode('utf-8')
