from flask import request

from classes.session_store import session_store


class RequestContext:
    """Everything a handler needs to know about the current request."""

    def __init__(self, method, body=None, query=None, identity=None):
        self.method = method.upper()
        self.body = body if isinstance(body, dict) else {}
        self.query = dict(query or {})
        self.identity = identity

    @classmethod
    def from_request(cls, store=None):
        store = store or session_store
        body = request.get_json(force=True, silent=True)
        return cls(
            method=request.method,
            body=body,
            query=request.args.to_dict(),
            identity=store.identity(),
        )

    def param(self, name, default=None):
        value = self.query.get(name)
        if value is None or value == "":
            return default
        return value

    def first_param(self, *names):
        """First non-empty value among `names`, checking the query string
        before the body."""
        for source in (self.query, self.body):
            for name in names:
                value = source.get(name)
                if value is not None and value != "":
                    return value
        return None

    def resource(self, default=None):
        value = self.param("resource", default)
        return value.lower() if isinstance(value, str) else value

    def __repr__(self):
        return f"<RequestContext {self.method} {self.query}>"
