from utils.errors import MethodNotAllowed, ValidationError


class ResourceRouter:
    """Flat dispatch table keyed by (resource, method).

    An entry may carry a second handler that is used instead when one of its
    id parameters is present on the request, e.g. `GET ?id=3` versus `GET`.
    """

    def __init__(self, name):
        self.name = name
        self._routes = {}
        self._resources = []

    def register(self, resource, method, handler, by_id=None, id_params=("id",)):
        if resource not in self._resources:
            self._resources.append(resource)
        self._routes[(resource, method.upper())] = (handler, by_id, tuple(id_params))

    @property
    def resources(self):
        return list(self._resources)

    def dispatch(self, resource, ctx):
        if resource not in self._resources:
            valid = "', '".join(self._resources)
            raise ValidationError(f"Invalid resource. Use '{valid}'")

        route = self._routes.get((resource, ctx.method))
        if route is None:
            raise MethodNotAllowed(f"Method not allowed for {resource} resource")

        handler, by_id, id_params = route
        if by_id is not None:
            key = _query_value(ctx, id_params)
            if key is not None:
                return by_id(ctx, key)
        return handler(ctx)


def _query_value(ctx, names):
    for name in names:
        value = ctx.param(name)
        if value is not None:
            return value
    return None
