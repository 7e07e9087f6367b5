import re
from urllib.parse import urlencode


class NotFound(Exception):
    """No route matches the path."""
    pass


class MethodNotAllowed(Exception):
    """A route matches the path but not the request method."""
    pass


# <type:name> placeholders: type -> (converter, pattern)
CONVERTERS = {
    'str': (str, r'[^/]+'),
    'int': (int, r'\d+'),
}
PLACEHOLDER_RE = re.compile(r"<(\w+):(\w+)>")


class Route:
    def __init__(self, path, handler, methods, endpoint):
        self.path = path
        self.handler = handler
        self.methods = methods
        self.endpoint = endpoint
        self.converters = {}

        def placeholder(match):
            type_name, name = match.groups()
            converter, pattern = CONVERTERS.get(type_name, CONVERTERS['str'])
            self.converters[name] = converter
            return f"(?P<{name}>{pattern})"

        self.regex = re.compile("^" + PLACEHOLDER_RE.sub(placeholder, path) + "$")

    def match(self, path):
        """The converted path parameters, or None if ``path`` is not this route's."""
        match = self.regex.match(path)
        if match is None:
            return None
        return {name: self.converters[name](value) for name, value in match.groupdict().items()}

    def build(self, params):
        def placeholder(match):
            name = match.group(2)
            if name not in params:
                raise ValueError(f"Missing parameter '{name}' for endpoint '{self.endpoint}'.")
            return str(params.pop(name))

        path = PLACEHOLDER_RE.sub(placeholder, self.path)
        return f"{path}?{urlencode(params)}" if params else path


class Router:
    """Maps paths to handlers, and endpoint names back to paths."""

    def __init__(self):
        self.routes = {}

    def add_route(self, path, handler, methods=None, endpoint=None):
        endpoint = endpoint or handler.__name__
        if endpoint in self.routes:
            raise ValueError(f"Endpoint \"{endpoint}\" is already registered.")
        self.routes[endpoint] = Route(path, handler, methods or ["GET"], endpoint)

    def remove_route(self, endpoint):
        """Unregisters ``endpoint``. Returns False if it was not registered."""
        return self.routes.pop(endpoint, None) is not None

    def resolve(self, path, method):
        """
        The handler and parameters for ``path`` and ``method``.

        Raises:
            NotFound: no route matches ``path``.
            MethodNotAllowed: a route matches but not for ``method``.
        """
        path_matched = False
        for route in self.routes.values():
            params = route.match(path)
            if params is None:
                continue
            if method in route.methods:
                return route.handler, params
            path_matched = True
        if path_matched:
            raise MethodNotAllowed(f"Method {method} not allowed for {path}")
        raise NotFound(f"No route for {path}")

    def url_for(self, endpoint, **params):
        """The path of ``endpoint``; parameters the path does not use go in the query string."""
        if endpoint not in self.routes:
            raise ValueError(f"No route found for endpoint '{endpoint}'.")
        return self.routes[endpoint].build(params)
