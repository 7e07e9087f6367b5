"""
The host's hook API.

Actions and filters are callbacks attached to a named hook and run in
priority order (lower first, ties in registration order). Shortcodes are
``[tag attr="value"]`` markers inside content, expanded by a callback.
"""
import logging
import re
from collections import defaultdict

logger = logging.getLogger(__name__)

SHORTCODE_RE = re.compile(r"\[(\w[\w-]*)((?:\s+[^\]]*)?)\]")
ATTR_RE = re.compile(r"""([\w-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|(\S+))""")


class Hook:
    __slots__ = ("callback", "priority", "accepted_args")

    def __init__(self, callback, priority, accepted_args):
        self.callback = callback
        self.priority = priority
        self.accepted_args = accepted_args

    def __call__(self, *args):
        return self.callback(*args[:self.accepted_args])


def parse_shortcode_attrs(text):
    attrs = {}
    for name, dq, sq, bare in ATTR_RE.findall(text or ""):
        attrs[name.lower()] = dq or sq or bare
    return attrs


class HookRegistry:
    def __init__(self):
        self._actions = defaultdict(list)
        self._filters = defaultdict(list)
        self._shortcodes = {}

    @staticmethod
    def _insert(hooks, hook):
        idx = len(hooks)
        for i, existing in enumerate(hooks):
            if existing.priority > hook.priority:
                idx = i
                break
        hooks.insert(idx, hook)

    def add_action(self, name, callback, priority=10, accepted_args=1):
        self._insert(self._actions[name], Hook(callback, priority, accepted_args))
        logger.debug("Added action '%s' with priority %s", name, priority)

    def add_filter(self, name, callback, priority=10, accepted_args=1):
        self._insert(self._filters[name], Hook(callback, priority, accepted_args))
        logger.debug("Added filter '%s' with priority %s", name, priority)

    def add_shortcode(self, tag, callback):
        self._shortcodes[tag] = callback
        logger.debug("Added shortcode [%s]", tag)

    def has_action(self, name):
        return bool(self._actions.get(name))

    def has_filter(self, name):
        return bool(self._filters.get(name))

    def shortcode_exists(self, tag):
        return tag in self._shortcodes

    def remove_action(self, name, callback):
        hooks = self._actions.get(name, [])
        before = len(hooks)
        hooks[:] = [h for h in hooks if h.callback != callback]
        return len(hooks) != before

    def remove_filter(self, name, callback):
        hooks = self._filters.get(name, [])
        before = len(hooks)
        hooks[:] = [h for h in hooks if h.callback != callback]
        return len(hooks) != before

    def remove_shortcode(self, tag):
        return self._shortcodes.pop(tag, None) is not None

    def do_action(self, name, *args):
        """Runs every callback attached to ``name`` and returns the last non-None result."""
        result = None
        for hook in list(self._actions.get(name, [])):
            value = hook(*args)
            if value is not None:
                result = value
        return result

    def apply_filters(self, name, value, *args):
        for hook in list(self._filters.get(name, [])):
            value = hook(value, *args)
        return value

    def do_shortcode(self, content):
        if not self._shortcodes or "[" not in content:
            return content

        def expand(match):
            tag = match.group(1)
            callback = self._shortcodes.get(tag)
            if callback is None:
                return match.group(0)
            output = callback(parse_shortcode_attrs(match.group(2)), "", tag)
            return "" if output is None else str(output)

        return SHORTCODE_RE.sub(expand, content)
