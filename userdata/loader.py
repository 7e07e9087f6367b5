class Loader:
    """
    Collects every action, filter and shortcode the plugin needs and registers
    them with the host in one go.

    Nothing reaches the host until :meth:`run` is called; until then the
    registrations are only recorded, in the order they were added.

    Attributes:
        actions (list): Pending action registrations.
        filters (list): Pending filter registrations.
        shortcodes (list): Pending shortcode registrations.
    """

    def __init__(self):
        self.actions = []
        self.filters = []
        self.shortcodes = []

    def add_action(self, hook, component, callback, priority=10, accepted_args=1):
        """
        Queues an action.

        Args:
            hook (str): The name of the action being registered.
            component (object): The instance the callback method is defined on.
            callback (str): The name of the method on ``component``.
            priority (int, optional): Lower runs first. Defaults to 10.
            accepted_args (int, optional): How many arguments the callback
                                           receives. Defaults to 1.
        """
        self.actions = self._add(self.actions, hook, component, callback, priority, accepted_args)

    def add_filter(self, hook, component, callback, priority=10, accepted_args=1):
        """
        Queues a filter. Arguments are the same as for :meth:`add_action`.
        """
        self.filters = self._add(self.filters, hook, component, callback, priority, accepted_args)

    def add_shortcode(self, tag, component, callback):
        """
        Queues a shortcode.

        Args:
            tag (str): The shortcode tag, as written between brackets.
            component (object): The instance the callback method is defined on.
            callback (str): The name of the method on ``component``.
        """
        self.shortcodes.append({
            "tag": tag,
            "component": component,
            "callback": callback,
        })

    @staticmethod
    def _add(hooks, hook, component, callback, priority, accepted_args):
        hooks.append({
            "hook": hook,
            "component": component,
            "callback": callback,
            "priority": priority,
            "accepted_args": accepted_args,
        })
        return hooks

    def run(self, host):
        """
        Registers the queued actions, filters and shortcodes with ``host``.

        Args:
            host: Any object exposing ``add_action``, ``add_filter`` and
                  ``add_shortcode`` (normally a :class:`~userdata.hooks.HookRegistry`).
        """
        for item in self.actions:
            host.add_action(item["hook"], getattr(item["component"], item["callback"]),
                            item["priority"], item["accepted_args"])

        for item in self.filters:
            host.add_filter(item["hook"], getattr(item["component"], item["callback"]),
                            item["priority"], item["accepted_args"])

        for item in self.shortcodes:
            host.add_shortcode(item["tag"], getattr(item["component"], item["callback"]))

    def remove(self, host):
        """
        Takes back from ``host`` everything :meth:`run` registered. Hooks
        added to ``host`` by anyone else are left in place.
        """
        for item in self.actions:
            host.remove_action(item["hook"], getattr(item["component"], item["callback"]))

        for item in self.filters:
            host.remove_filter(item["hook"], getattr(item["component"], item["callback"]))

        for item in self.shortcodes:
            host.remove_shortcode(item["tag"])
