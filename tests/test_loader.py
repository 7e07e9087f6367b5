import unittest

from userdata.hooks import HookRegistry
from userdata.loader import Loader


class Component:
    def __init__(self):
        self.calls = []

    def first(self, *args):
        self.calls.append(("first", args))

    def second(self, *args):
        self.calls.append(("second", args))

    def shout(self, value):
        return value.upper()

    def badge(self, attrs, content, tag):
        return f"<b>{attrs.get('label', '')}</b>"


class RecordingHost:
    def __init__(self):
        self.registered = []

    def add_action(self, name, callback, priority, accepted_args):
        self.registered.append(("action", name, callback, priority, accepted_args))

    def add_filter(self, name, callback, priority, accepted_args):
        self.registered.append(("filter", name, callback, priority, accepted_args))

    def add_shortcode(self, tag, callback):
        self.registered.append(("shortcode", tag, callback))


class LoaderTest(unittest.TestCase):
    def test_nothing_registered_before_run(self):
        loader = Loader()
        component = Component()
        host = HookRegistry()
        loader.add_action("init", component, "first")
        loader.add_filter("title", component, "shout")
        loader.add_shortcode("badge", component, "badge")

        self.assertFalse(host.has_action("init"))
        self.assertFalse(host.has_filter("title"))
        self.assertEqual(len(loader.actions), 1)
        self.assertEqual(len(loader.filters), 1)
        self.assertEqual(len(loader.shortcodes), 1)

        loader.run(host)
        self.assertTrue(host.has_action("init"))
        self.assertTrue(host.has_filter("title"))
        self.assertTrue(host.shortcode_exists("badge"))

    def test_run_forwards_in_order_with_defaults(self):
        loader = Loader()
        component = Component()
        loader.add_action("init", component, "first")
        loader.add_action("init", component, "second", 5, 2)
        loader.add_filter("title", component, "shout", 20)
        loader.add_shortcode("badge", component, "badge")

        host = RecordingHost()
        loader.run(host)

        kinds = [(r[0], r[1]) for r in host.registered]
        self.assertEqual(kinds, [
            ("action", "init"), ("action", "init"), ("filter", "title"), ("shortcode", "badge"),
        ])
        self.assertEqual(host.registered[0][3:], (10, 1))
        self.assertEqual(host.registered[1][3:], (5, 2))
        self.assertEqual(host.registered[2][3:], (20, 1))
        self.assertEqual(host.registered[0][2], component.first)

    def test_registered_callbacks_run_against_host(self):
        loader = Loader()
        component = Component()
        loader.add_action("init", component, "first")
        loader.add_action("init", component, "second", 5, 2)
        loader.add_filter("title", component, "shout")
        loader.add_shortcode("badge", component, "badge")

        host = HookRegistry()
        loader.run(host)

        host.do_action("init", "a", "b", "c")
        self.assertEqual(component.calls, [("second", ("a", "b")), ("first", ("a",))])
        self.assertEqual(host.apply_filters("title", "hello"), "HELLO")
        self.assertEqual(host.do_shortcode('x [badge label="new"] y'), "x <b>new</b> y")

    def test_remove_takes_back_only_its_own_hooks(self):
        loader = Loader()
        component = Component()
        loader.add_action("init", component, "first")
        loader.add_filter("title", component, "shout")
        loader.add_shortcode("badge", component, "badge")

        host = HookRegistry()
        foreign = []
        host.add_action("init", lambda *args: foreign.append(args))
        loader.run(host)
        loader.remove(host)

        host.do_action("init", "a")
        self.assertEqual(component.calls, [])
        self.assertEqual(foreign, [("a",)])
        self.assertFalse(host.has_filter("title"))
        self.assertFalse(host.shortcode_exists("badge"))


if __name__ == "__main__":
    unittest.main()
