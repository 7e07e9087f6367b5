import unittest

from userdata.routing import MethodNotAllowed, NotFound, Router


def view(req):
    return "ok"


def detail(req, table_id):
    return table_id


class RouterTest(unittest.TestCase):
    def setUp(self):
        self.router = Router()
        self.router.add_route("/tables", view)
        self.router.add_route("/tables/<int:table_id>", detail, ["GET", "POST"])

    def test_resolve_converts_params(self):
        handler, params = self.router.resolve("/tables/12", "POST")
        self.assertIs(handler, detail)
        self.assertEqual(params, {"table_id": 12})

    def test_not_found_and_method_not_allowed(self):
        with self.assertRaises(NotFound):
            self.router.resolve("/tables/abc", "GET")
        with self.assertRaises(MethodNotAllowed):
            self.router.resolve("/tables", "DELETE")

    def test_duplicate_endpoint(self):
        with self.assertRaises(ValueError):
            self.router.add_route("/other", view)

    def test_url_for(self):
        self.assertEqual(self.router.url_for("detail", table_id=3), "/tables/3")
        self.assertEqual(self.router.url_for("view", page="new_data"), "/tables?page=new_data")
        with self.assertRaises(ValueError):
            self.router.url_for("detail")
        with self.assertRaises(ValueError):
            self.router.url_for("missing")

    def test_remove_route(self):
        self.assertTrue(self.router.remove_route("detail"))
        with self.assertRaises(NotFound):
            self.router.resolve("/tables/12", "GET")
        self.assertFalse(self.router.remove_route("detail"))
        self.router.add_route("/tables/<int:table_id>", detail)
        self.assertEqual(self.router.resolve("/tables/4", "GET")[1], {"table_id": 4})


if __name__ == "__main__":
    unittest.main()
