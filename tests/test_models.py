import asyncio
import unittest

from userdata.activator import Activator
from userdata.database import begin_request_scope, end_request_scope, get_session, init_db
from userdata.models import DataTable

ANA = {"nombres": "Ana", "apellidos": "Pérez", "email": "ana@example.com", "imgUrl": ""}
LUIS = {"nombres": "Luis", "apellidos": "Gómez", "email": "luis@example.com", "imgUrl": "http://img/l.png"}


class DataTableTest(unittest.TestCase):
    def setUp(self):
        init_db("sqlite://")
        Activator.activate()

    def test_users_of_new_table(self):
        self.assertEqual(DataTable(nombre="t", data="[]").users, [])
        self.assertEqual(DataTable(nombre="t", data="").users, [])
        self.assertEqual(DataTable(nombre="t", data="{not json").users, [])
        self.assertEqual(DataTable(nombre="t", data='{"a": 1}').users, [])
        self.assertEqual(DataTable(nombre="t", data="[1]").users, [])
        self.assertEqual(DataTable(nombre="t", data='[1, "x", {"id": 2}]').users, [{"id": 2}])

    def test_add_user_skips_entries_that_are_not_records(self):
        table = DataTable(nombre="t", data="[1]")
        self.assertEqual(table.add_user(ANA), 1)
        self.assertEqual(table.users, [dict(ANA, id=1)])

        table = DataTable(nombre="t", data='[{"id": "x"}, {"id": 4}]')
        self.assertEqual(table.add_user(ANA), 5)

    def test_add_user_appends_exactly_one(self):
        table = DataTable(nombre="t", data="[]")
        self.assertEqual(table.add_user(ANA), 1)
        self.assertEqual(table.add_user(LUIS), 2)
        self.assertEqual([u["id"] for u in table.users], [1, 2])
        self.assertEqual(table.find_user(2)["nombres"], "Luis")

    def test_ids_are_not_reused_below_the_highest(self):
        table = DataTable(nombre="t", data="[]")
        table.add_user(ANA)
        table.add_user(LUIS)
        table.remove_user(1)
        self.assertEqual(table.add_user(ANA), 3)

    def test_update_replaces_exactly_one(self):
        table = DataTable(nombre="t", data="[]")
        table.add_user(ANA)
        table.add_user(LUIS)
        self.assertTrue(table.update_user(1, dict(ANA, email="ana@new.org")))
        self.assertEqual(len(table.users), 2)
        self.assertEqual(table.find_user(1)["email"], "ana@new.org")
        self.assertEqual(table.find_user(2), dict(LUIS, id=2))
        self.assertFalse(table.update_user(9, ANA))

    def test_remove_user(self):
        table = DataTable(nombre="t", data="[]")
        table.add_user(ANA)
        self.assertFalse(table.remove_user(5))
        self.assertTrue(table.remove_user(1))
        self.assertEqual(table.users, [])

    def test_persisted_round_trip(self):
        table = DataTable(nombre="Clientes", data="[]")
        table.add_user(ANA)
        table.save()

        loaded = DataTable.get(table.id)
        self.assertEqual(loaded.nombre, "Clientes")
        self.assertEqual(loaded.users, [dict(ANA, id=1)])

        loaded.add_user(LUIS)
        loaded.save()
        self.assertEqual(len(DataTable.get(table.id).users), 2)

        loaded.delete()
        self.assertIsNone(DataTable.get(table.id))

    def test_all_is_ordered_by_id(self):
        for name in ("b", "a", "c"):
            DataTable(nombre=name, data="[]").save()
        self.assertEqual([t.nombre for t in DataTable.all()], ["b", "a", "c"])


class SessionScopeTest(unittest.TestCase):
    def setUp(self):
        init_db("sqlite://")

    def test_each_request_scope_has_its_own_session(self):
        outer = get_session()
        first = begin_request_scope()
        try:
            inner = get_session()
            self.assertIsNot(inner, outer)
            self.assertIs(get_session(), inner)

            second = begin_request_scope()
            try:
                self.assertIsNot(get_session(), inner)
            finally:
                end_request_scope(second)
            self.assertIs(get_session(), inner)
        finally:
            end_request_scope(first)
        self.assertIs(get_session(), outer)

    def test_concurrent_requests_do_not_share_sessions(self):
        seen = []

        async def request():
            token = begin_request_scope()
            try:
                session = get_session()
                await asyncio.sleep(0)
                self.assertIs(get_session(), session)
                seen.append(session)
            finally:
                end_request_scope(token)

        async def main():
            await asyncio.gather(request(), request())

        asyncio.run(main())
        self.assertEqual(len(seen), 2)
        self.assertIsNot(seen[0], seen[1])


if __name__ == "__main__":
    unittest.main()
