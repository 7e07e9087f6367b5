# userdata/models.py
import json
import logging

from .config import TABLE_NAME
from .database import ModelBase, Column, Integer, String, Text

logger = logging.getLogger(__name__)


class DataTable(ModelBase):
    """
    A named table created from the admin panel.

    The users belonging to the table are not stored in their own SQL table:
    they live as a JSON array in the ``data`` column, one object per user with
    the keys ``id``, ``nombres``, ``apellidos``, ``email`` and ``imgUrl``.
    """
    __tablename__ = TABLE_NAME

    id = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(70), nullable=False)
    data = Column(Text, nullable=False, default="[]")

    def __repr__(self):
        return f"<DataTable {self.id} {self.nombre!r}>"

    @property
    def users(self):
        """
        The decoded list of user records. Bad or empty data reads as no users,
        and entries that are not JSON objects are skipped.
        """
        if not self.data:
            return []
        try:
            users = json.loads(self.data)
        except ValueError:
            logger.warning("Table %s holds undecodable data, treating it as empty", self.id)
            return []
        if not isinstance(users, list):
            return []
        return [u for u in users if isinstance(u, dict)]

    def _set_users(self, users):
        self.data = json.dumps(users)

    def find_user(self, user_id):
        for user in self.users:
            if user.get("id") == user_id:
                return user
        return None

    def add_user(self, fields):
        """Appends a new user record and returns its id. Does not save."""
        users = self.users
        user_id = max((u["id"] for u in users if isinstance(u.get("id"), int)), default=0) + 1
        record = {"id": user_id}
        record.update(fields)
        users.append(record)
        self._set_users(users)
        return user_id

    def update_user(self, user_id, fields):
        """Replaces the fields of one user. Returns False if there is no such user."""
        users = self.users
        for i, user in enumerate(users):
            if user.get("id") == user_id:
                record = {"id": user_id}
                record.update(fields)
                users[i] = record
                self._set_users(users)
                return True
        return False

    def remove_user(self, user_id):
        """Removes one user. Returns False if there is no such user."""
        users = self.users
        remaining = [u for u in users if u.get("id") != user_id]
        if len(remaining) == len(users):
            return False
        self._set_users(remaining)
        return True
