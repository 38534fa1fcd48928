"""Factory Boy definition for :class:`mediagate.models.Account`."""

from __future__ import annotations

import bcrypt
import factory

from mediagate.models import Account
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class AccountFactory(BaseFactory):
    """
    Build persisted :class:`mediagate.models.Account` instances.

    Notes
    -----
    - ``password`` is a post-generation hook storing a real bcrypt hash at a
      low work factor.
    """

    class Meta:
        model = Account

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"account{n}@example.com")
    username = factory.Sequence(lambda n: f"account{n}")
    full_name = factory.LazyAttribute(lambda o: o.username.capitalize())
    role = "user"
    password_hash = None  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Hash ``extracted`` (or the default password) into ``password_hash``."""
        value = extracted or DEFAULT_PASSWORD
        salt = bcrypt.gensalt(rounds=4)
        obj.password_hash = bcrypt.hashpw(value.encode("utf-8"), salt).decode("utf-8")
