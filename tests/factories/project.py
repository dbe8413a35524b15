from factory.declarations import LazyAttribute

from db.models import Project
from tests.factories.base import AsyncSQLAlchemyModelFactory, fake
from utils import hash_token


class ProjectFactory(AsyncSQLAlchemyModelFactory):
    class Meta:
        model = Project

    name = LazyAttribute(lambda obj: fake.company())
    api_token_hash = LazyAttribute(lambda obj: hash_token(token=fake.uuid4()))
    is_active = True
