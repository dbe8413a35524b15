from factory.declarations import LazyAttribute

from db.models import SourceFile
from tests.factories.base import AsyncSQLAlchemyModelFactory, fake


class SourceFileFactory(AsyncSQLAlchemyModelFactory):
    class Meta:
        model = SourceFile

    source_id = 1
    content_type = "application/pdf"
    content = LazyAttribute(lambda _: fake.binary(length=64))
