from factory.declarations import LazyAttribute, Sequence

from db.models import SourceChunk
from tests.factories.base import AsyncSQLAlchemyModelFactory, fake


class SourceChunkFactory(AsyncSQLAlchemyModelFactory):
    class Meta:
        model = SourceChunk

    source_id = 1
    position = Sequence(lambda n: n)
    text = LazyAttribute(lambda _: fake.sentence())
    page = 1
