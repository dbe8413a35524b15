from factory.declarations import LazyAttribute

from db.models import Source
from enums import FileSource, PartitionMethod, SourceStatus
from tests.factories.base import AsyncSQLAlchemyModelFactory, fake


class SourceFactory(AsyncSQLAlchemyModelFactory):
    class Meta:
        model = Source

    project_id = 1
    file_name = LazyAttribute(lambda obj: f"{fake.unique.slug()}.{obj.file_type}")
    file_type = "pdf"
    file_source = FileSource.LOCAL
    file_size = LazyAttribute(lambda obj: fake.pyint(min_value=1, max_value=4096))
    partition_method = PartitionMethod.BASIC
    status = SourceStatus.COMPLETED
    message = "Source processed"
    version = 1
