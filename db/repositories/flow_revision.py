from db.models import FlowRevision
from db.repositories.base import BaseRepository


class FlowRevisionRepository(BaseRepository[FlowRevision]):
    def __init__(self):
        super().__init__(model=FlowRevision)
