from db.models import Flow
from db.repositories.base import BaseRepository


class FlowRepository(BaseRepository[Flow]):
    def __init__(self):
        super().__init__(model=Flow)
