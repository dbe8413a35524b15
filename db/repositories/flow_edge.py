from db.models import FlowEdge
from db.repositories.base import BaseRepository


class FlowEdgeRepository(BaseRepository[FlowEdge]):
    def __init__(self):
        super().__init__(model=FlowEdge)
