from db.models import FlowNode
from db.repositories.base import BaseRepository


class FlowNodeRepository(BaseRepository[FlowNode]):
    def __init__(self):
        super().__init__(model=FlowNode)
