from db.models import FlowEdge
from tests.factories.base import AsyncSQLAlchemyModelFactory


class FlowEdgeFactory(AsyncSQLAlchemyModelFactory):
    class Meta:
        model = FlowEdge

    flow_id = 1
    source_node_id = "node-0"
    target_node_id = "node-1"
