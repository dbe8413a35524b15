from usecases.flow import FlowUsecase
from usecases.health import HealthUsecase
from usecases.project import ProjectUsecase
from usecases.propagation import DependencyPropagator
from usecases.source import SourceUsecase

__all__ = [
    "DependencyPropagator",
    "FlowUsecase",
    "HealthUsecase",
    "ProjectUsecase",
    "SourceUsecase",
]
