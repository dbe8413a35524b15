from usecases import FlowUsecase


def get_flow_usecase() -> FlowUsecase:
    """Get the flow usecase.

    Returns:
        The flow usecase.

    """
    return FlowUsecase()
