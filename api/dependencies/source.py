from usecases import SourceUsecase


def get_source_usecase() -> SourceUsecase:
    """Get the source usecase.

    Returns:
        The source usecase.

    """
    return SourceUsecase()
