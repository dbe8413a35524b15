from usecases import ProjectUsecase


def get_project_usecase() -> ProjectUsecase:
    """Get the project usecase.

    Returns:
        The project usecase.

    """
    return ProjectUsecase()
