from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import db, project
from exceptions import AuthenticationError
from schemas import ProjectResponse
from usecases import ProjectUsecase

bearer_scheme = HTTPBearer(auto_error=False)


async def get_project(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(dependency=bearer_scheme)
    ],
    session: Annotated[AsyncSession, Depends(dependency=db.get_session)],
    usecase: Annotated[
        ProjectUsecase, Depends(dependency=project.get_project_usecase)
    ],
) -> ProjectResponse:
    """Resolve the project of the request from its bearer token.

    Raises:
        AuthenticationError: If the Authorization header is missing.

    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError

    return await usecase.authenticate(session=session, token=credentials.credentials)
