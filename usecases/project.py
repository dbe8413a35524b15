from sqlalchemy.ext.asyncio import AsyncSession

from db.repositories import ProjectRepository
from exceptions import AuthenticationError, AuthorizationError
from schemas import ProjectResponse
from utils import generate_token, hash_token


class ProjectUsecase:
    def __init__(self):
        self._project_repository = ProjectRepository()

    async def authenticate(self, session: AsyncSession, token: str) -> ProjectResponse:
        """Resolve the project owning an API token.

        Args:
            session: The async session.
            token: The bearer token.

        Returns:
            The project response.

        Raises:
            AuthenticationError: If the token is unknown.
            AuthorizationError: If the project is disabled.

        """
        project = await self._project_repository.get_by(
            session=session, api_token_hash=hash_token(token=token)
        )
        if not project:
            raise AuthenticationError

        if not project.is_active:
            raise AuthorizationError

        return ProjectResponse.model_validate(project)

    async def create_project(
        self, session: AsyncSession, name: str
    ) -> tuple[ProjectResponse, str]:
        """Provision a project and its API token.

        Args:
            session: The async session.
            name: The project name.

        Returns:
            The project response and the plain token, shown only once.

        """
        token = generate_token()
        project = await self._project_repository.create(
            session=session,
            data={"name": name, "api_token_hash": hash_token(token=token)},
        )

        return ProjectResponse.model_validate(project), token
