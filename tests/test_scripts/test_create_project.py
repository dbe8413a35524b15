from unittest import mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from schemas import ProjectResponse
from scripts.create_project import create_project, main
from usecases import ProjectUsecase


class TestCreateProject:
    @pytest.mark.asyncio
    async def test_token_authenticates(self, test_session: AsyncSession):
        context_manager = mock.AsyncMock()
        context_manager.__aenter__.return_value = test_session
        context_manager.__aexit__.return_value = None

        with mock.patch(
            "scripts.create_project.async_session",
            mock.Mock(return_value=context_manager),
        ):
            project, token = await create_project(name="Operations")

        authenticated = await ProjectUsecase().authenticate(
            session=test_session, token=token
        )
        assert authenticated.id == project.id
        assert authenticated.name == "Operations"

    def test_main_prints_token(self, capsys: pytest.CaptureFixture[str]):
        project = ProjectResponse(id=5, name="Operations")

        with mock.patch(
            "scripts.create_project.create_project",
            new_callable=mock.AsyncMock,
            return_value=(project, "secret-token"),
        ) as create:
            assert main(argv=["Operations"]) == 0

        create.assert_awaited_once_with(name="Operations")
        output = capsys.readouterr().out
        assert "created with id 5" in output
        assert "secret-token" in output
