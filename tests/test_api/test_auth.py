from http import HTTPStatus

import pytest

from db.repositories import ProjectRepository
from tests.base import BaseTestCase


class TestBearerAuth(BaseTestCase):
    url = "/source"

    @pytest.mark.asyncio
    async def test_ok(self):
        response = await self.client.get(url=self.url)

        await self.assert_response_ok(response=response)

    @pytest.mark.asyncio
    async def test_missing_token(self):
        self.client.headers.pop("Authorization")

        response = await self.client.get(url=self.url)

        await self.assert_response_error(
            response=response, status_code=HTTPStatus.UNAUTHORIZED
        )

    @pytest.mark.asyncio
    async def test_unknown_token(self):
        response = await self.client.get(
            url=self.url, headers={"Authorization": "Bearer grlm_unknown"}
        )

        await self.assert_response_error(
            response=response, status_code=HTTPStatus.UNAUTHORIZED
        )

    @pytest.mark.asyncio
    async def test_inactive_project(self):
        await ProjectRepository().update_by(
            session=self.session, data={"is_active": False}, id=self.project.id
        )

        response = await self.client.get(url=self.url)

        await self.assert_response_error(
            response=response, status_code=HTTPStatus.FORBIDDEN
        )

    @pytest.mark.asyncio
    async def test_token_is_stored_hashed(self):
        project = await ProjectRepository().get_by(
            session=self.session, id=self.project.id
        )

        assert self.token.startswith("grlm_")
        assert project.api_token_hash != self.token
        assert len(project.api_token_hash) == 64
