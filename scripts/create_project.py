"""
Operator-only script (not an API endpoint): create a project and print its
API token. The token is stored hashed and cannot be shown again.

Usage:
    python -m scripts.create_project "My project"
"""

import argparse
import asyncio

from db.sessions import async_session
from schemas import ProjectResponse
from usecases import ProjectUsecase


async def create_project(name: str) -> tuple[ProjectResponse, str]:
    async with async_session() as session:
        return await ProjectUsecase().create_project(session=session, name=name)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create a project and issue its API token"
    )
    parser.add_argument("name", help="Project name")
    args = parser.parse_args(argv)

    project, token = asyncio.run(create_project(name=args.name))

    print(f"Project '{project.name}' created with id {project.id}")
    print(f"API token (shown once): {token}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
