from collections.abc import Iterable
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

Model = TypeVar("Model", bound=Any)


class BaseRepository(Generic[Model]):
    def __init__(self, model: Type[Model]):
        self.model = model

    async def create(self, session: AsyncSession, data: dict[str, Any]) -> Model:
        """Create a new model instance.

        Args:
            session: The async session.
            data: The data to create the model instance.

        Returns:
            The created model instance.

        """
        instance = self.model(**data)

        session.add(instance=instance)
        await session.commit()
        await session.refresh(instance)

        return instance

    async def create_many(
        self, session: AsyncSession, data: list[dict[str, Any]]
    ) -> list[Model]:
        """Create multiple model instances in one transaction.

        Args:
            session: The async session.
            data: The list of data to create model instances.

        Returns:
            The list of created model instances.

        """
        instances = [self.model(**item) for item in data]
        session.add_all(instances)
        await session.commit()

        for instance in instances:
            await session.refresh(instance)

        return instances

    async def get_all(self, session: AsyncSession, **filters) -> list[Model]:
        """Get all model instances in insertion order.

        Args:
            session: The async session.
            **filters: The filters to apply to the query.

        Returns:
            The list of model instances.

        """
        result = await session.execute(
            statement=select(self.model).filter_by(**filters).order_by(self.model.id)
        )

        return list(result.scalars().all())

    async def get_all_in(
        self,
        session: AsyncSession,
        column: str,
        values: Iterable[Any],
        **filters,
    ) -> list[Model]:
        """Get all model instances whose column value is one of `values`.

        Args:
            session: The async session.
            column: The column name to match.
            values: The accepted column values.
            **filters: Extra equality filters.

        Returns:
            The list of model instances in insertion order.

        """
        values = list(values)
        if not values:
            return []

        result = await session.execute(
            statement=select(self.model)
            .filter_by(**filters)
            .where(getattr(self.model, column).in_(values))
            .order_by(self.model.id)
        )

        return list(result.scalars().all())

    async def get_by(self, session: AsyncSession, **filters) -> Model | None:
        """Get a model instance by filters.

        Args:
            session: The async session.
            **filters: The filters to apply to the query.

        Returns:
            The model instance.

        """
        result = await session.execute(
            statement=select(self.model).filter_by(**filters)
        )
        return result.scalar_one_or_none()

    async def update_by(
        self, session: AsyncSession, data: dict[str, Any], **filters
    ) -> Model | None:
        """Update a model instance by filters.

        Args:
            session: The async session.
            data: The data to update the model instance.
            **filters: The filters to apply to the query.

        Returns:
            The updated model instance, None when nothing matched.

        """
        instance = await self.get_by(session=session, **filters)

        if instance:
            for key, value in data.items():
                setattr(instance, key, value)

            await session.commit()
            await session.refresh(instance=instance)

        return instance

    async def delete_all(self, session: AsyncSession, **filters) -> None:
        """Delete all model instances by filters.

        Args:
            session: The async session.
            **filters: The filters to apply to the query.

        """
        for instance in await self.get_all(session=session, **filters):
            await session.delete(instance=instance)

        await session.commit()

    async def get_count(self, session: AsyncSession, **filters) -> int:
        """Get the count of model instances by filters.

        Args:
            session: The async session.
            **filters: The filters to apply to the query.

        Returns:
            The count of model instances.

        """
        result = await session.execute(
            statement=select(func.count()).select_from(self.model).filter_by(**filters)
        )
        return result.scalar() or 0
