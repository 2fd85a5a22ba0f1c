import numpy as np
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from actionfinder.models.catalog import ActionRow, AppRow
from actionfinder.models.domain import NearestAction


async def save_app(session: AsyncSession, app: AppRow) -> AppRow:
    session.add(app)
    await session.flush()
    return app


async def save_action(session: AsyncSession, action: ActionRow) -> ActionRow:
    session.add(action)
    await session.flush()
    return action


async def count_apps(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(AppRow.id)))
    return result.scalar_one()


async def count_actions(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(ActionRow.id)))
    return result.scalar_one()


def nearest_action_query(embedding: np.ndarray | list[float], embedding_model: str) -> Select:
    """Actions joined to their app, ordered by cosine distance (pgvector `<=>`), closest only."""
    query_vector = np.asarray(embedding, dtype=np.float32).tolist()
    distance = ActionRow.embedding.cosine_distance(query_vector).label("distance")
    return (
        select(
            AppRow.id.label("app_id"),
            AppRow.name.label("app_name"),
            ActionRow.id.label("action_id"),
            ActionRow.name.label("action_name"),
            ActionRow.description.label("action_description"),
            distance,
        )
        .select_from(ActionRow)
        .join(AppRow, ActionRow.app_id == AppRow.id)
        .where(ActionRow.embedding_model == embedding_model)
        .order_by(distance)
        .limit(1)
    )


async def find_nearest_action(
    session: AsyncSession, embedding: np.ndarray | list[float], embedding_model: str
) -> NearestAction | None:
    result = await session.execute(nearest_action_query(embedding, embedding_model))
    row = result.first()
    if row is None:
        return None
    return NearestAction(
        app_id=row.app_id,
        app_name=row.app_name,
        action_id=row.action_id,
        action_name=row.action_name,
        action_description=row.action_description,
        distance=float(row.distance),
    )
