"""PostgreSQL implementation of INotificationRepository."""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import UserId
from notifications.domain import Notification, NotificationId
from notifications.infrastructure.models import NotificationModel
from notifications.ports.repositories import INotificationRepository


class NotificationRepository(INotificationRepository):
    """PostgreSQL-backed repository for notifications."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, notification: Notification) -> None:
        self._session.add(
            NotificationModel(
                id=notification.id.value,
                user_id=notification.user_id.value,
                message=notification.message,
                is_sent=notification.is_sent,
                created_at=notification.created_at,
            )
        )
        await self._session.flush()

    async def list_by_user(self, user_id: UserId) -> list[Notification]:
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id.value)
            .order_by(NotificationModel.created_at, NotificationModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def delete_all_by_user(self, user_id: UserId) -> int:
        stmt = (
            delete(NotificationModel)
            .where(NotificationModel.user_id == user_id.value)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def mark_sent(self, notification_id: NotificationId) -> Notification | None:
        stmt = (
            update(NotificationModel)
            .where(NotificationModel.id == notification_id.value)
            .values(is_sent=True)
            .returning(NotificationModel)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: NotificationModel) -> Notification:
        return Notification(
            id=NotificationId(value=model.id),
            user_id=UserId(value=model.user_id),
            message=model.message,
            created_at=model.created_at,
            is_sent=model.is_sent,
        )
