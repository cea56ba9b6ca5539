"""Read access to push device tokens."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import DeviceToken
from app.infrastructure.models import DeviceTokenModel
from app.utils import ensure_app_timezone


class DeviceTokenRepository:
    """Query and prune :class:`DeviceToken` records.

    Tokens are registered by the client application; this service only reads
    them and optionally removes the ones the provider rejects.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(self, user_id: str) -> Sequence[DeviceToken]:
        query = (
            self.session.query(DeviceTokenModel)
            .filter(DeviceTokenModel.user_id == user_id)
            .order_by(DeviceTokenModel.created_at.desc(), DeviceTokenModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def delete_tokens(self, user_id: str, tokens: Iterable[str]) -> int:
        values = [token for token in tokens if token]
        if not values:
            return 0
        deleted = (
            self.session.query(DeviceTokenModel)
            .filter(
                DeviceTokenModel.user_id == user_id,
                DeviceTokenModel.token.in_(values),
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    @staticmethod
    def _to_entity(model: DeviceTokenModel) -> DeviceToken:
        return DeviceToken(
            id=model.id,
            user_id=model.user_id,
            token=model.token,
            device_info=dict(model.device_info or {}),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["DeviceTokenRepository"]
