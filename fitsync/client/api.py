# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from .session_client import PROFILE_PATH, SessionClient

_COLLECTIONS = ("exercises", "meals", "events")


class FitSyncApi:
    """Convenience calls for profile and record endpoints over a SessionClient."""

    def __init__(self, session: SessionClient) -> None:
        self._session = session

    async def get_profile(self) -> dict[str, Any]:
        return await self._session.request("GET", PROFILE_PATH)

    async def update_profile(self, name: str) -> dict[str, Any]:
        profile = await self._session.request(
            "PUT", PROFILE_PATH, json={"name": name}, retry=False
        )
        await self._session.refresh_user({"name": profile.get("name", name)})
        return profile

    async def change_password(self, current_password: str, new_password: str) -> dict[str, Any]:
        """Change the password and adopt the fresh token the server hands back."""

        body = await self._session.request(
            "POST",
            "/api/users/password",
            json={"currentPassword": current_password, "newPassword": new_password},
            retry=False,
        )
        await self._session.adopt_token(body["token"], body["user"])
        return body["user"]

    async def list_records(self, collection: str) -> list[dict[str, Any]]:
        return await self._session.request("GET", _path(collection))

    async def create_record(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        return await self._session.request("POST", _path(collection), json=record, retry=False)

    async def update_record(
        self, collection: str, record_id: int, changes: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._session.request("PUT", _path(collection, record_id), json=changes)

    async def delete_record(self, collection: str, record_id: int) -> None:
        await self._session.request("DELETE", _path(collection, record_id))

    async def exercises(self) -> list[dict[str, Any]]:
        return await self.list_records("exercises")

    async def meals(self) -> list[dict[str, Any]]:
        return await self.list_records("meals")

    async def events(self) -> list[dict[str, Any]]:
        return await self.list_records("events")


def _path(collection: str, record_id: int | None = None) -> str:
    if collection not in _COLLECTIONS:
        raise ValueError(f"unknown collection {collection!r}, expected one of {_COLLECTIONS}")
    if record_id is None:
        return f"/api/{collection}"
    return f"/api/{collection}/{int(record_id)}"


__all__ = ["FitSyncApi"]
