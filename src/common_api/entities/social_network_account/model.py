# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Social network account models."""

from __future__ import annotations

from enum import Enum

from ...models import AuditedEntity


class SocialNetwork(str, Enum):
    WECHAT = "WECHAT"
    WEIBO = "WEIBO"
    QQ = "QQ"
    GITHUB = "GITHUB"
    GOOGLE = "GOOGLE"


class SocialNetworkAccount(AuditedEntity):
    """Binding of a user to an account (open ID) of a social network app."""

    user_id: int | str | None = None
    username: str | None = None
    social_network: SocialNetwork | None = None
    app_id: str | None = None
    open_id: str | None = None


__all__ = ["SocialNetwork", "SocialNetworkAccount"]
