# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Social network account entity."""

from .descriptor import DESCRIPTOR
from .model import SocialNetwork, SocialNetworkAccount

__all__ = ["DESCRIPTOR", "SocialNetwork", "SocialNetworkAccount"]
