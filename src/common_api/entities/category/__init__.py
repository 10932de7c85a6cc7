# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Category entity."""

from .descriptor import DESCRIPTOR
from .model import Category, CategoryInfo

__all__ = ["Category", "CategoryInfo", "DESCRIPTOR"]
