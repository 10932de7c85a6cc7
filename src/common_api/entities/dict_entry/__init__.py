# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Dictionary entry entity."""

from .descriptor import DESCRIPTOR
from .model import DictEntry, DictEntryInfo

__all__ = ["DESCRIPTOR", "DictEntry", "DictEntryInfo"]
