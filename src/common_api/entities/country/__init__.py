# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Country entity."""

from .descriptor import DESCRIPTOR
from .model import Country, CountryInfo

__all__ = ["Country", "CountryInfo", "DESCRIPTOR"]
