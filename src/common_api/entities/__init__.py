# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Built-in entities (country, category, dict_entry, social_network_account)."""

from .category import Category, CategoryInfo
from .country import Country, CountryInfo
from .dict_entry import DictEntry, DictEntryInfo
from .social_network_account import SocialNetwork, SocialNetworkAccount

__all__ = [
    "Category",
    "CategoryInfo",
    "Country",
    "CountryInfo",
    "DictEntry",
    "DictEntryInfo",
    "SocialNetwork",
    "SocialNetworkAccount",
]
