# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Test support: an in-memory server speaking the entity REST conventions.

Requires the ``testing`` extra (fastapi, python-multipart, uvicorn).
"""
