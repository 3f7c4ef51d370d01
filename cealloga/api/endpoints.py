"""Service endpoint paths, relative to the client host."""

from __future__ import annotations

from types import MappingProxyType

ENDPOINTS = MappingProxyType(
    {
        "cealloga_dev": "/cealloga/_test",
        "cealloga_prod": "/cealloga",
        "code_list": "/code",
        "code_publish": "/code/publish",
        "code_record": "/code",
        "code_unpublish": "/code/unpublish",
        "code_validate": "/code/validate",
    }
)
