"""Shared fixtures: a small blog schema in native form and a store seeded with it."""

from __future__ import annotations

from typing import Any

import pytest

from content_bridge.core.native import NativeAsset, NativeDocument, NativeSchemaModel
from content_bridge.core.types import ModelDescriptor
from content_bridge.infra.memory import InMemoryContentStore
from content_bridge.source import ContentSource
from content_bridge.translation import build_model_map, translate_models


@pytest.fixture
def blog_data() -> dict[str, Any]:
    return {
        "models": [
            {
                "name": "post",
                "fields": [
                    {"name": "title", "type": "string"},
                    {"name": "slug", "type": "slug"},
                    {"name": "content", "type": "markdown"},
                    {"name": "date", "type": "date"},
                    {"name": "image", "type": "image"},
                    {"name": "author", "type": "reference", "allowedTypes": ["person"]},
                ],
            },
            {
                "name": "person",
                "fields": [
                    {"name": "name", "type": "string"},
                    {"name": "bio", "type": "text"},
                ],
            },
        ],
        "documents": [
            {
                "id": "p1",
                "type": "post",
                "status": "draft",
                "createdAt": "2023-01-01T10:00:00Z",
                "updatedAt": "2023-01-02T10:00:00Z",
                "fields": {
                    "title": "Hi",
                    "slug": "hi",
                    "content": "# Hello",
                    "image": "a1",
                    "author": "u1",
                },
            },
            {
                "id": "u1",
                "type": "person",
                "status": "published",
                "createdAt": "2023-01-01T10:00:00Z",
                "updatedAt": "2023-01-01T10:00:00Z",
                "fields": {"name": "Ada", "bio": "Writes things."},
            },
        ],
        "assets": [
            {
                "id": "a1",
                "url": "/images/cover.png",
                "title": "Cover",
                "width": 640,
                "height": 480,
                "createdAt": "2023-01-01T09:00:00Z",
                "updatedAt": "2023-01-01T09:00:00Z",
            }
        ],
    }


@pytest.fixture
def native_models(blog_data: dict[str, Any]) -> list[NativeSchemaModel]:
    return [NativeSchemaModel.model_validate(item) for item in blog_data["models"]]


@pytest.fixture
def native_documents(blog_data: dict[str, Any]) -> list[NativeDocument]:
    return [NativeDocument.model_validate(item) for item in blog_data["documents"]]


@pytest.fixture
def native_assets(blog_data: dict[str, Any]) -> list[NativeAsset]:
    return [NativeAsset.model_validate(item) for item in blog_data["assets"]]


@pytest.fixture
def model_map(native_models: list[NativeSchemaModel]) -> dict[str, ModelDescriptor]:
    return build_model_map(translate_models(native_models))


@pytest.fixture
def store(blog_data: dict[str, Any]) -> InMemoryContentStore:
    return InMemoryContentStore.from_data(blog_data)


@pytest.fixture
def source(store: InMemoryContentStore) -> ContentSource:
    return ContentSource(project_id="example", store=store)
