"""The content source the editing host talks to.

``ContentSource`` is a thin composition: it reads and writes through a
``ContentStore`` and converts everything with the translation functions. It
keeps no documents, assets or models between calls; the host passes its
current model map into every call that needs one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from content_bridge.core.config import BridgeSettings
from content_bridge.core.exceptions import MissingConfigurationError, UnsupportedUploadError
from content_bridge.core.logging import configure_logging, get_logger
from content_bridge.core.ports import ContentStore, WatchOptions, WebhookStore
from content_bridge.core.types import (
    AccessStatus,
    Asset,
    Document,
    DocumentValidationError,
    FilesChangeResult,
    Locale,
    ModelDescriptor,
    ModelMap,
    UpdateOperation,
    UpdateOperationField,
)
from content_bridge.observer import ChangeObserver
from content_bridge.translation import (
    apply_field_map,
    apply_operations,
    translate_asset,
    translate_assets,
    translate_document,
    translate_documents,
    translate_models,
)

WEBHOOK_NAME = "stackbit-content-source"


class ContentSource:
    """Bridge between a content store and the editing host.

    Usage:
        source = ContentSource(project_id="example", store=InMemoryContentStore())
        await source.init(local_dev=True)
        models = await source.get_models()
        documents = await source.get_documents(build_model_map(models))
    """

    def __init__(
        self,
        *,
        project_id: str | None,
        store: ContentStore,
        site_localhost: str = "http://localhost:3000",
        manage_url_base: str = "https://example.com/project",
        project_environment: str = "production",
        content_source_type: str = "example",
        upload_width: int = 100,
        upload_height: int = 100,
    ) -> None:
        if not project_id:
            raise MissingConfigurationError("project_id")
        self.project_id = project_id
        self.store = store
        self.site_localhost = site_localhost
        self.manage_url = f"{manage_url_base.rstrip('/')}/{project_id}"
        self.project_environment = project_environment
        self.content_source_type = content_source_type
        self.upload_width = upload_width
        self.upload_height = upload_height
        self.local_dev = False
        self.logger = logging.getLogger(__name__)
        self.user_logger = logging.getLogger(__name__)
        self._observer = ChangeObserver(self.manage_url, self.site_localhost)

    @classmethod
    def from_settings(cls, settings: BridgeSettings, store: ContentStore) -> ContentSource:
        source = cls(
            project_id=settings.project_id,
            store=store,
            site_localhost=settings.site_localhost,
            manage_url_base=settings.manage_url_base,
            project_environment=settings.project_environment,
            content_source_type=settings.content_source_type,
            upload_width=settings.uploads.default_width,
            upload_height=settings.uploads.default_height,
        )
        source.local_dev = settings.local_dev
        return source

    # --- Identity ---
    def get_content_source_type(self) -> str:
        return self.content_source_type

    def get_project_id(self) -> str:
        return self.project_id

    def get_project_environment(self) -> str:
        return self.project_environment

    def get_project_manage_url(self) -> str:
        return self.manage_url

    # --- Lifecycle ---
    async def init(
        self,
        *,
        logger: logging.Logger | None = None,
        user_logger: logging.Logger | None = None,
        local_dev: bool | None = None,
        webhook_url: str | None = None,
    ) -> None:
        """Attach the host's loggers and register the change webhook when running in the cloud.

        Without a host logger, a local development session gets the Rich
        console handler.
        """
        if local_dev is not None:
            self.local_dev = local_dev
        if self.local_dev and logger is None:
            configure_logging()
        self.logger = get_logger(logger, __name__)
        self.user_logger = get_logger(user_logger, __name__)
        self.logger.debug("initialized ContentSource for project %s", self.project_id)

        if webhook_url and isinstance(self.store, WebhookStore):
            await self._ensure_webhook(self.store, webhook_url)

    async def _ensure_webhook(self, store: WebhookStore, webhook_url: str) -> None:
        self.logger.debug("checking if webhook '%s' exists", WEBHOOK_NAME)
        webhook = await store.get_webhook(WEBHOOK_NAME)
        if webhook is None:
            self.logger.debug("no webhook '%s' was found, creating a new webhook", WEBHOOK_NAME)
            webhook = await store.create_webhook(WEBHOOK_NAME, webhook_url)
        if webhook is not None:
            self.logger.debug("got webhook '%s'", WEBHOOK_NAME)

    async def reset(self) -> None:
        return None

    async def has_access(self, user_context: Mapping[str, Any] | None = None) -> AccessStatus:
        # Local sessions and connected users alike may edit; the store has no per-user permissions.
        return AccessStatus(has_connection=True, has_permissions=True)

    # --- Inbound notifications ---
    async def on_files_change(self, updated_files: Sequence[str]) -> FilesChangeResult:
        return FilesChangeResult()

    async def on_webhook(self, data: Any, headers: Mapping[str, str]) -> None:
        self.logger.debug("ignoring webhook payload, changes arrive through the store observer")

    # --- Change propagation ---
    async def start_watching_content_updates(self, options: WatchOptions) -> None:
        await self._observer.start(self.store, options)

    async def stop_watching_content_updates(self) -> None:
        await self._observer.stop()

    @property
    def observer(self) -> ChangeObserver:
        return self._observer

    # --- Reads ---
    async def get_models(self) -> list[ModelDescriptor]:
        self.logger.debug("getModels")
        models = await self.store.get_models()
        self.logger.debug("got %d models", len(models))
        return translate_models(models)

    async def get_locales(self) -> list[Locale]:
        return []

    async def get_documents(self, model_map: ModelMap) -> list[Document]:
        self.logger.debug("getDocuments")
        documents = await self.store.get_documents()
        self.logger.debug("got %d documents", len(documents))
        return translate_documents(documents, model_map, self.manage_url)

    async def get_assets(self) -> list[Asset]:
        self.logger.debug("getAssets")
        assets = await self.store.get_assets()
        self.logger.debug("got %d assets", len(assets))
        return translate_assets(assets, self.manage_url, self.site_localhost)

    # --- Mutations ---
    async def create_document(
        self,
        update_operation_fields: Mapping[str, UpdateOperationField],
        model: ModelDescriptor,
        model_map: ModelMap,
    ) -> Document:
        self.logger.debug("createDocument")
        fields = apply_field_map(update_operation_fields)
        document = await self.store.create_document(model.name, fields)
        self.logger.debug("created document, id: %s", document.id)
        return translate_document(document, model_map, self.manage_url)

    async def update_document(
        self,
        document: Document,
        operations: Sequence[UpdateOperation],
        model_map: ModelMap,
    ) -> Document:
        self.logger.debug("updateDocument")
        fields = apply_operations(operations)
        updated = await self.store.update_document(document.id, fields)
        self.logger.debug("updated document, id: %s", updated.id)
        return translate_document(updated, model_map, self.manage_url)

    async def delete_document(self, document: Document) -> None:
        self.logger.debug("deleteDocument, id: %s", document.id)
        await self.store.delete_document(document.id)

    async def upload_asset(
        self,
        *,
        file_name: str,
        mime_type: str,
        url: str | None = None,
        data: bytes | None = None,
    ) -> Asset:
        """Register an asset the store can fetch from ``url``.

        Raises:
            UnsupportedUploadError: when no URL is given or an inline payload is passed.

        """
        self.logger.debug("uploadAsset %s (%s)", file_name, mime_type)
        if data is not None:
            raise UnsupportedUploadError("inline file contents cannot be uploaded, provide a URL")
        if not url:
            raise UnsupportedUploadError("a source URL is required")

        asset = await self.store.upload_asset(url, file_name, self.upload_width, self.upload_height)
        self.logger.debug("uploaded asset, id: %s", asset.id)
        return translate_asset(asset, self.manage_url, self.site_localhost)

    async def validate_documents(self, documents: Sequence[Document], assets: Sequence[Asset]) -> list[DocumentValidationError]:
        return []

    async def publish_documents(self, documents: Sequence[Document], assets: Sequence[Asset]) -> None:
        document_ids = [document.id for document in documents]
        self.logger.debug("publishDocuments %s", document_ids)
        await self.store.publish_documents(document_ids)
