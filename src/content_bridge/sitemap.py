"""Site map entries for the editing host's page navigation."""

import logging
from collections.abc import Iterable

from content_bridge.core.types import Document, ScalarField, SiteMapDocument, SiteMapEntry

logger = logging.getLogger(__name__)

HOME_ENTRY = SiteMapEntry(stable_id="home", label="Home", url_path="/", is_home_page=True)


def _string_value(document: Document, field_name: str) -> str | None:
    field = document.fields.get(field_name)
    if isinstance(field, ScalarField) and field.value:
        return str(field.value)
    return None


def build_site_map(
    documents: Iterable[Document],
    *,
    src_type: str,
    src_project_id: str,
    page_model: str = "post",
    url_prefix: str = "/posts",
) -> list[SiteMapEntry]:
    """Return the home page followed by one entry per page document.

    Page documents are served at ``{url_prefix}/{slug}`` and labelled with
    their title, falling back to the slug. Documents without a slug have no
    page and are left out.
    """
    entries = [HOME_ENTRY]
    for document in documents:
        if document.model_name != page_model:
            continue
        slug = _string_value(document, "slug")
        if slug is None:
            logger.debug("Document %s has no slug, leaving it out of the site map", document.id)
            continue
        entries.append(
            SiteMapEntry(
                stable_id=document.id,
                label=_string_value(document, "title") or slug,
                url_path=f"{url_prefix}/{slug}",
                document=SiteMapDocument(
                    src_type=src_type,
                    src_project_id=src_project_id,
                    model_name=document.model_name,
                    id=document.id,
                ),
            )
        )
    return entries
