"""Remote page store backed by the Confluence REST API.

The store speaks in RemotePage objects and hides the raw JSON shapes of the
API. Provenance (repository, source path, content hash) is stored in a
content property on each published page, which readers never see.
"""

import logging
from typing import Any, Dict, Optional

from src.docs_tree.models import Meta
from .api_wrapper import APIWrapper
from .models import RemotePage

logger = logging.getLogger(__name__)

PROPERTY_KEY = "confluence_docs_publish_source"


class ConfluencePageStore:
    """Find, list, create, update and delete pages within one space.

    Args:
        api: Wrapper used for every remote call
        space_key: Key of the space pages are published to
        property_key: Content property holding the provenance record
        cascade_delete: Remove a page's descendants before the page itself.
            Confluence moves the children of a removed page up to its parent,
            so without this a deleted section leaves its pages behind.

    Example:
        >>> store = ConfluencePageStore(APIWrapper(Authenticator()), "DOCS")
        >>> home = store.find_page_by_title("My Site")
        >>> children = store.get_child_pages(home.id)
    """

    def __init__(
        self,
        api: APIWrapper,
        space_key: str,
        property_key: str = PROPERTY_KEY,
        cascade_delete: bool = True,
    ):
        self.api = api
        self.space_key = space_key
        self.property_key = property_key
        self.cascade_delete = cascade_delete

    @property
    def _expand(self) -> str:
        return f"version,ancestors,metadata.properties.{self.property_key}"

    def find_page_by_title(self, title: str) -> Optional[RemotePage]:
        data = self.api.get_page_by_title(self.space_key, title, expand=self._expand)
        if not data:
            return None

        ancestors = data.get('ancestors') or []
        parent_id = str(ancestors[-1]['id']) if ancestors else None
        return self._to_remote_page(data, parent_id)

    def get_child_pages(self, parent_id: str) -> Dict[str, RemotePage]:
        """Direct children of ``parent_id`` keyed by their recorded source path.

        Children without provenance were not published by this tool and are
        left out, so they are never matched or deleted.
        """
        children: Dict[str, RemotePage] = {}
        for data in self.api.get_child_pages(parent_id, expand=self._expand):
            page = self._to_remote_page(data, parent_id)
            if page.meta is None or not page.meta.path:
                logger.debug(f'Ignoring page "{page.title}" ({page.id}): no provenance')
                continue
            children[page.meta.path] = page
        return children

    def create_page(self, title: str, parent_id: Optional[str], content: str, meta: Meta) -> RemotePage:
        data = self.api.create_page(self.space_key, title, content, parent_id)
        page_id = str(data['id'])
        self.api.put_page_property(page_id, self.property_key, meta.to_dict())
        return RemotePage(
            id=page_id,
            title=title,
            parent_id=parent_id,
            meta=meta,
            version=self._version(data),
        )

    def update_page(
        self,
        page_id: str,
        title: str,
        content: str,
        parent_id: Optional[str],
        meta: Meta,
    ) -> RemotePage:
        data = self.api.update_page(page_id, title, content, parent_id)
        self.api.put_page_property(page_id, self.property_key, meta.to_dict())
        return RemotePage(
            id=page_id,
            title=title,
            parent_id=parent_id,
            meta=meta,
            version=self._version(data or {}),
        )

    def delete_page(self, page_id: str) -> int:
        """Delete a page, and its descendants first when cascading.

        Returns:
            Number of pages removed, the page itself included
        """
        removed = 1
        if self.cascade_delete:
            for child in self.api.get_child_pages(page_id):
                removed += self.delete_page(str(child['id']))
        self.api.delete_page(page_id)
        logger.debug(f"Deleted page {page_id}")
        return removed

    def page_url(self, page_id: str) -> str:
        return f"{self.api.base_url}/spaces/{self.space_key}/pages/{page_id}"

    def _to_remote_page(self, data: Dict[str, Any], parent_id: Optional[str]) -> RemotePage:
        return RemotePage(
            id=str(data['id']),
            title=data.get('title', ''),
            parent_id=parent_id,
            meta=Meta.from_dict(self._property_value(data)),
            version=self._version(data),
        )

    def _property_value(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        properties = (data.get('metadata') or {}).get('properties') or {}
        prop = properties.get(self.property_key) or {}
        return prop.get('value')

    @staticmethod
    def _version(data: Dict[str, Any]) -> Optional[int]:
        version = data.get('version')
        if isinstance(version, dict):
            return version.get('number')
        return None
