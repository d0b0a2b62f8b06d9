"""Tag registry - immutable named pointers to versions."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from docvc.application.dto.tag_dto import TagMetadata
from docvc.application.services.version_store import VersionStore
from docvc.domain.entities import Tag, Version
from docvc.domain.exceptions import TagAlreadyExists, TagNotFound, ValidationError
from docvc.domain.value_objects import TagName, TagType

logger = logging.getLogger(__name__)


class TagRegistry:
    """Create and read tags. There is no update or delete."""

    def __init__(self, version_store: VersionStore) -> None:
        self._store = version_store
        self._uow_factory = version_store.unit_of_work_factory
        self._locks = version_store.locks

    def create_tag(
        self,
        document_id: str,
        version_id: UUID,
        name: str,
        metadata: TagMetadata | None = None,
    ) -> Tag:
        metadata = metadata or TagMetadata()
        tag_name = TagName(name)
        try:
            tag_type = TagType(metadata.type)
        except ValueError:
            raise ValidationError(f"Unknown tag type: {metadata.type!r}") from None

        with self._locks.hold(document_id):
            with self._uow_factory() as uow:
                self._store.require_document(uow, document_id, for_update=True)
                if uow.tags.get(document_id, tag_name.value):
                    raise TagAlreadyExists(f"Tag '{tag_name}' already exists")
                version = self._store.require_version(uow, document_id, version_id)
                tag = Tag(
                    document_id=document_id,
                    name=tag_name.value,
                    version_id=version.id,
                    version_number=version.number,
                    type=tag_type,
                    created_at=datetime.now(UTC),
                    message=metadata.message,
                    created_by=metadata.author_id,
                )
                uow.tags.create(tag)

        logger.info(
            "Tag created",
            extra={
                "documentId": document_id,
                "tag": tag.name,
                "versionId": str(tag.version_id),
                "type": tag.type.value,
            },
        )
        return tag

    def get_tag(self, document_id: str, name: str) -> Tag:
        with self._uow_factory(read_only=True) as uow:
            self._store.require_document(uow, document_id)
            tag = uow.tags.get(document_id, name)
            if not tag:
                raise TagNotFound(name)
            return tag

    def list_tags(self, document_id: str) -> list[Tag]:
        with self._uow_factory(read_only=True) as uow:
            self._store.require_document(uow, document_id)
            return uow.tags.list_by_document(document_id)

    def resolve(self, document_id: str, name: str) -> Version:
        """Tagged version with content materialized."""
        with self._uow_factory(read_only=True) as uow:
            self._store.require_document(uow, document_id)
            tag = uow.tags.get(document_id, name)
            if not tag:
                raise TagNotFound(name)
            version = self._store.require_version(uow, document_id, tag.version_id)
            return self._store.materialize(uow, version)
