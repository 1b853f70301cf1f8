"""
Key namespace for session-scoped entries.

Dependencies: cv_roast.configs
System role: Single source of the store key layout
"""

from dataclasses import dataclass

from cv_roast.configs.session_store import SessionStoreSettings


@dataclass(frozen=True)
class SessionKeys:
    """Builds and parses keys for documents, critiques and mappings."""

    document_prefix: str = "cv_"
    critique_prefix: str = "critique_"
    mapping_prefix: str = "map_"

    @classmethod
    def from_settings(cls, settings: SessionStoreSettings) -> "SessionKeys":
        return cls(
            document_prefix=settings.document_prefix,
            critique_prefix=settings.critique_prefix,
            mapping_prefix=settings.mapping_prefix,
        )

    def document(self, session_id: str) -> str:
        return f"{self.document_prefix}{session_id}"

    def critique(self, session_id: str) -> str:
        return f"{self.critique_prefix}{session_id}"

    def mapping(self, external_id: str) -> str:
        return f"{self.mapping_prefix}{external_id}"

    def session_id_from_document_key(self, key: str) -> str:
        return key[len(self.document_prefix):]
