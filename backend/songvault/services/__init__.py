"""Business logic services."""
from songvault.services.identity import IdentityResolver, StagingScope
from songvault.services.registrar import SongRegistrar, SongMetadata, RegistrationResult
from songvault.services.editor import SongEditor
from songvault.services.catalog import CatalogQuery
from songvault.services.storage import UploadStorage
from songvault.services.ingest import IngestService

__all__ = [
    "IdentityResolver",
    "StagingScope",
    "SongRegistrar",
    "SongMetadata",
    "RegistrationResult",
    "SongEditor",
    "CatalogQuery",
    "UploadStorage",
    "IngestService",
]
