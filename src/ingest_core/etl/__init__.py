from .artifacts import ArtifactStore, LocalArtifactStore
from .pipeline import build_manifest, documents_from_manifest

__all__ = ["ArtifactStore", "LocalArtifactStore", "build_manifest", "documents_from_manifest"]
