"""
Discovery manifest.

The manifest (``mcp-extension.yaml`` by default) tells the composition root
where to look for capability classes and which service configuration files
to load::

    scan-dirs:
      - src/mcp_extension/mcp/capabilities/examples
    includes:
      - config/services.yaml
    packages: []

Relative paths are resolved against the directory holding the manifest.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mcp_extension.utils.errors import ConfigurationError
from mcp_extension.utils.helpers import load_yaml_mapping, resolve_relative
from mcp_extension.utils.logging import setup_logging

logger = setup_logging(__name__)

DEFAULT_MANIFEST_NAME = "mcp-extension.yaml"


class DiscoveryManifest(BaseModel):
    """Parsed discovery manifest with absolute paths."""

    scan_dirs: list[Path] = Field(default_factory=list, alias="scan-dirs")
    includes: list[Path] = Field(default_factory=list)
    packages: list[str] = Field(default_factory=list)
    source: Path | None = Field(default=None, exclude=True)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @classmethod
    def load(cls, path: Path) -> "DiscoveryManifest":
        """Load and validate a manifest file.

        Raises:
            ConfigurationError: If the file is missing, malformed, or names a
                scan directory or include that does not exist
        """
        path = Path(path).expanduser().resolve()
        data = load_yaml_mapping(path)

        try:
            manifest = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid discovery manifest {path}",
                suggestions=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
                context={"path": str(path)},
            ) from e

        base_dir = path.parent
        manifest = manifest.model_copy(update={
            "scan_dirs": [resolve_relative(base_dir, p) for p in manifest.scan_dirs],
            "includes": [resolve_relative(base_dir, p) for p in manifest.includes],
            "source": path,
        })
        manifest.check_paths()

        logger.info(
            f"Loaded manifest {path}: {len(manifest.scan_dirs)} scan dir(s), "
            f"{len(manifest.includes)} include(s), {len(manifest.packages)} package(s)"
        )
        return manifest

    @classmethod
    def empty(cls) -> "DiscoveryManifest":
        """A manifest with no scan directories, includes or packages."""
        return cls()

    def check_paths(self) -> None:
        """Raise ``ConfigurationError`` listing every path that does not exist."""
        missing = [f"scan-dirs: {p}" for p in self.scan_dirs if not p.is_dir()]
        missing += [f"includes: {p}" for p in self.includes if not p.is_file()]
        if missing:
            raise ConfigurationError(
                f"Discovery manifest {self.source} references missing paths",
                suggestions=missing,
                context={"path": str(self.source)},
            )
