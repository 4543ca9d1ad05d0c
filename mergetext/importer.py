"""
Content-addressed import of compiled message catalogs.

A catalog file is stored under a domain derived from its base name and
the MD5 of its content:

    <store_root>/<locale>/LC_MESSAGES/<stem>-<md5>.mo

Importing identical content twice, from any path, lands on the same
domain and the same stored file, so repeated or concurrent imports never
duplicate bindings or files.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from mergetext.catalog import DEFAULT_CODEPAGE, TranslationCatalog
from mergetext.config import StoreConfig
from mergetext.errors import CatalogImportError, ConfigError
from mergetext.native import CATALOG_SUFFIX, NativeLookup, native_lookup_available

logger = logging.getLogger(__name__)

# Stored catalogs are shared read-only with other processes and users.
STORED_FILE_MODE = 0o644
_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class ImportOutcome:
    """Result of a successful import."""

    domain: str
    stored_path: Path


def content_hash(path: str | Path) -> str:
    """
    Compute the MD5 hex digest of a file's bytes.

    Raises:
        CatalogImportError: If the file cannot be read
    """
    digest = hashlib.md5()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as e:
        raise CatalogImportError(f"Cannot read catalog {path}: {e}", path=str(path)) from e
    return digest.hexdigest()


def derive_domain_id(path: str | Path, digest: str) -> str:
    """Build the domain identifier ``<stem>-<digest>`` for a catalog file."""
    return f"{Path(path).stem}-{digest}"


class CatalogImporter:
    """
    Stores compiled catalogs in a content-addressed directory and binds
    them in the native lookup facility.

    Bindings are never undone; importing the same content again is a
    no-op that returns the same domain.
    """

    def __init__(
        self,
        store_root: str | Path,
        locale: str,
        lookup: NativeLookup,
        codepage: str = DEFAULT_CODEPAGE,
    ):
        """
        Initialize the importer.

        Args:
            store_root: Root of the content store
            locale: Locale the catalogs belong to (e.g., 'de_DE')
            lookup: Native facility to bind imported domains in
            codepage: Character set requested for every bound domain
        """
        self.store_root = Path(store_root)
        self.locale = locale
        self.lookup = lookup
        self.codepage = codepage

    def catalog_dir(self) -> Path:
        return self.store_root / self.locale / "LC_MESSAGES"

    def _store(self, source: Path, destination: Path) -> None:
        """Copy ``source`` to ``destination`` via a temp file and atomic rename."""
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
        )
        try:
            with os.fdopen(fd, "wb") as out, open(source, "rb") as src:
                for chunk in iter(lambda: src.read(_CHUNK_SIZE), b""):
                    out.write(chunk)
            os.chmod(temp_name, STORED_FILE_MODE)
            os.replace(temp_name, destination)
        except OSError:
            try:
                os.unlink(temp_name)
            except FileNotFoundError:
                pass
            raise

    def import_file(self, path: str | Path) -> ImportOutcome:
        """
        Import a compiled catalog file.

        Args:
            path: Path of the compiled catalog

        Returns:
            The domain it is bound under and where it is stored

        Raises:
            CatalogImportError: If reading, directory creation or copying fails
        """
        source = Path(path)
        digest = content_hash(source)
        domain = derive_domain_id(source, digest)

        directory = self.catalog_dir()
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CatalogImportError(
                f"Cannot create catalog directory {directory}: {e}",
                path=str(source),
                domain=domain,
            ) from e

        destination = directory / f"{domain}{CATALOG_SUFFIX}"
        if destination.is_file():
            logger.debug(f"Catalog {domain} already stored at {destination}")
        else:
            try:
                self._store(source, destination)
            except OSError as e:
                raise CatalogImportError(
                    f"Cannot copy {source} to {destination}: {e}",
                    path=str(source),
                    domain=domain,
                ) from e
            logger.debug(f"Stored catalog {source} as {destination}")

        self.lookup.bind(domain, directory)
        self.lookup.set_codepage(domain, self.codepage)

        return ImportOutcome(domain=domain, stored_path=destination)

    def import_catalog(self, path: str | Path) -> TranslationCatalog:
        """
        Import a compiled catalog and return it as an active catalog.

        Raises:
            CatalogImportError: If the import fails
        """
        outcome = self.import_file(path)
        return TranslationCatalog(outcome.domain, self.lookup, codepage=self.codepage)


def load_catalog(
    path: str | Path,
    lookup: NativeLookup,
    config: StoreConfig | None = None,
) -> TranslationCatalog:
    """
    Import a catalog for the host, degrading to an inactive catalog on failure.

    Never raises for import problems: translation then simply passes
    strings through untranslated.

    Args:
        path: Path of the compiled catalog
        lookup: Native facility to bind the domain in
        config: Store settings; defaults to StoreConfig()

    Returns:
        An active catalog, or an inactive one if the import was not possible
    """
    config = config or StoreConfig()

    if not config.is_enabled():
        logger.debug(f"Native catalogs disabled; not importing {path}")
        return TranslationCatalog()
    if not native_lookup_available():
        logger.warning(f"Native catalog lookup is not available; not importing {path}")
        return TranslationCatalog()

    try:
        importer = CatalogImporter(
            config.get_store_root(),
            config.get_locale(),
            lookup,
            codepage=config.get_codepage(),
        )
        return importer.import_catalog(path)
    except (CatalogImportError, ConfigError) as e:
        logger.warning(f"Catalog import failed, continuing untranslated: {e}")
        return TranslationCatalog()
