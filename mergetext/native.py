"""
Native message-catalog lookup for mergetext.

Wraps Python's gettext machinery behind an explicit binding table:
- Domains are bound to the directory holding <domain>.mo once and stay bound
- Lookups return the key unchanged when nothing matches
- No process environment or global gettext state is touched
"""

from __future__ import annotations

import gettext
import locale
import logging
import threading
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

CATALOG_SUFFIX = ".mo"


class NativeLookup(Protocol):
    """Capabilities a native catalog facility must provide."""

    def bind(self, domain: str, directory: str | Path) -> None: ...

    def set_codepage(self, domain: str, codepage: str) -> None: ...

    def lookup(self, domain: str, key: str) -> str: ...

    def lookup_plural(self, domain: str, singular_key: str, plural_key: str, count: int) -> str: ...


def native_lookup_available() -> bool:
    """
    Check whether the platform exposes a message locale category.

    Some builds (notably Windows) do not define ``locale.LC_MESSAGES``,
    in which case compiled catalogs cannot be selected by locale.

    Returns:
        True if native catalogs can be used
    """
    return hasattr(locale, "LC_MESSAGES")


class GettextLookup:
    """
    NativeLookup implementation backed by :mod:`gettext`.

    Holds the domain binding table explicitly instead of relying on
    ``gettext.bindtextdomain``. A domain is bound to the directory that
    contains ``<domain>.mo`` and that file is loaded as-is, so the lookup
    does not depend on any locale setting. Bindings are additive: once a
    domain is bound it keeps its directory for the lifetime of the instance.

    Thread Safety:
        Binding and catalog loading are guarded by a threading.Lock.
        Loaded catalogs are immutable, so lookups need no locking.
    """

    def __init__(self) -> None:
        self._bindings: dict[str, Path] = {}
        self._codepages: dict[str, str] = {}
        self._catalogs: dict[str, gettext.NullTranslations] = {}
        self._lock = threading.Lock()

    def bind(self, domain: str, directory: str | Path) -> None:
        directory = Path(directory)
        with self._lock:
            current = self._bindings.get(domain)
            if current is None:
                self._bindings[domain] = directory
                logger.debug(f"Bound domain {domain} to {directory}")
            elif current != directory:
                logger.warning(
                    f"Domain {domain} is already bound to {current}; ignoring {directory}"
                )

    def is_bound(self, domain: str) -> bool:
        return domain in self._bindings

    def catalog_path(self, domain: str) -> Path | None:
        """Get the file a bound domain is loaded from, or None if unbound."""
        directory = self._bindings.get(domain)
        if directory is None:
            return None
        return directory / f"{domain}{CATALOG_SUFFIX}"

    def set_codepage(self, domain: str, codepage: str) -> None:
        """
        Record the codepage requested for ``domain``.

        The value is only recorded: gettext decodes every catalog using the
        charset declared in its own header.
        """
        with self._lock:
            self._codepages[domain] = codepage

    def codepage(self, domain: str) -> str | None:
        return self._codepages.get(domain)

    def _load(self, domain: str, path: Path) -> gettext.NullTranslations:
        try:
            with open(path, "rb") as f:
                return gettext.GNUTranslations(f)
        except FileNotFoundError:
            logger.warning(f"No catalog file for {domain} at {path}")
        except OSError as e:
            logger.warning(f"Cannot load catalog {path}: {e}")
        return gettext.NullTranslations()

    def _translations(self, domain: str) -> gettext.NullTranslations | None:
        catalog = self._catalogs.get(domain)
        if catalog is not None:
            return catalog

        with self._lock:
            path = self.catalog_path(domain)
            if path is None:
                return None
            catalog = self._catalogs.get(domain)
            if catalog is None:
                catalog = self._load(domain, path)
                self._catalogs[domain] = catalog
            return catalog

    def lookup(self, domain: str, key: str) -> str:
        catalog = self._translations(domain)
        if catalog is None:
            return key
        return catalog.gettext(key)

    def lookup_plural(self, domain: str, singular_key: str, plural_key: str, count: int) -> str:
        catalog = self._translations(domain)
        if catalog is None:
            return singular_key if count == 1 else plural_key
        return catalog.ngettext(singular_key, plural_key, count)
