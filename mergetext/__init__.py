"""
mergetext: precedence-merged, content-addressed gettext catalogs.

Provides:
- Content-addressed import of compiled .mo catalogs
- Deterministic merging of catalogs from independent components
- Context and plural lookups through Python's gettext machinery

Usage:
    from mergetext import GettextLookup, MergeChain, StoreConfig, load_catalog

    config = StoreConfig()
    lookup = GettextLookup()

    core = MergeChain(load_catalog("core-de_DE.mo", lookup, config))
    core.merge_with(load_catalog("theme-de_DE.mo", lookup, config))

    print(core.translate("Post", "noun"))
    print(core.translate_plural("%d item", "%d items", 5))
"""

from mergetext.catalog import (
    CONTEXT_SEPARATOR,
    ENGLISH_PLURAL,
    NoopTranslations,
    PluralRule,
    TranslationCatalog,
)
from mergetext.chain import MergeChain, Translator
from mergetext.config import StoreConfig
from mergetext.errors import (
    CatalogImportError,
    ConfigError,
    MergetextError,
    UnsupportedOperation,
)
from mergetext.importer import (
    CatalogImporter,
    ImportOutcome,
    content_hash,
    derive_domain_id,
    load_catalog,
)
from mergetext.native import GettextLookup, NativeLookup, native_lookup_available

__all__ = [
    # Catalogs
    "TranslationCatalog",
    "NoopTranslations",
    "MergeChain",
    "Translator",
    "PluralRule",
    "ENGLISH_PLURAL",
    "CONTEXT_SEPARATOR",
    # Import
    "CatalogImporter",
    "ImportOutcome",
    "content_hash",
    "derive_domain_id",
    "load_catalog",
    # Native lookup
    "NativeLookup",
    "GettextLookup",
    "native_lookup_available",
    # Configuration
    "StoreConfig",
    # Errors
    "MergetextError",
    "CatalogImportError",
    "UnsupportedOperation",
    "ConfigError",
]
