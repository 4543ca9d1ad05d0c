"""
Single-domain translation catalogs for mergetext.

Provides:
- TranslationCatalog: resolves strings against one natively bound domain
- NoopTranslations: identity catalog standing for "no translations"
- PluralRule: pluggable plural-form selection
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NoReturn

from mergetext.errors import UnsupportedOperation
from mergetext.native import NativeLookup

# Separates a context tag from the message in a lookup key. It can never
# appear in a display string, so context keys cannot collide with plain ones.
CONTEXT_SEPARATOR = "\x04"

DEFAULT_CODEPAGE = "UTF-8"


@dataclass(frozen=True)
class PluralRule:
    """
    Maps an item count to a plural form index.

    Catalog variants that understand a locale's Plural-Forms header can
    supply their own rule; the default is the English two-form rule.
    """

    nplurals: int
    select: Callable[[int], int]


ENGLISH_PLURAL = PluralRule(nplurals=2, select=lambda count: 0 if count == 1 else 1)


def normalize_newlines(text: str) -> str:
    """Convert CRLF line endings to LF, the only break gettext recognizes."""
    return text.replace("\r\n", "\n")


def default_plural(singular: str, plural: str, count: int) -> str:
    """Return the untranslated form for ``count`` items."""
    return singular if count == 1 else plural


class _ReadOnlyCatalog:
    """Entry and header mutators shared by every native-backed translator."""

    def add_entry(self, entry: Any) -> NoReturn:
        raise UnsupportedOperation("add_entry")

    def add_entry_or_merge(self, entry: Any) -> NoReturn:
        raise UnsupportedOperation("add_entry_or_merge")

    def set_header(self, header: str, value: str) -> NoReturn:
        raise UnsupportedOperation("set_header")

    def set_headers(self, headers: dict[str, str]) -> NoReturn:
        raise UnsupportedOperation("set_headers")

    def get_header(self, header: str) -> NoReturn:
        raise UnsupportedOperation("get_header")

    def translate_entry(self, entry: Any) -> NoReturn:
        raise UnsupportedOperation("translate_entry")


class NoopTranslations(_ReadOnlyCatalog):
    """Identity translator: every lookup returns its input."""

    domain = None
    active = False

    def __init__(self, plural_rule: PluralRule = ENGLISH_PLURAL):
        self._plural_rule = plural_rule

    def translate(self, singular: str, context: str | None = None) -> str:
        return singular

    def translate_plural(
        self, singular: str, plural: str, count: int, context: str | None = None
    ) -> str:
        if not singular:
            return singular
        return default_plural(singular, plural, count)

    def select_plural_form(self, count: int) -> int:
        return self._plural_rule.select(count)

    @property
    def plural_forms_count(self) -> int:
        return self._plural_rule.nplurals

    def __repr__(self) -> str:
        return "NoopTranslations()"


class TranslationCatalog(_ReadOnlyCatalog):
    """
    Wraps one bound (or unbound) domain of the native lookup facility.

    A catalog is either fully active (it has a domain and a lookup to query)
    or fully inactive, in which case every lookup is the identity.
    Catalogs are immutable once constructed.
    """

    def __init__(
        self,
        domain: str | None = None,
        lookup: NativeLookup | None = None,
        codepage: str = DEFAULT_CODEPAGE,
        plural_rule: PluralRule = ENGLISH_PLURAL,
    ):
        """
        Initialize the catalog.

        Args:
            domain: Bound domain identifier, or None for an inactive catalog
            lookup: Native facility the domain is bound in
            codepage: Character set requested when the domain was bound
            plural_rule: Plural-form selection for this catalog's locale
        """
        active = domain is not None and lookup is not None
        self._domain = domain if active else None
        self._lookup = lookup if active else None
        self._codepage = codepage
        self._plural_rule = plural_rule

    @property
    def domain(self) -> str | None:
        return self._domain

    @property
    def codepage(self) -> str:
        return self._codepage

    @property
    def active(self) -> bool:
        return self._domain is not None

    def translate(self, singular: str, context: str | None = None) -> str:
        """
        Look up ``singular`` in this catalog's domain.

        Args:
            singular: Source string
            context: Optional disambiguation tag

        Returns:
            The translation, or ``singular`` unchanged if none exists
        """
        if not singular or self._domain is None:
            return singular

        key = normalize_newlines(singular)
        if context is not None:
            key = f"{context}{CONTEXT_SEPARATOR}{key}"

        result = self._lookup.lookup(self._domain, key)
        if result != key:
            return result
        return singular

    def translate_plural(
        self, singular: str, plural: str, count: int, context: str | None = None
    ) -> str:
        """
        Look up the plural form of a message for ``count`` items.

        The native result only counts as a translation when it differs from
        both source forms, since an untranslated entry may come back as
        either one.

        Returns:
            The translation, or the untranslated form for ``count``
        """
        if not singular:
            return singular

        fallback = default_plural(singular, plural, count)
        if self._domain is None:
            return fallback

        singular_key = normalize_newlines(singular)
        if context is not None:
            singular_key = f"{context}{CONTEXT_SEPARATOR}{singular_key}"
        plural_key = normalize_newlines(plural)

        result = self._lookup.lookup_plural(self._domain, singular_key, plural_key, count)
        if result != singular_key and result != plural_key:
            return result
        return fallback

    def select_plural_form(self, count: int) -> int:
        """Return the 0-based plural form index to use for ``count`` items."""
        return self._plural_rule.select(count)

    @property
    def plural_forms_count(self) -> int:
        return self._plural_rule.nplurals

    def __repr__(self) -> str:
        return f"TranslationCatalog(domain={self._domain!r})"
