"""
Precedence-ordered merging of translation catalogs.

A MergeChain surrounds its own catalog with two ordered lists:
- higher: consulted first; the first real translation wins outright
- lower: consulted only when the own catalog has no entry

Every member answers through the same translate/translate_plural
interface, so chains nest freely.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Union

from mergetext.catalog import (
    NoopTranslations,
    TranslationCatalog,
    _ReadOnlyCatalog,
    default_plural,
)

logger = logging.getLogger(__name__)

# The closed set of translator variants a chain can hold.
Translator = Union[NoopTranslations, TranslationCatalog, "MergeChain"]


class MergeChain(_ReadOnlyCatalog):
    """
    Composes catalogs around an own catalog with deterministic precedence.

    Lists are append-only. The host is expected to finish assembling a
    chain before the first translation call; lookups take no locks.
    """

    def __init__(
        self,
        own: Translator | None = None,
        higher: Iterable[Translator] = (),
        lower: Iterable[Translator] = (),
    ):
        """
        Initialize the chain.

        Args:
            own: The chain's own catalog; None means no translations
            higher: Catalogs that take precedence over ``own``
            lower: Catalogs consulted after ``own``
        """
        self._own = own if own is not None else NoopTranslations()
        self._higher: list[Translator] = []
        self._lower: list[Translator] = []
        for other in higher:
            self.merge_with(other)
        for other in lower:
            self.merge_originals_with(other)

    @property
    def own(self) -> Translator:
        return self._own

    @property
    def higher(self) -> tuple[Translator, ...]:
        return tuple(self._higher)

    @property
    def lower(self) -> tuple[Translator, ...]:
        return tuple(self._lower)

    @property
    def domain(self) -> str | None:
        return self._own.domain

    @property
    def active(self) -> bool:
        return self._own.active

    def merge_with(self, other: Translator) -> None:
        """Merge with another translator; the other one takes precedence."""
        if isinstance(other, NoopTranslations):
            return
        self._higher.append(other)
        logger.debug(f"Merged {other!r} above {self._own!r}")

    def merge_originals_with(self, other: Translator) -> None:
        """Merge with another translator; this chain takes precedence."""
        if isinstance(other, NoopTranslations):
            return
        self._lower.append(other)
        logger.debug(f"Merged {other!r} below {self._own!r}")

    def translate(self, singular: str, context: str | None = None) -> str:
        """
        Resolve ``singular`` through the chain.

        Order: higher list, own catalog, lower list. The first result that
        differs from ``singular`` is returned. An inactive own catalog ends
        the walk before the lower list.

        Args:
            singular: Source string
            context: Optional disambiguation tag

        Returns:
            The winning translation, or ``singular`` unchanged
        """
        if not singular:
            return singular

        for other in self._higher:
            result = other.translate(singular, context)
            if result != singular:
                return result

        result = self._own.translate(singular, context)
        if result != singular or not self._own.active:
            return result

        for other in self._lower:
            result = other.translate(singular, context)
            if result != singular:
                return result

        return singular

    def translate_plural(
        self, singular: str, plural: str, count: int, context: str | None = None
    ) -> str:
        """
        Resolve a plural message through the chain.

        Every member's answer is compared against the untranslated form
        for the caller's ``count``; anything else counts as a translation.

        Returns:
            The winning translation, or the untranslated form for ``count``
        """
        if not singular:
            return singular

        fallback = default_plural(singular, plural, count)

        for other in self._higher:
            result = other.translate_plural(singular, plural, count, context)
            if result != fallback:
                return result

        result = self._own.translate_plural(singular, plural, count, context)
        if result != fallback or not self._own.active:
            return result

        for other in self._lower:
            result = other.translate_plural(singular, plural, count, context)
            if result != fallback:
                return result

        return fallback

    def select_plural_form(self, count: int) -> int:
        return self._own.select_plural_form(count)

    @property
    def plural_forms_count(self) -> int:
        return self._own.plural_forms_count

    def __repr__(self) -> str:
        return (
            f"MergeChain(own={self._own!r}, higher={len(self._higher)}, "
            f"lower={len(self._lower)})"
        )
