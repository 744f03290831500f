# Path: docref/process/resolver/engine/reference_catalog.py
"""
Reference Catalog

Immutable snapshot of reference definitions. Filename and exclude
patterns are compiled once here, so matching cost stays linear in
catalog size. A reference whose patterns do not compile is logged and
disabled; the rest of the catalog is unaffected.
"""

import re
from typing import Iterable, Iterator, Optional

from docref.constants import TagNamespace, TRIGGER_SEPARATOR
from docref.core.logger.ipo_logging import get_input_logger

from ..exceptions import CatalogIntegrityError
from ..models.compiled_reference import CompiledReference, compile_reference
from ..models.evidence import canonical_slug
from ..models.reference_definition import ReferenceDefinition


class ReferenceCatalog:
    """
    Versioned, immutable snapshot of the reference catalog.

    Example:
        catalog = ReferenceCatalog(references)

        catalog.get('insurance-policy')
        catalog.content_version         # max of record versions
        catalog.signal_vocabulary       # keys the normalizer can derive
    """

    def __init__(
        self,
        references: Iterable[ReferenceDefinition],
        strict_signals: bool = False
    ):
        """
        Build a snapshot.

        Args:
            references: Reference definitions, in catalog order
            strict_signals: Raise when decision rules name signal keys
                            that no tag or keyword provides

        Raises:
            CatalogIntegrityError: On duplicate ids, or unknown rule
                                   signals in strict mode
        """
        self.logger = get_input_logger('reference_catalog')

        self._references: tuple[ReferenceDefinition, ...] = tuple(references)

        seen: set[str] = set()
        duplicates = []
        for reference in self._references:
            if reference.reference_id in seen:
                duplicates.append(reference.reference_id)
            seen.add(reference.reference_id)
        if duplicates:
            raise CatalogIntegrityError(
                f"Duplicate reference ids in catalog: {sorted(set(duplicates))}"
            )

        self._by_id = {ref.reference_id: ref for ref in self._references}
        self._by_file_type = {ref.file_type: ref for ref in self._references}

        self._disabled: dict[str, str] = {}
        compiled = []
        for reference in self._references:
            if not reference.is_active:
                continue
            try:
                compiled.append(compile_reference(reference))
            except re.error as e:
                self._disabled[reference.reference_id] = str(e)
                self.logger.error(
                    f"Invalid pattern in reference {reference.reference_id}: {e}; "
                    f"reference excluded from matching"
                )
        self._compiled: tuple[CompiledReference, ...] = tuple(compiled)

        self._content_version = max(
            (ref.version for ref in self._references), default=0
        )
        self._signal_vocabulary = self._build_signal_vocabulary()

        unknown = self.find_unknown_rule_signals()
        if unknown:
            if strict_signals:
                raise CatalogIntegrityError(
                    f"Decision rules name signal keys no tag or keyword "
                    f"provides: {unknown}"
                )
            self.logger.warning(
                f"{len(unknown)} references have decision-rule signal keys "
                f"that no tag or keyword provides"
            )
            for reference_id, keys in unknown.items():
                self.logger.debug(f"  [UNKNOWN SIGNALS] {reference_id}: {keys}")

        self.logger.info(
            f"Catalog snapshot: {len(self._references)} references, "
            f"{len(self._compiled)} matchable, {len(self._disabled)} disabled, "
            f"content version {self._content_version}"
        )

    def _build_signal_vocabulary(self) -> frozenset[str]:
        """Signal keys that evidence derivation can recognise."""
        vocabulary = set()
        for compiled in self._compiled:
            reference = compiled.reference
            for tag in reference.tags:
                if TRIGGER_SEPARATOR not in tag.value:
                    vocabulary.add(tag.value.lower())
            vocabulary.update(reference.rule_signal_keys)
        return frozenset(vocabulary)

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def references(self) -> tuple[ReferenceDefinition, ...]:
        """All references, active or not, in catalog order."""
        return self._references

    @property
    def compiled_references(self) -> tuple[CompiledReference, ...]:
        """Active, enabled references with compiled patterns."""
        return self._compiled

    @property
    def disabled_references(self) -> dict[str, str]:
        """Reference ids excluded for invalid patterns, with the error."""
        return dict(self._disabled)

    @property
    def content_version(self) -> int:
        """Aggregate version: max of all record versions."""
        return self._content_version

    @property
    def signal_vocabulary(self) -> frozenset[str]:
        return self._signal_vocabulary

    def get(self, reference_id: str) -> Optional[ReferenceDefinition]:
        """Get a reference by id."""
        return self._by_id.get(reference_id)

    def get_by_file_type(self, file_type: str) -> Optional[ReferenceDefinition]:
        """Get a reference by its exact display name."""
        return self._by_file_type.get(file_type)

    def is_matchable(self, reference_id: str) -> bool:
        """Check if a reference takes part in matching."""
        reference = self._by_id.get(reference_id)
        return (
            reference is not None
            and reference.is_active
            and reference_id not in self._disabled
        )

    def find_unknown_rule_signals(self) -> dict[str, list[str]]:
        """
        Find decision-rule signal keys absent from every tag and keyword.

        Returns:
            Mapping of reference id to its unknown signal keys
        """
        known = set()
        for reference in self._references:
            for tag in reference.tags:
                known.add(tag.value.lower())
                if tag.namespace == TagNamespace.TRIGGER:
                    known.update(tag.value.lower().split(TRIGGER_SEPARATOR))
            for keyword in reference.keywords:
                slug = canonical_slug(keyword)
                if slug:
                    known.add(slug)

        unknown = {}
        for reference in self._references:
            missing = sorted(reference.rule_signal_keys - known)
            if missing:
                unknown[reference.reference_id] = missing
        return unknown

    def __len__(self) -> int:
        return len(self._references)

    def __iter__(self) -> Iterator[ReferenceDefinition]:
        return iter(self._references)

    def __contains__(self, reference_id: object) -> bool:
        return reference_id in self._by_id

    def __repr__(self) -> str:
        return (
            f"ReferenceCatalog(references={len(self._references)}, "
            f"content_version={self._content_version})"
        )


__all__ = ['ReferenceCatalog']
