# Path: docref/process/resolver/engine/reference_loader.py
"""
Reference Loader

Loads reference definitions from YAML files in the dictionary directory.
Validates definitions against the schema and converts to Pydantic models.

A user overlay directory can refine system references: user files that
name an existing file type override its fields, and their tags and
keywords are merged into the system ones.
"""

import re
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from docref.constants import (
    DocumentCategory,
    ReferenceSource,
    RuleEmphasis,
    REFERENCES_SUBDIR,
    YAML_EXTENSIONS,
)
from docref.core.logger.ipo_logging import get_input_logger

from ..models.reference_definition import ReferenceDefinition
from ..models.compiled_reference import compile_reference
from .reference_catalog import ReferenceCatalog


# Legacy identification rules carry their emphasis as a text prefix
_EMPHASIS_PREFIX = re.compile(r'^(PRIMARY|CRITICAL):\s*')


class ReferenceLoader:
    """
    Loads reference definitions from YAML files.

    Scans the dictionary/references/ directory for YAML files and
    parses them into ReferenceDefinition objects, one per file.

    Example:
        loader = ReferenceLoader()
        references = loader.load_all()

        # Get specific reference
        policy = references.get('insurance-policy')

        # Build an immutable snapshot for the resolver
        catalog = loader.load_catalog()
    """

    def __init__(self, dictionary_path: Optional[Path] = None):
        """
        Initialize reference loader.

        Args:
            dictionary_path: Path to dictionary directory.
                           Defaults to the packaged docref/dictionary/
        """
        self.logger = get_input_logger('reference_loader')

        if dictionary_path is None:
            # Default to dictionary directory relative to this file
            self.dictionary_path = Path(__file__).parent.parent.parent.parent / 'dictionary'
        else:
            self.dictionary_path = Path(dictionary_path)

        self.references_path = self.dictionary_path / REFERENCES_SUBDIR

        self._references_cache: Optional[dict[str, ReferenceDefinition]] = None
        self._duplicate_ids: list[tuple[str, Path]] = []

    def load_all(self, use_cache: bool = True) -> dict[str, ReferenceDefinition]:
        """
        Load all reference definitions from the dictionary.

        Args:
            use_cache: Whether to use cached results

        Returns:
            Dictionary mapping reference_id to ReferenceDefinition
        """
        if use_cache and self._references_cache is not None:
            return self._references_cache

        references = {}
        self._duplicate_ids = []

        if not self.references_path.exists():
            self.logger.warning(
                f"References directory not found: {self.references_path}"
            )
            return references

        yaml_files = self._find_yaml_files(self.references_path)

        self.logger.info(f"Found {len(yaml_files)} reference definition files")

        for yaml_file in yaml_files:
            try:
                reference = self.load_file(yaml_file)
                if reference:
                    if reference.reference_id in references:
                        self.logger.warning(
                            f"Duplicate reference_id: {reference.reference_id} "
                            f"in {yaml_file}"
                        )
                        self._duplicate_ids.append((reference.reference_id, yaml_file))
                    references[reference.reference_id] = reference
            except Exception as e:
                self.logger.error(
                    f"Failed to load reference from {yaml_file}: {e}"
                )

        self.logger.info(f"Loaded {len(references)} reference definitions")
        self._references_cache = references
        return references

    def load_file(self, file_path: Path) -> Optional[ReferenceDefinition]:
        """
        Load a single reference definition from a YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            ReferenceDefinition or None if the file is empty or not YAML
        """
        data = self._read_yaml(file_path)
        if data is None:
            return None

        try:
            return self._parse_reference(data)
        except ValidationError as e:
            self.logger.error(
                f"Invalid reference definition in {file_path}: "
                f"{e.error_count()} validation errors"
            )
            raise

    def _find_yaml_files(self, root: Path) -> list[Path]:
        """All YAML files under root, in a stable order."""
        yaml_files = []
        for extension in YAML_EXTENSIONS:
            yaml_files.extend(root.rglob(extension))
        return sorted(yaml_files)

    def _read_yaml(self, file_path: Path) -> Optional[dict]:
        """Read a YAML mapping, returning None for empty or broken files."""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self.logger.error(f"YAML parse error in {file_path}: {e}")
            return None

        if data is None:
            self.logger.warning(f"Empty file: {file_path}")
            return None

        if not isinstance(data, dict):
            self.logger.error(
                f"Expected a mapping in {file_path}, got {type(data).__name__}"
            )
            return None

        return data

    def _parse_reference(self, data: dict) -> ReferenceDefinition:
        """
        Parse raw YAML data into ReferenceDefinition.

        Args:
            data: Parsed YAML dictionary

        Returns:
            ReferenceDefinition object
        """
        return ReferenceDefinition.model_validate(self._normalize_raw(data))

    def _normalize_raw(self, data: dict) -> dict:
        """
        Bring a raw YAML mapping into schema shape.

        Accepts identification rules written as plain strings, turning a
        leading PRIMARY:/CRITICAL: into the structured emphasis field.
        """
        normalized = dict(data)

        rules = []
        for rule in data.get('identification_rules') or []:
            rules.append(self._parse_identification_rule(rule))
        normalized['identification_rules'] = rules

        for key in ('tags', 'decision_rules', 'keywords', 'filename_patterns',
                    'exclude_patterns', 'disambiguation', 'applicable_contexts'):
            if normalized.get(key) is None:
                normalized[key] = []

        if normalized.get('terminology') is None:
            normalized['terminology'] = {}

        return normalized

    def _parse_identification_rule(self, rule: Any) -> dict:
        """Parse one identification rule (string or mapping)."""
        if isinstance(rule, dict):
            return rule

        text = str(rule)
        match = _EMPHASIS_PREFIX.match(text)
        if match:
            return {
                'text': text[match.end():],
                'emphasis': RuleEmphasis(match.group(1).lower()),
            }
        return {'text': text, 'emphasis': RuleEmphasis.STANDARD}

    # =========================================================================
    # USER OVERLAY
    # =========================================================================

    def load_overlay(self, overlay_path: Path) -> list[dict]:
        """
        Read user-authored reference files without validating them.

        Overlay files may be partial: a file that names an existing
        file_type only needs the fields it overrides.

        Args:
            overlay_path: Directory of user YAML files

        Returns:
            List of raw reference mappings
        """
        overlay_path = Path(overlay_path)
        if not overlay_path.exists():
            self.logger.warning(f"User references directory not found: {overlay_path}")
            return []

        overlay = []
        for yaml_file in self._find_yaml_files(overlay_path):
            data = self._read_yaml(yaml_file)
            if data is not None:
                overlay.append(data)

        self.logger.info(f"Read {len(overlay)} user reference files")
        return overlay

    def merge_overlay(
        self,
        system: dict[str, ReferenceDefinition],
        overlay: list[dict]
    ) -> dict[str, ReferenceDefinition]:
        """
        Merge user references into system references.

        User references override system references with the same
        file_type (case-insensitive); tags and keywords are the union
        of both. User references with a new file_type are added.

        Args:
            system: System references by id
            overlay: Raw user reference mappings

        Returns:
            Merged references by id
        """
        merged = dict(system)
        by_file_type = {
            ref.file_type.lower(): ref.reference_id for ref in system.values()
        }

        for data in overlay:
            file_type = str(data.get('file_type', '')).lower()
            data = self._normalize_raw(data)
            data.setdefault('metadata', {})
            data['metadata'] = {**data['metadata'], 'source': ReferenceSource.USER}

            try:
                existing_id = by_file_type.get(file_type)
                if existing_id is not None:
                    reference = self._merge_one(merged[existing_id], data)
                    del merged[existing_id]
                    self.logger.info(
                        f"User reference overrides {existing_id} ({reference.file_type})"
                    )
                else:
                    reference = ReferenceDefinition.model_validate(data)
                    self.logger.info(f"User reference added: {reference.reference_id}")
            except ValidationError as e:
                self.logger.error(
                    f"Invalid user reference '{data.get('file_type')}': "
                    f"{e.error_count()} validation errors"
                )
                continue

            if reference.reference_id in merged:
                self.logger.warning(
                    f"User reference replaces reference_id {reference.reference_id}"
                )
            merged[reference.reference_id] = reference
            by_file_type[reference.file_type.lower()] = reference.reference_id

        return merged

    def _merge_one(self, existing: ReferenceDefinition, user: dict) -> ReferenceDefinition:
        """Merge one user mapping over an existing reference."""
        base = existing.model_dump()

        # Only fields the user actually wrote override the system ones
        for key, value in user.items():
            # The system display name is kept; user files match it case-insensitively
            if key in ('tags', 'keywords', 'file_type'):
                continue
            # Empty collections are normalization defaults, not overrides
            if isinstance(value, (list, dict)) and not value:
                continue
            if key == 'metadata':
                base['metadata'] = {**base['metadata'], **value}
                continue
            base[key] = value

        tags = list(base['tags'])
        seen_tags = {self._tag_key(t) for t in tags}
        for tag in user.get('tags') or []:
            key = self._tag_key(tag)
            if key not in seen_tags:
                seen_tags.add(key)
                tags.append(tag)
        base['tags'] = tags

        keywords = list(base['keywords'])
        for keyword in user.get('keywords') or []:
            if keyword not in keywords:
                keywords.append(keyword)
        base['keywords'] = keywords

        return ReferenceDefinition.model_validate(base)

    @staticmethod
    def _tag_key(tag: dict) -> tuple[str, str]:
        """Identity of a tag for merging: (namespace, value)."""
        namespace = tag.get('namespace')
        return (str(getattr(namespace, 'value', namespace)), str(tag.get('value')))

    # =========================================================================
    # CATALOG
    # =========================================================================

    def load_catalog(
        self,
        overlay_path: Optional[Path] = None,
        strict_signals: bool = False,
        use_cache: bool = True
    ) -> ReferenceCatalog:
        """
        Load references and build an immutable catalog snapshot.

        Args:
            overlay_path: Optional directory of user references
            strict_signals: Fail on decision-rule signal keys no tag or
                            keyword provides
            use_cache: Whether to reuse already-loaded system references

        Returns:
            ReferenceCatalog
        """
        references = self.load_all(use_cache=use_cache)
        if overlay_path is not None:
            references = self.merge_overlay(references, self.load_overlay(overlay_path))

        ordered = sorted(references.values(), key=lambda r: r.reference_id)
        return ReferenceCatalog(ordered, strict_signals=strict_signals)

    def get_reference(self, reference_id: str) -> Optional[ReferenceDefinition]:
        """
        Get a specific reference by ID.

        Args:
            reference_id: Reference identifier

        Returns:
            ReferenceDefinition or None
        """
        references = self.load_all()
        return references.get(reference_id)

    def get_references_by_category(
        self,
        category: DocumentCategory
    ) -> dict[str, ReferenceDefinition]:
        """Get references filtered by category."""
        references = self.load_all()
        return {
            rid: ref for rid, ref in references.items()
            if ref.category == category
        }

    def validate_all(self) -> list[str]:
        """
        Validate all reference definitions.

        Returns:
            List of validation error messages (empty if all valid)
        """
        errors = []
        references = self.load_all(use_cache=False)

        # Later files win at load time, so report what they replaced
        for rid, path in self._duplicate_ids:
            errors.append(f"{rid}: duplicate reference_id in {path}")

        file_types: dict[str, str] = {}
        for rid, ref in references.items():
            # Display names drive the fast path, so they must be unique
            if ref.file_type in file_types:
                errors.append(
                    f"{rid}: file_type '{ref.file_type}' already used by "
                    f"{file_types[ref.file_type]}"
                )
            file_types[ref.file_type] = rid

            try:
                compile_reference(ref)
            except re.error as e:
                errors.append(f"{rid}: invalid pattern: {e}")

            if not ref.applicable_contexts:
                errors.append(f"{rid}: no applicable contexts")

        known = ReferenceCatalog(
            [r for r in references.values()], strict_signals=False
        ).find_unknown_rule_signals()
        for rid, keys in known.items():
            errors.append(f"{rid}: decision rules name unknown signals {keys}")

        return errors

    def clear_cache(self) -> None:
        """Clear the references cache."""
        self._references_cache = None


__all__ = ['ReferenceLoader']
