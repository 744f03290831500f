# Path: docref/constants.py
"""
System-Wide Constants for docref (Document Reference Resolution)

Central repository for all constant values used across the system.
NO HARDCODED VALUES in module code - all constants defined here.

Constants are organized by category:
- AI Contexts
- Document Categories
- Tag Namespaces
- Decision Rule Actions
- Output Formats
- Scoring Weights
- Resolution Defaults
- Prompt Formatting
- Catalog Layout
"""

from enum import Enum
from typing import Final


# ==============================================================================
# AI CONTEXTS
# ==============================================================================

class AIContext(str, Enum):
    """
    AI features that consume references.

    Each context gets a different formatting depth from the prompt formatter.
    """
    CLASSIFICATION = 'classification'
    SUMMARIZATION = 'summarization'
    FILING = 'filing'
    EXTRACTION = 'extraction'
    CHAT = 'chat'
    CHECKLIST = 'checklist'
    MEETING = 'meeting'


# ==============================================================================
# DOCUMENT CATEGORIES
# ==============================================================================

class DocumentCategory(str, Enum):
    """Document categories matching the application taxonomy."""
    APPRAISALS = 'Appraisals'
    PLANS = 'Plans'
    INSPECTIONS = 'Inspections'
    PROFESSIONAL_REPORTS = 'Professional Reports'
    KYC = 'KYC'
    LOAN_TERMS = 'Loan Terms'
    LEGAL_DOCUMENTS = 'Legal Documents'
    PROJECT_DOCUMENTS = 'Project Documents'
    FINANCIAL_DOCUMENTS = 'Financial Documents'
    INSURANCE = 'Insurance'
    COMMUNICATIONS = 'Communications'
    WARRANTIES = 'Warranties'
    PHOTOGRAPHS = 'Photographs'
    OTHER = 'Other'


class TargetLevel(str, Enum):
    """Level of the folder a document is filed into."""
    CLIENT = 'client'
    PROJECT = 'project'


class ReferenceSource(str, Enum):
    """Who authored a reference."""
    SYSTEM = 'system'
    USER = 'user'


# ==============================================================================
# TAGS AND RULES
# ==============================================================================

class TagNamespace(str, Enum):
    """
    Tag namespaces forming the discovery taxonomy.

    context: which AI operation the reference serves
    signal:  document indicators (rics-branding, financial-tables)
    domain:  industry area (property-finance, construction, kyc)
    type:    direct type match (most specific)
    trigger: compound signals joined with '+' (financial+legal)
    """
    CONTEXT = 'context'
    SIGNAL = 'signal'
    DOMAIN = 'domain'
    TYPE = 'type'
    TRIGGER = 'trigger'


class RuleAction(str, Enum):
    """What a firing decision rule does to a candidate."""
    INCLUDE = 'include'
    BOOST = 'boost'
    REQUIRE = 'require'


class RuleEmphasis(str, Enum):
    """Emphasis of an identification rule (formerly a PRIMARY:/CRITICAL: prefix)."""
    PRIMARY = 'primary'
    CRITICAL = 'critical'
    STANDARD = 'standard'


class OutputFormat(str, Enum):
    """Shape of the resolution output."""
    FULL = 'full'
    COMPACT = 'compact'
    MINIMAL = 'minimal'


# Separator for compound trigger tags ("insurance+policy-terms")
TRIGGER_SEPARATOR: Final[str] = '+'


# ==============================================================================
# SCORING WEIGHTS
# ==============================================================================

SCORE_DIRECT_TYPE_MATCH: Final[float] = 20.0
SCORE_FILENAME_PATTERN: Final[float] = 15.0
SCORE_CATEGORY_MATCH: Final[float] = 8.0
SCORE_KEYWORD: Final[float] = 1.0

# Points per unit of tag weight, by namespace
NAMESPACE_WEIGHTS: Final[dict[TagNamespace, float]] = {
    TagNamespace.TYPE: 20.0,
    TagNamespace.TRIGGER: 8.0,
    TagNamespace.CONTEXT: 5.0,
    TagNamespace.SIGNAL: 4.0,
    TagNamespace.DOMAIN: 3.0,
}

DEFAULT_TAG_WEIGHT: Final[float] = 1.0

# include/require rules add priority * this
SCORE_DECISION_RULE_BASE: Final[float] = 3.0

# boost rules multiply by 1 + priority * this
BOOST_FACTOR_PER_PRIORITY: Final[float] = 0.05

MIN_RULE_PRIORITY: Final[int] = 1
MAX_RULE_PRIORITY: Final[int] = 10

# Rules at or above this priority count as PRIMARY evidence in tie-breaks
PRIMARY_RULE_PRIORITY: Final[int] = 9

SCORE_DECIMALS: Final[int] = 4


# ==============================================================================
# RESOLUTION DEFAULTS
# ==============================================================================

DEFAULT_MAX_RESULTS: Final[int] = 12
DEFAULT_CACHE_MAX_ENTRIES: Final[int] = 512

# Batch resolution asks each document for this many times max_results
BATCH_CANDIDATE_MULTIPLIER: Final[int] = 2

# Filename tokens shorter than this are not used as derived signals
MIN_SIGNAL_TOKEN_LENGTH: Final[int] = 2

EXTENSION_SIGNAL_SUFFIX: Final[str] = '-extension'

# Decision rule conditions are shortened to this length in match reasons
REASON_CONDITION_LENGTH: Final[int] = 60


# ==============================================================================
# PROMPT FORMATTING
# ==============================================================================

# Per-context limits on how much of a reference is rendered
CLASSIFICATION_KEYWORDS: Final[int] = 15
CLASSIFICATION_TERMS: Final[int] = 5
SUMMARY_KEY_RULES: Final[int] = 3
FILING_DISAMBIGUATION: Final[int] = 2
CHAT_TERMS: Final[int] = 3
CHECKLIST_KEYWORDS: Final[int] = 10
CHECKLIST_PRIMARY_RULES: Final[int] = 2


# ==============================================================================
# CATALOG LAYOUT
# ==============================================================================

REFERENCES_SUBDIR: Final[str] = 'references'
YAML_EXTENSIONS: Final[tuple[str, ...]] = ('*.yaml', '*.yml')


__all__ = [
    'AIContext',
    'DocumentCategory',
    'TargetLevel',
    'ReferenceSource',
    'TagNamespace',
    'RuleAction',
    'RuleEmphasis',
    'OutputFormat',
    'TRIGGER_SEPARATOR',
    'SCORE_DIRECT_TYPE_MATCH',
    'SCORE_FILENAME_PATTERN',
    'SCORE_CATEGORY_MATCH',
    'SCORE_KEYWORD',
    'NAMESPACE_WEIGHTS',
    'DEFAULT_TAG_WEIGHT',
    'SCORE_DECISION_RULE_BASE',
    'BOOST_FACTOR_PER_PRIORITY',
    'MIN_RULE_PRIORITY',
    'MAX_RULE_PRIORITY',
    'PRIMARY_RULE_PRIORITY',
    'SCORE_DECIMALS',
    'DEFAULT_MAX_RESULTS',
    'DEFAULT_CACHE_MAX_ENTRIES',
    'BATCH_CANDIDATE_MULTIPLIER',
    'MIN_SIGNAL_TOKEN_LENGTH',
    'EXTENSION_SIGNAL_SUFFIX',
    'REASON_CONDITION_LENGTH',
    'CLASSIFICATION_KEYWORDS',
    'CLASSIFICATION_TERMS',
    'SUMMARY_KEY_RULES',
    'FILING_DISAMBIGUATION',
    'CHAT_TERMS',
    'CHECKLIST_KEYWORDS',
    'CHECKLIST_PRIMARY_RULES',
    'REFERENCES_SUBDIR',
    'YAML_EXTENSIONS',
]
