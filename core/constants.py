"""
Constants and signature tables for manual structure inference.
"""

# Page categories in declaration order (used for deterministic tie-breaks)
PAGE_CATEGORIES = [
    'title',
    'toc',
    'preface',
    'main',
    'appendix',
    'glossary',
    'blank',
    'unknown',
]

# Categories that count as front matter
FRONT_MATTER_CATEGORIES = ('title', 'toc', 'preface', 'blank')

# Only these categories are searchable at query time
SEARCHABLE_CATEGORIES = ('main',)

# Regex signatures per category: (pattern, weight)
# Patterns are compiled with IGNORECASE | MULTILINE
CATEGORY_SIGNATURES = {
    'title': [
        (r'copyright|\(c\)\s*\d{4}|©', 25),
        (r'all rights reserved', 25),
        (r'\bisbn\b', 20),
        (r'\bpublished by\b|\bpublisher\b', 15),
        (r'\b(?:first|second|third|\d+(?:st|nd|rd|th))\s+edition\b|\bedition\b', 15),
        (r'\b(?:manual|handbook|guide|code|standard)\b', 10),
        (r'\b(?:revision|version|rev\.)\s*[\d.]+', 10),
        (r'\bprinted in\b', 10),
    ],
    'toc': [
        (r'table of contents', 40),
        (r'^\s*contents\s*$', 35),
        (r'^\s*(?:list of (?:figures|tables))\s*$', 20),
        (r'^\s*chapter\s+\d+\b.*\d+\s*$', 10),
    ],
    'preface': [
        (r'^\s*preface\b', 35),
        (r'^\s*foreword\b', 35),
        (r'\backnowledg(?:e)?ments?\b', 25),
        (r'\babout this (?:manual|guide|book|document|edition)\b', 25),
        (r'\bhow to use this (?:manual|guide|book|document)\b', 25),
        (r'\bintended audience\b|\bwho should read\b', 20),
        (r'\b(?:summary of|revision) (?:changes|history)\b', 15),
    ],
    'main': [
        (r'^\s*(?:section\s+)?\d+(?:\.\d+)+\s+[A-Z]', 20),
        (r'^\s*(?:chapter|section|article)\s+\d+\b', 15),
        (r'\b(?:shall|must)\b', 10),
        (r'\b(?:figure|fig\.|table)\s+\d+', 10),
        (r'\b(?:warning|caution|danger|note):', 10),
    ],
    'appendix': [
        (r'^\s*appendix\s+[A-Z0-9]\b', 40),
        (r'\bappendix\b', 20),
        (r'\bannex\s+[A-Z0-9]\b', 20),
    ],
    'glossary': [
        (r'^\s*glossary\b', 40),
        (r'\bterms and definitions\b|\bdefinitions of terms\b', 25),
        (r'^\s*index\s*$', 30),
        (r'^\s*abbreviations\b', 20),
    ],
}

# Domain vocabulary whose density signals substantive technical content
TECHNICAL_TERMS = [
    'voltage', 'current', 'circuit', 'conductor', 'ground', 'grounding',
    'breaker', 'ampere', 'amp', 'watt', 'ohm', 'insulation', 'wiring',
    'cable', 'panel', 'switch', 'outlet', 'receptacle', 'transformer',
    'installation', 'install', 'pressure', 'temperature', 'valve', 'pipe',
    'fitting', 'flow', 'duct', 'load', 'capacity', 'rated', 'rating',
    'clearance', 'torque', 'specification', 'requirement', 'requirements',
    'procedure', 'equipment', 'system', 'component', 'assembly', 'inverter',
    'module', 'battery', 'fuse', 'terminal', 'minimum', 'maximum', 'mm',
    'kw', 'kv', 'psi', 'phase', 'neutral', 'bonding', 'enclosure',
]

# Classifier bonuses and thresholds
CLASSIFIER_BONUSES = {
    'toc_number_density': 20,      # Short numeric tokens dominate the page
    'toc_dotted_leaders': 25,      # "..... 12"
    'toc_numbered_lines': 20,      # >= 5 lines ending in a bare number
    'main_term_density_cap': 30,   # Cap on technical-term bonus
    'main_term_density_factor': 5, # Points per term per 100 words
    'main_large_page': 15,         # Character count above threshold
    'printed_roman_preface': 15,   # Roman printed number suggests front matter
    'printed_arabic_main': 10,     # Arabic printed number suggests body
}

CLASSIFIER_THRESHOLDS = {
    'blank_min_chars': 50,
    'confidence_floor': 30,
    'late_page_floor': 10,
    'late_page_min_chars': 200,
    'late_page_confidence': 50,
    'title_max_index': 3,
    'title_max_chars': 1500,
    'preface_max_index': 20,
    'toc_number_density': 0.15,
    'toc_numbered_lines': 5,
    'main_large_page_chars': 1500,
}

# Printed page number detection
PAGE_NUMBER_LIMITS = {
    'roman_max_length': 4,
    'roman_max_value': 30,
    'arabic_max_value': 2000,
    'edge_lines': 3,
}

ROMAN_NUMERAL_VALUES = {
    'i': 1,
    'v': 5,
    'x': 10,
    'l': 50,
    'c': 100,
    'd': 500,
    'm': 1000,
}

# Content-start resolution
SUBSTANTIAL_CONTENT_CHARS = 500

# TOC extraction limits
TOC_LIMITS = {
    'min_line_chars': 3,
    'min_title_chars': 3,
    'max_page': 500,
}

# Section heading detection
SECTION_HEADING_LINES = 5
SECTION_HEADING_PATTERN = r'^(?:Section\s+)?(\d+(?:\.\d+)*)\s+(.+)'

# Search engine stages and limits
SEARCH_STAGES = ['exact', 'word', 'partial']

DEFAULT_SEARCH_PARAMS = {
    'max_results': 5,
    'max_per_document': 3,
    'min_token_length': 3,
    'partial_trim_chars': 2,
    'partial_min_stem': 4,
    'snippet_before': 100,
    'snippet_after': 200,
}

# Ingestion
DEFAULT_INGESTION_PARAMS = {
    'batch_size': 5,
    'render_dpi': 150,
}
