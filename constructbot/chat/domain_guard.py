"""
Construction domain guard.

Decides whether a free-text query belongs to the construction domain using a
fixed vocabulary (case-insensitive substring match) backed by a handful of
word-stem patterns. There is no scoring and no conversation context; each
query is judged on its own text. Anything that is not a non-empty string is
out of domain.
"""

import re

CONSTRUCTION_KEYWORDS: tuple[str, ...] = (
    # Core construction terms
    "construction", "building", "contractor", "subcontractor", "general contractor",
    "construction management", "project management", "site management",
    "construction site",
    # Engineering & architecture
    "civil engineering", "structural engineering", "architecture",
    "architectural design", "structural design", "engineering drawings",
    "blueprints", "CAD", "AutoCAD", "BIM", "building information modeling",
    "3D modeling", "design specifications",
    # Indian standards & codes
    "IS code", "IS 456", "IS 800", "IS 1893", "IS 875", "IS 10262", "IS 383",
    "IS 2062", "NBC", "National Building Code", "BIS", "Bureau of Indian Standards",
    "CPWD", "PWD", "IGBC", "GRIHA", "LEED India", "building bylaws",
    "development control rules",
    # Materials
    "concrete", "steel", "rebar", "TMT bars", "reinforcement", "cement", "OPC", "PPC",
    "mortar", "aggregate", "sand", "coarse aggregate", "fine aggregate",
    "lumber", "wood", "timber", "teak", "sal", "deodar", "framing", "drywall",
    "gypsum", "insulation", "roofing", "tiles", "flooring", "foundation", "masonry",
    "brick", "stone", "glass", "aluminum", "copper", "piping", "plumbing",
    "electrical", "wiring", "HVAC", "ductwork", "ventilation", "air conditioning",
    "heating",
    # Safety & regulations
    "safety", "construction safety", "safety regulations", "safety equipment",
    "hard hat", "safety vest", "fall protection", "scaffolding", "harness",
    "safety protocols", "workplace safety", "hazard", "risk assessment",
    "BOCW act", "factories act", "contract labour act", "environmental clearance",
    "pollution control board",
    # Techniques & equipment
    "excavation", "grading", "demolition", "renovation", "remodeling",
    "carpentry", "welding", "soldering", "painting", "finishing",
    "crane", "bulldozer", "excavator", "backhoe", "loader", "dump truck",
    "heavy machinery", "equipment", "tools", "power tools", "hand tools",
    "ready mix concrete", "precast", "prefabrication",
    # Project management & estimation
    "cost estimation", "budget", "bidding", "tender", "proposal", "contract",
    "schedule", "timeline", "critical path", "gantt chart", "milestone",
    "deliverable", "resource planning", "labor", "workforce", "productivity",
    "efficiency", "rate analysis", "CPWD rates", "PWD rates", "BOQ",
    "bill of quantities", "GST", "goods and services tax", "VAT", "material rates",
    # Specialized areas
    "geotechnical", "soil", "foundation design", "load bearing", "structural load",
    "seismic", "earthquake", "seismic zone", "wind load", "monsoon",
    "waterproofing", "drainage", "utilities", "infrastructure", "bridge", "tunnel",
    "road", "highway", "pavement", "residential", "commercial", "industrial",
    "institutional", "green building", "sustainable construction",
    "energy efficiency",
    # Regional & climate
    "tropical climate", "monsoon construction", "coastal construction", "CRZ",
    "coastal regulation zone", "earthquake resistant", "cyclone resistant",
    "flood resistant", "thermal comfort", "natural ventilation",
    # Site practice
    "mason", "mistri", "mazdoor", "skilled labor", "unskilled labor", "gang work",
    "piece rate", "daily wage", "material handling", "material storage",
    "site supervision", "quality control", "quality assurance",
    # Processes & standards
    "surveying", "site preparation", "layout", "staking", "elevation", "grade",
    "specification", "standard", "code compliance", "building permit", "approval",
    "environmental impact", "sustainability", "waste management", "recycling",
    "municipal corporation", "town planning", "urban development",
)

# Lower-cased once, duplicates dropped, order kept
_KEYWORDS = tuple(dict.fromkeys(keyword.lower() for keyword in CONSTRUCTION_KEYWORDS))

CONSTRUCTION_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\bbuild\w*"),
    re.compile(r"\bconstruct\w*"),
    re.compile(r"\bengineer\w*"),
    re.compile(r"\bdesign\w*"),
    re.compile(r"\barchitect\w*"),
    re.compile(r"\bproject\s+manag\w*"),
    re.compile(r"\bcost\s+estimat\w*"),
    re.compile(r"\bsafety\s+regulat\w*"),
)


def has_construction_keyword(text: str) -> bool:
    """Return True if any vocabulary term occurs in the text."""
    lowered = text.lower()
    return any(keyword in lowered for keyword in _KEYWORDS)


def matches_construction_pattern(text: str) -> bool:
    """Return True if any word-stem pattern matches the text."""
    lowered = text.lower()
    return any(pattern.search(lowered) for pattern in CONSTRUCTION_PATTERNS)


def is_construction_query(query: object) -> bool:
    """Classify a query as construction-related or not.

    Args:
        query: Raw user input; anything other than a non-empty string fails closed

    Returns:
        bool: True when the query is in the construction domain
    """
    if not isinstance(query, str) or not query:
        return False

    return has_construction_keyword(query) or matches_construction_pattern(query)
