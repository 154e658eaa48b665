"""
hydrocalc Physical Constants and Numerical Tolerances

Constants used throughout the hydrostatics engine. All values SI.
"""

# ==================== Physical Constants ====================

# Water properties
SEAWATER_DENSITY_KG_M3 = 1025.0  # kg/m³ at 15°C, 35 ppt salinity

# Unit conversions
KG_PER_TONNE = 1000.0
CM_PER_M = 100.0
RAD_TO_DEG = 57.29577951308232  # 180/π

# ==================== Numerical Tolerances ====================

# Equal-spacing check for Simpson's rule (1 mm)
SPACING_TOLERANCE_M = 0.001

# Draft coincides with a waterline (absolute, m)
WATERLINE_MATCH_TOLERANCE_M = 0.0001

# Draft coincides with highest active waterline (relative, 0.1%)
WATERLINE_MATCH_RELATIVE = 0.001

# Threshold comparisons treat values this close (relative) as equal
CRITERIA_RELATIVE_TOLERANCE = 1e-9

# ==================== Template Loading ====================

# Template loadcase places KG at this fraction of design draft
TEMPLATE_KG_DRAFT_FRACTION = 0.5
