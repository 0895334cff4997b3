# src/toolschema_kit/observability/names.py

"""Standard metric names for toolschema-kit observability.

Use these constants instead of hardcoded strings.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Import Metrics
# ============================================================================

# Duration
SCHEMA_IMPORT_DURATION = "schema_import_duration"

# Counters (labelled with the detected format)
SCHEMA_IMPORTS_TOTAL = "schema_imports_total"
SCHEMA_IMPORT_ERRORS_TOTAL = "schema_import_errors_total"


# ============================================================================
# Validation Metrics
# ============================================================================

# Duration
SCHEMA_VALIDATION_DURATION = "schema_validation_duration"

# Counters (labelled with the issue kind)
SCHEMA_VALIDATION_ISSUES_TOTAL = "schema_validation_issues_total"
