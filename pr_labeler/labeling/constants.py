"""Fixed label names produced by the classifiers."""

SIZE_SMALL = "size/small"
SIZE_MEDIUM = "size/medium"
SIZE_LARGE = "size/large"
SIZE_XLARGE = "size/xlarge"
SIZE_XXLARGE = "size/xxlarge"

# Ordered smallest to largest
SIZE_LABELS = [SIZE_SMALL, SIZE_MEDIUM, SIZE_LARGE, SIZE_XLARGE, SIZE_XXLARGE]
SIZE_NAMES = [label.split("/", 1)[1] for label in SIZE_LABELS]

COMPLEXITY_MEDIUM = "complexity/medium"
COMPLEXITY_HIGH = "complexity/high"

RISK_HIGH = "risk/high"
RISK_MEDIUM = "risk/medium"

LARGE_FILES = "auto/large-files"
TOO_MANY_LINES = "auto/too-many-lines"
EXCESSIVE_CHANGES = "auto/excessive-changes"
TOO_MANY_FILES = "auto/too-many-files"

# Fixed emission order
VIOLATION_LABELS = [LARGE_FILES, TOO_MANY_LINES, EXCESSIVE_CHANGES, TOO_MANY_FILES]

UNKNOWN_RISK_REASON = "unknown risk condition"
